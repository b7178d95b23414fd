#!/usr/bin/python

from setuptools import setup,find_packages

setup(
    name='untappdctl',
    version='0.1.0',
    license='MIT',
    description='Query and display information from Untappd APIv4',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'Programming Language :: Python :: 3',
        ],
    package_dir={'':'src'},
    packages=find_packages(where='src'),
    python_requires='>=3.7',
    install_requires=[
        'requests>=2.27',
        ],
    extras_require={
        'test': [
            'pytest',
            ],
        },
    entry_points={
        'console_scripts': [
            'untappdctl=untappdctl.cli:main',
        ],
    },
)
