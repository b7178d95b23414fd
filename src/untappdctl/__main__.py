import sys

from untappdctl.cli import main

sys.exit(main())
