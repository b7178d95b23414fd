"""Elastic tabstop writer for column-aligned plain text.

Text is buffered until flush(). Each line is split into cells on tab
characters; every cell except the last one on a line belongs to a column,
and a column's width is decided by the widest cell among the consecutive
lines that have a cell in that column (a "column block"). With the default
tab padding, widths round up to the next multiple of ``tabwidth`` and
padding is written as tabs, so the output still lines up in a terminal and
stays easy to split with ``cut -f``.
"""


class TabWriter(object):
    def __init__(self, out, minwidth=0, tabwidth=8, padding=2, padchar="\t"):
        self.out = out
        self.minwidth = minwidth
        self.tabwidth = tabwidth
        self.padding = padding
        self.padchar = padchar
        self._buf = []

    def write(self, text):
        self._buf.append(text)
        return len(text)

    def flush(self):
        """Align and write everything buffered so far, then flush ``out``.

        Errors from the underlying stream propagate to the caller.
        """
        text = "".join(self._buf)
        self._buf = []
        self._lines = [line.split("\t") for line in text.split("\n")]
        self._widths = []
        self._pieces = []
        self._format(0, len(self._lines))
        self.out.write("".join(self._pieces))
        self.out.flush()

    def _format(self, line0, line1):
        column = len(self._widths)
        this = line0
        while this < line1:
            if column >= len(self._lines[this]) - 1:
                this += 1
                continue
            # this line has a cell in the current column: write what came
            # before it, then size the block of lines that share the column
            self._write_lines(line0, this)
            line0 = this
            width = self.minwidth
            while this < line1 and column < len(self._lines[this]) - 1:
                width = max(width, len(self._lines[this][column]) + self.padding)
                this += 1
            self._widths.append(width)
            self._format(line0, this)
            self._widths.pop()
            line0 = this
        self._write_lines(line0, line1)

    def _write_lines(self, line0, line1):
        for i in range(line0, line1):
            line = self._lines[i]
            for j, cell in enumerate(line):
                self._pieces.append(cell)
                if j < len(self._widths) and j < len(line) - 1:
                    self._pad(len(cell), self._widths[j])
            if i + 1 < len(self._lines):
                self._pieces.append("\n")

    def _pad(self, textw, cellw):
        if self.padchar == "\t":
            if self.tabwidth == 0:
                return
            cellw = -(-cellw // self.tabwidth) * self.tabwidth
            n = cellw - textw
            self._pieces.append("\t" * -(-n // self.tabwidth))
        else:
            self._pieces.append(self.padchar * (cellw - textw))
