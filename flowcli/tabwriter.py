"""Elastic tab-stop text alignment for tabular output."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class _Cell:
    text: str

    @property
    def width(self) -> int:
        return len(self.text)


class TabWriter:
    """Aligns tab-terminated cells into columns.

    Text is buffered with ``write`` and formatted on ``flush``. When the pad
    character is a tab, cells are always left aligned.
    """

    def __init__(self, minwidth=0, tabwidth=8, padding=1, padchar="\t", align_right=False):
        self.minwidth = minwidth
        self.tabwidth = tabwidth
        self.padding = padding
        self.padchar = padchar
        self.align_right = align_right and padchar != "\t"
        self._buffer: list[str] = []
        self._output: list[str] = []

    def write(self, text: str) -> int:
        self._buffer.append(text)
        return len(text)

    def flush(self) -> None:
        text = "".join(self._buffer)
        self._buffer.clear()
        if not text:
            return
        lines = [[_Cell(part) for part in line.split("\t")] for line in text.split("\n")]
        widths: list[int] = []
        out: list[str] = []
        self._format(lines, widths, out, 0, len(lines))
        self._output.append("".join(out))

    def getvalue(self) -> str:
        return "".join(self._output)

    def _format(self, lines, widths, out, line0, line1) -> None:
        column = len(widths)
        this = line0
        while this < line1:
            if column >= len(lines[this]) - 1:
                this += 1
                continue
            self._write_lines(lines, widths, out, line0, this)
            line0 = this
            width = self.minwidth
            while this < line1 and column < len(lines[this]) - 1:
                width = max(width, lines[this][column].width + self.padding)
                this += 1
            widths.append(width)
            self._format(lines, widths, out, line0, this)
            widths.pop()
            line0 = this
        self._write_lines(lines, widths, out, line0, line1)

    def _padding(self, text_width: int, cell_width: int) -> str:
        if self.padchar == "\t":
            if self.tabwidth == 0:
                return ""
            cell_width = -(-cell_width // self.tabwidth) * self.tabwidth
            missing = cell_width - text_width
            return "\t" * -(-missing // self.tabwidth)
        return self.padchar * (cell_width - text_width)

    def _write_lines(self, lines, widths, out, line0, line1) -> None:
        for index in range(line0, line1):
            for j, cell in enumerate(lines[index]):
                in_column = j < len(widths)
                pad = self._padding(cell.width, widths[j]) if in_column else ""
                if self.align_right and cell.text:
                    out.append(pad + cell.text)
                else:
                    out.append(cell.text + pad)
            if index + 1 < len(lines):
                out.append("\n")


def create_tab_writer() -> TabWriter:
    """Return the writer used for all human-readable command output."""
    return TabWriter(0, 8, 1, "\t", True)