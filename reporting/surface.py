"""
Drawing surface for the strategy report.

ReportPDF is a thin FPDF subclass: it draws with fpdf2 and keeps a per-page
log of every draw call so a rendered document can be inspected without
parsing the PDF.
"""

from dataclasses import dataclass
from typing import Optional, Union

from fpdf import FPDF

from reporting.layout import DARK_TEXT, LINE_FACTOR, PageGeometry

FONT = "Helvetica"

# 1pt in mm
PT_TO_MM = 0.3528


def safe_text(text):
    """Sanitize text for latin-1 compatible PDF fonts."""
    if not isinstance(text, str):
        text = str(text)
    # Replace common Unicode characters with latin-1 safe equivalents
    text = text.replace("\u2014", " - ")   # em-dash
    text = text.replace("\u2013", "-")      # en-dash
    text = text.replace("\u2018", "'")      # left single quote
    text = text.replace("\u2019", "'")      # right single quote
    text = text.replace("\u201c", '"')      # left double quote
    text = text.replace("\u201d", '"')      # right double quote
    text = text.replace("\u2026", "...")     # ellipsis
    text = text.replace("\u2022", "-")      # bullet
    text = text.replace("\u2713", "+")      # check mark
    text = text.replace("\u2139", "i")      # information source
    try:
        text.encode("latin-1")
        return text
    except UnicodeEncodeError:
        return text.encode("latin-1", errors="replace").decode("latin-1")


def hex_to_rgb(color: str) -> tuple[int, int, int]:
    """'#10b981' -> (16, 185, 129)"""
    color = color.lstrip("#")
    return int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16)


@dataclass
class DrawCall:
    """One emitted drawing operation and its vertical extent on its page."""
    kind: str          # "rect", "text" or "background"
    page: int
    x: float
    top: float
    bottom: float
    text: str = ""


class ReportPDF(FPDF):

    def __init__(self, geometry: Optional[PageGeometry] = None, **kwargs):
        self.geometry = geometry or PageGeometry.a4_portrait()
        super().__init__(
            orientation="P",
            unit="mm",
            format=(self.geometry.width, self.geometry.height),
            **kwargs,
        )
        # The layout engine owns pagination
        self.set_auto_page_break(auto=False)
        margin = self.geometry.margin
        self.set_margins(margin, margin, margin)
        self.pages_log: list[list[DrawCall]] = []

    @property
    def page_count(self) -> int:
        return len(self.pages_log)

    # ── metrics ──

    @staticmethod
    def line_height(size: float) -> float:
        return size * LINE_FACTOR

    @staticmethod
    def descent(size: float) -> float:
        return size * PT_TO_MM * 0.25

    def text_extent(self, y: float, line_count: int, size: float) -> tuple[float, float]:
        """Top and bottom of `line_count` lines whose first baseline is `y`."""
        top = y - size * PT_TO_MM * 0.75
        bottom = y + (max(line_count, 1) - 1) * self.line_height(size) + self.descent(size)
        return top, bottom

    def split_text(self, text: str, width: float, size: float = 11, bold: bool = False) -> list[str]:
        """Wrap text to `width` using fpdf2's own line breaking."""
        self.set_font(FONT, "B" if bold else "", size)
        lines = self.multi_cell(
            width, self.line_height(size), safe_text(text),
            dry_run=True, output="LINES",
        )
        return list(lines) or [""]

    # ── drawing ──

    def new_page(self) -> None:
        self.add_page()
        self.pages_log.append([])

    def _record(self, call: DrawCall) -> None:
        self.pages_log[-1].append(call)

    def fill_rect(self, x, y, w, h, color: str, background: bool = False) -> None:
        self.set_fill_color(*hex_to_rgb(color))
        self.rect(x, y, w, h, style="F")
        self._record(DrawCall("background" if background else "rect", self.page_count, x, y, y + h))

    def outline_rect(self, x, y, w, h, color: str) -> None:
        self.set_draw_color(*hex_to_rgb(color))
        self.rect(x, y, w, h, style="D")
        self._record(DrawCall("rect", self.page_count, x, y, y + h))

    def draw_text(
        self,
        lines: Union[str, list[str]],
        x: float,
        y: float,
        size: float = 11,
        bold: bool = False,
        color: str = DARK_TEXT,
        align: str = "left",
    ) -> None:
        """
        Draw one or more lines starting at baseline `y`.

        With align="center", `x` is the horizontal center of each line.
        """
        if isinstance(lines, str):
            lines = [lines]
        lines = [safe_text(line) for line in lines]
        self.set_font(FONT, "B" if bold else "", size)
        self.set_text_color(*hex_to_rgb(color))
        lh = self.line_height(size)
        for i, line in enumerate(lines):
            line_x = x - self.get_string_width(line) / 2 if align == "center" else x
            self.text(line_x, y + i * lh, line)
        top, bottom = self.text_extent(y, len(lines), size)
        self._record(DrawCall("text", self.page_count, x, top, bottom, "\n".join(lines)))

    def to_bytes(self) -> bytes:
        return bytes(self.output())
