"""
Page geometry, layout cursor and content blocks for the strategy report.

Blocks are plain data. The engine in reporting.engine decides how each one
is drawn and how far it moves the cursor.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

# Page-break thresholds, measured up from the bottom edge of the page
BANNER_BREAK = 30
CONTENT_BREAK = 35
ROW_BREAK = 20

# Vertical advance per wrapped line, as a multiple of the font size
LINE_FACTOR = 0.4

# Palette (shared with the dashboard)
EMERALD = "#10b981"
BLUE = "#3b82f6"
DARK_TEXT = "#1e293b"
LIGHT_TEXT = "#64748b"
GREEN = "#16a34a"
WHITE = "#ffffff"


@dataclass(frozen=True)
class PageGeometry:
    """Physical page layout in millimetres."""
    width: float = 210.0
    height: float = 297.0
    margin: float = 15.0

    @property
    def content_width(self) -> float:
        return self.width - 2 * self.margin

    @property
    def bottom_limit(self) -> float:
        """Lowest y any drawn content may reach."""
        return self.height - self.margin

    @classmethod
    def a4_portrait(cls) -> "PageGeometry":
        return cls()


@dataclass
class LayoutCursor:
    """Current writing position: vertical offset on the current page."""
    y: float
    page: int = 1

    def advance(self, dy: float) -> float:
        self.y += dy
        return self.y

    def reset(self, margin: float) -> None:
        self.page += 1
        self.y = margin


# ── content blocks ──


@dataclass
class Banner:
    """Colored section header bar with a bold white title."""
    title: str
    height: float = 8.0
    advance: float = 12.0
    color: str = EMERALD


@dataclass
class TextRun:
    """Wrapped paragraph."""
    text: str
    size: float = 11
    bold: bool = False
    color: str = DARK_TEXT
    space_after: float = 3.0
    max_width: Optional[float] = None
    indent: float = 0.0


@dataclass
class Heading:
    """Single bold line followed by a fixed advance."""
    text: str
    size: float = 11
    advance: float = 8.0
    color: str = DARK_TEXT


@dataclass
class LabeledMetric:
    label: str
    value: str
    description: str = ""


@dataclass
class MetricGrid:
    """LabeledMetrics laid out in boxed cells, `columns` per row."""
    metrics: list[LabeledMetric]
    columns: int = 2
    row_height: float = 28.0
    row_gap: float = 7.0
    column_gap: float = 5.0


@dataclass
class BulletList:
    items: list[str]
    marker: str = "\u2022"
    size: float = 9
    space_after: float = 4.0
    color: str = DARK_TEXT


@dataclass
class KeyValueTable:
    """Label/value rows; values are bold and accent-colored."""
    rows: list[tuple[str, str]]
    value_offset: float = 65.0
    row_height: float = 6.0
    size: float = 10
    value_color: str = BLUE


@dataclass
class RiskItem:
    name: str
    description: str
    mitigation: str


@dataclass
class RiskList:
    risks: list[RiskItem]
    accent_color: str = "#fef3c7"


@dataclass
class Timeline:
    """Phase labels with wrapped descriptions in a second column."""
    entries: list[tuple[str, str]]
    label_width: float = 40.0
    size: float = 9
    space_after: float = 6.0


@dataclass
class Spacer:
    height: float


@dataclass
class PageBreak:
    pass


@dataclass
class CoverPage:
    title: str
    subtitle: str
    heading: str
    intro: str
    generated_on: date = field(default_factory=date.today)
    confidentiality: str = "Confidential - Investment Analysis"


@dataclass
class ClosingPage:
    headline: str
    summary: str
    call_to_action: str
    generated_on: date = field(default_factory=date.today)
    confidentiality: str = "Confidential Investment Analysis"


ContentBlock = (
    Banner | TextRun | Heading | MetricGrid | BulletList | KeyValueTable
    | RiskList | Timeline | Spacer | PageBreak | CoverPage | ClosingPage
)
