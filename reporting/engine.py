"""
Paginated layout engine for the Oilseed Investment Strategy report.

Walks an ordered list of content blocks, threading a single layout cursor
through every draw call and inserting page breaks per block type:

    Banner                      break when y > height - 30
    TextRun / Heading / bullets
    metric grid rows / risks    break when y > height - 35
    table rows / timeline rows  break when y > height - 20

Independently of the thresholds, a block is also moved to a new page when
its own extent would run past height - margin. Long paragraphs flow onto
following pages line by line.

Usage:
    from reporting.engine import generate_report
    path = generate_report()
"""

import asyncio
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Sequence

from config.logging import logger
from config.settings import settings
from reporting.content import build_report_blocks
from reporting.layout import (
    BANNER_BREAK,
    BLUE,
    CONTENT_BREAK,
    DARK_TEXT,
    EMERALD,
    GREEN,
    LIGHT_TEXT,
    ROW_BREAK,
    WHITE,
    Banner,
    BulletList,
    ClosingPage,
    ContentBlock,
    CoverPage,
    Heading,
    KeyValueTable,
    LayoutCursor,
    MetricGrid,
    PageBreak,
    PageGeometry,
    RiskList,
    Spacer,
    TextRun,
    Timeline,
)
from reporting.surface import DrawCall, ReportPDF

# Risk cards: fixed body height plus a step per extra mitigation line
RISK_CARD_HEIGHT = 28.0
RISK_LINE_STEP = 4.0
# Baseline of the first mitigation line, relative to the card top
RISK_MITIGATION_OFFSET = 22.0

DATE_FORMAT = "%B %d, %Y"


class ReportGenerationError(Exception):
    """Raised when the drawing surface or the final save fails."""


@dataclass
class ReportDocument:
    """Rendered pages, each an ordered list of the draw calls emitted on it."""
    pages: list[list[DrawCall]]
    pdf: ReportPDF
    final_y: float = 0.0

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def to_bytes(self) -> bytes:
        return self.pdf.to_bytes()


def save_pdf(data: bytes, path: Path) -> Path:
    """Write the finished document in one step: temp file, then rename over `path`."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}-", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return path


@dataclass
class _LayoutContext:
    """Per-call layout state. Owned by a single render() call."""
    pdf: ReportPDF
    geometry: PageGeometry
    cursor: LayoutCursor

    def page_break(self) -> None:
        self.pdf.new_page()
        self.cursor.reset(self.geometry.margin)
        logger.debug(f"Page break -> page {self.cursor.page}")

    def ensure_room(self, threshold: float, extent: float = 0.0) -> None:
        """Break the page if y is past the threshold or `extent` below y won't fit."""
        y = self.cursor.y
        if self.at_page_top():
            return
        if y > self.geometry.height - threshold or y + extent > self.geometry.bottom_limit:
            self.page_break()

    def at_page_top(self) -> bool:
        """Cursor at the top margin of a page nothing has been drawn on."""
        return self.cursor.y <= self.geometry.margin and not self.pdf.pages_log[-1]

    def fits_fresh_page(self, extent: float) -> bool:
        return self.geometry.margin + extent <= self.geometry.bottom_limit

    def claim_fresh_page(self) -> None:
        if self.pdf.pages_log[-1]:
            self.page_break()


class ReportLayoutEngine:
    """
    Renders content blocks onto a ReportPDF surface and saves the result.

    Args:
        geometry: Page geometry (A4 portrait, 15mm margin by default)
        surface_factory: Callable building the drawing surface for one render
        saver: Callable(data, path) performing the final write
    """

    def __init__(
        self,
        geometry: Optional[PageGeometry] = None,
        surface_factory: Callable[..., ReportPDF] = ReportPDF,
        saver: Callable[[bytes, Path], object] = save_pdf,
    ):
        self.geometry = geometry or PageGeometry.a4_portrait()
        self.surface_factory = surface_factory
        self.saver = saver
        self._renderers = {
            Banner: self._draw_banner,
            TextRun: self._draw_text_run,
            Heading: self._draw_heading,
            MetricGrid: self._draw_metric_grid,
            BulletList: self._draw_bullet_list,
            KeyValueTable: self._draw_key_value_table,
            RiskList: self._draw_risk_list,
            Timeline: self._draw_timeline,
            Spacer: self._draw_spacer,
            PageBreak: self._draw_page_break,
            CoverPage: self._draw_cover_page,
            ClosingPage: self._draw_closing_page,
        }

    # ── public API ──

    def render(self, blocks: Sequence[ContentBlock]) -> ReportDocument:
        """Lay out `blocks` in order and return the paginated document."""
        unsupported = [type(b).__name__ for b in blocks if type(b) not in self._renderers]
        if unsupported:
            raise TypeError(f"Unsupported content blocks: {', '.join(unsupported)}")

        try:
            pdf = self.surface_factory(geometry=self.geometry)
            pdf.new_page()
            ctx = _LayoutContext(pdf, self.geometry, LayoutCursor(y=self.geometry.margin))
            for block in blocks:
                self._renderers[type(block)](ctx, block)
        except Exception as exc:
            logger.error(f"Report layout failed: {exc}")
            raise ReportGenerationError(f"Report layout failed: {exc}") from exc

        logger.debug(f"Draw calls per page: {[len(page) for page in pdf.pages_log]}")
        logger.info(f"Laid out {len(blocks)} blocks on {pdf.page_count} pages")
        return ReportDocument(pages=pdf.pages_log, pdf=pdf, final_y=ctx.cursor.y)

    def generate_report(
        self,
        blocks: Optional[Sequence[ContentBlock]] = None,
        output_path: Optional[Path] = None,
    ) -> Path:
        """
        Render the report and save it.

        Args:
            blocks: Content to render (defaults to the fixed strategy report)
            output_path: Destination (defaults to OUTPUT_DIR/REPORT_FILENAME)

        Returns:
            Path of the saved PDF

        Raises:
            ReportGenerationError: drawing, encoding or saving failed; nothing
                is written in that case
        """
        blocks, path = self._prepare(blocks, output_path)
        data = self._serialize(self.render(blocks))
        try:
            self.saver(data, path)
        except Exception as exc:
            raise self._save_failed(path, exc) from exc
        logger.info(f"Saved report to {path}")
        return path

    async def agenerate_report(
        self,
        blocks: Optional[Sequence[ContentBlock]] = None,
        output_path: Optional[Path] = None,
    ) -> Path:
        """Async variant of generate_report(); only the final save is awaited."""
        blocks, path = self._prepare(blocks, output_path)
        data = self._serialize(self.render(blocks))
        try:
            await asyncio.to_thread(self.saver, data, path)
        except Exception as exc:
            raise self._save_failed(path, exc) from exc
        logger.info(f"Saved report to {path}")
        return path

    # ── helpers ──

    def _prepare(self, blocks, output_path) -> tuple[Sequence[ContentBlock], Path]:
        if blocks is None:
            blocks = build_report_blocks()
        path = Path(output_path) if output_path else settings.OUTPUT_DIR / settings.REPORT_FILENAME
        logger.info(f"Generating report: {len(blocks)} blocks -> {path}")
        return blocks, path

    @staticmethod
    def _serialize(document: ReportDocument) -> bytes:
        try:
            return document.to_bytes()
        except Exception as exc:
            logger.error(f"PDF encoding failed: {exc}")
            raise ReportGenerationError(f"PDF encoding failed: {exc}") from exc

    @staticmethod
    def _save_failed(path: Path, exc: Exception) -> ReportGenerationError:
        logger.error(f"Could not save report to {path}: {exc}")
        return ReportGenerationError(f"Could not save report to {path}: {exc}")

    def _flow_lines(self, ctx, lines, x, size, bold=False, color=DARK_TEXT):
        """Draw wrapped lines at the cursor, continuing on new pages as needed."""
        pdf, cursor = ctx.pdf, ctx.cursor
        lh = pdf.line_height(size)
        last_baseline = ctx.geometry.bottom_limit - pdf.descent(size)

        ctx.ensure_room(CONTENT_BREAK, pdf.descent(size))
        remaining = list(lines)
        while remaining:
            fit = max(1, int((last_baseline - cursor.y) // lh) + 1)
            chunk, remaining = remaining[:fit], remaining[fit:]
            pdf.draw_text(chunk, x, cursor.y, size=size, bold=bold, color=color)
            cursor.advance(len(chunk) * lh)
            if remaining:
                ctx.page_break()

    # ── block renderers ──

    def _draw_banner(self, ctx, block: Banner):
        g = ctx.geometry
        ctx.ensure_room(BANNER_BREAK, block.height)
        y = ctx.cursor.y
        ctx.pdf.fill_rect(g.margin, y, g.content_width, block.height, block.color)
        ctx.pdf.draw_text(block.title, g.margin + 3, y + 6, size=14, bold=True, color=WHITE)
        ctx.cursor.advance(block.advance)

    def _draw_text_run(self, ctx, block: TextRun):
        g = ctx.geometry
        width = block.max_width or g.content_width - block.indent
        lines = ctx.pdf.split_text(block.text, width, block.size, block.bold)
        self._flow_lines(ctx, lines, g.margin + block.indent, block.size, block.bold, block.color)
        ctx.cursor.advance(block.space_after)

    def _draw_heading(self, ctx, block: Heading):
        ctx.ensure_room(CONTENT_BREAK, ctx.pdf.descent(block.size))
        ctx.pdf.draw_text(block.text, ctx.geometry.margin, ctx.cursor.y,
                          size=block.size, bold=True, color=block.color)
        ctx.cursor.advance(block.advance)

    def _draw_metric_grid(self, ctx, block: MetricGrid):
        g, pdf = ctx.geometry, ctx.pdf
        col_w = (g.content_width - block.column_gap * (block.columns - 1)) / block.columns

        for start in range(0, len(block.metrics), block.columns):
            ctx.ensure_room(CONTENT_BREAK, block.row_height)
            y = ctx.cursor.y
            for col, metric in enumerate(block.metrics[start:start + block.columns]):
                x = g.margin + col * (col_w + block.column_gap)
                pdf.fill_rect(x, y, col_w, block.row_height, "#f3f4f6")
                pdf.outline_rect(x, y, col_w, block.row_height, "#e5e7eb")
                pdf.draw_text(metric.value, x + 3, y + 8, size=13, bold=True, color=BLUE)
                pdf.draw_text(metric.label, x + 3, y + 15, size=9, bold=True, color=DARK_TEXT)
                if metric.description:
                    pdf.draw_text(metric.description, x + 3, y + 22, size=8, color=LIGHT_TEXT)
            ctx.cursor.advance(block.row_height + block.row_gap)

    def _draw_bullet_list(self, ctx, block: BulletList):
        for item in block.items:
            self._draw_text_run(ctx, TextRun(
                f"{block.marker} {item}",
                size=block.size,
                color=block.color,
                space_after=block.space_after,
            ))

    def _draw_key_value_table(self, ctx, block: KeyValueTable):
        g, pdf = ctx.geometry, ctx.pdf
        for label, value in block.rows:
            ctx.ensure_room(ROW_BREAK, pdf.descent(block.size))
            y = ctx.cursor.y
            pdf.draw_text(f"{label}:", g.margin, y, size=block.size, color=DARK_TEXT)
            pdf.draw_text(value, g.margin + block.value_offset, y,
                          size=block.size, bold=True, color=block.value_color)
            ctx.cursor.advance(block.row_height)

    def _draw_risk_list(self, ctx, block: RiskList):
        g, pdf = ctx.geometry, ctx.pdf
        for risk in block.risks:
            mitigation = pdf.split_text(risk.mitigation, g.content_width - 4, size=8)
            _, text_bottom = pdf.text_extent(RISK_MITIGATION_OFFSET, len(mitigation), 8)
            oversized = not ctx.fits_fresh_page(text_bottom)
            if oversized:
                # Header must leave the first mitigation line above the threshold
                ctx.ensure_room(CONTENT_BREAK + RISK_MITIGATION_OFFSET)
            else:
                ctx.ensure_room(CONTENT_BREAK, text_bottom)

            y = ctx.cursor.y
            x = g.margin + 2
            pdf.fill_rect(g.margin, y, g.content_width, 2, block.accent_color)
            pdf.draw_text(risk.name, x, y + 6, size=10, bold=True, color=DARK_TEXT)
            pdf.draw_text(risk.description, x, y + 11, size=9, color=LIGHT_TEXT)
            pdf.draw_text("Mitigation:", x, y + 17, size=9, bold=True, color=GREEN)
            if oversized:
                ctx.cursor.advance(RISK_MITIGATION_OFFSET)
                self._flow_lines(ctx, mitigation, x, 8)
                ctx.cursor.advance(RISK_CARD_HEIGHT - RISK_MITIGATION_OFFSET - pdf.line_height(8))
                continue
            pdf.draw_text(mitigation, x, y + RISK_MITIGATION_OFFSET, size=8, color=DARK_TEXT)
            ctx.cursor.advance(RISK_CARD_HEIGHT + (len(mitigation) - 1) * RISK_LINE_STEP)

    def _draw_timeline(self, ctx, block: Timeline):
        g, pdf = ctx.geometry, ctx.pdf
        desc_w = g.content_width - block.label_width
        for phase, description in block.entries:
            lines = pdf.split_text(description, desc_w, block.size)
            _, text_bottom = pdf.text_extent(0, len(lines), block.size)
            if not ctx.fits_fresh_page(text_bottom):
                # Flow the description; the label stays beside its first line
                ctx.ensure_room(CONTENT_BREAK)
                pdf.draw_text(phase, g.margin, ctx.cursor.y, size=10, bold=True, color=BLUE)
                self._flow_lines(ctx, lines, g.margin + block.label_width, block.size)
                ctx.cursor.advance(block.space_after)
                continue
            ctx.ensure_room(ROW_BREAK, text_bottom)

            y = ctx.cursor.y
            pdf.draw_text(phase, g.margin, y, size=10, bold=True, color=BLUE)
            pdf.draw_text(lines, g.margin + block.label_width, y, size=block.size, color=DARK_TEXT)
            ctx.cursor.advance(len(lines) * pdf.line_height(block.size) + block.space_after)

    def _draw_spacer(self, ctx, block: Spacer):
        ctx.cursor.advance(block.height)

    def _draw_page_break(self, ctx, block: PageBreak):
        ctx.page_break()

    def _draw_cover_page(self, ctx, block: CoverPage):
        ctx.claim_fresh_page()
        g, pdf = ctx.geometry, ctx.pdf

        pdf.fill_rect(0, 0, g.width, g.height, "#f8fafc", background=True)
        pdf.fill_rect(0, 0, g.width, 60, EMERALD, background=True)
        pdf.draw_text(block.title, g.margin, 15, size=28, bold=True, color=WHITE)
        pdf.draw_text(block.subtitle, g.margin, 30, size=14, bold=True, color=WHITE)

        pdf.draw_text(block.heading, g.margin, 80, size=18, bold=True, color=DARK_TEXT)
        intro = pdf.split_text(block.intro, g.content_width, 11)
        pdf.draw_text(intro, g.margin, 95, size=11, color=LIGHT_TEXT)

        footer_y = g.height - 40
        generated = block.generated_on.strftime(DATE_FORMAT)
        pdf.draw_text(f"Generated: {generated}", g.margin, footer_y, size=10, color=LIGHT_TEXT)
        pdf.draw_text(block.confidentiality, g.margin, footer_y + 6, size=10, color=LIGHT_TEXT)
        ctx.cursor.y = footer_y + 6

    def _draw_closing_page(self, ctx, block: ClosingPage):
        ctx.claim_fresh_page()
        g, pdf = ctx.geometry, ctx.pdf
        center = g.width / 2

        pdf.fill_rect(0, 0, g.width, g.height, "#0f172a", background=True)
        y = g.height / 2 - 20
        pdf.draw_text(block.headline, center, y, size=20, bold=True, color=EMERALD, align="center")

        summary = pdf.split_text(block.summary, g.content_width, 11)
        pdf.draw_text(summary, center, y + 20, size=11, color="#cbd5e1", align="center")

        pdf.draw_text(block.call_to_action, center, g.height - 50,
                      size=12, bold=True, color=EMERALD, align="center")
        generated = block.generated_on.strftime(DATE_FORMAT)
        pdf.draw_text(f"Generated: {generated} | {block.confidentiality}", center, g.height - 35,
                      size=10, color="#94a3b8", align="center")
        ctx.cursor.y = g.height - 35


def generate_report(
    blocks: Optional[Sequence[ContentBlock]] = None,
    output_path: Optional[Path] = None,
) -> Path:
    """Render and save the report with the default engine."""
    return ReportLayoutEngine().generate_report(blocks, output_path)
