"""Estimate PDF rendering with reportlab.

Layout (A4, positions in millimetres from the top-left corner):
- Dark header band (0-50mm) with the ESTIMATE title and the grand total
- BILL TO block with the customer's name, email and phone
- Estimate number, date, valid-until and grand total on the right
- Items table (Quantity, Price, Amount); the project title heads the
  first item and long descriptions wrap
- Grand total line after the last item
- Footer with the company logo, name and location on every page
"""

import datetime as dt
import logging
from decimal import Decimal
from io import BytesIO
from typing import Optional

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen.canvas import Canvas

from expense_tracker.config.settings import TrackerConfig, get_config
from expense_tracker.models.estimate import Estimate
from expense_tracker.utils.logging_utils import log_function_call
from expense_tracker.writers.csv_export import format_number

logger = logging.getLogger(__name__)

PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN = 20
HEADER_HEIGHT = 50
LOGO_SIZE = 20
LINE_HEIGHT = 5

HEADER_COLOR = (55 / 255, 65 / 255, 81 / 255)
RULE_COLOR = (200 / 255, 200 / 255, 200 / 255)
FOOTER_TEXT_COLOR = (100 / 255, 100 / 255, 100 / 255)

FONT = "Helvetica"
FONT_BOLD = "Helvetica-Bold"


def format_usd(value) -> str:
    return f"${Decimal(value or 0):.2f}"


def format_long_date(value: dt.date) -> str:
    """US long date, e.g. ``March 4, 2024``."""
    return f"{value:%B} {value.day}, {value.year}"


def estimate_pdf_filename(estimate: Estimate, today: Optional[dt.date] = None) -> str:
    """Download filename such as ``Estimate-EST-0007-2024-03-04.pdf``."""
    today = today or dt.datetime.now(dt.timezone.utc).date()
    return f"Estimate-{estimate.estimate_number}-{today.isoformat()}.pdf"


class EstimatePdfWriter:
    """Renders an estimate as a single PDF document.

    Example:
        >>> content = EstimatePdfWriter().render(estimate)
        >>> content[:5]
        b'%PDF-'
    """

    def __init__(self, config: Optional[TrackerConfig] = None):
        self.config = config or get_config()
        self.page_width_mm = PAGE_WIDTH / mm
        self.page_height_mm = PAGE_HEIGHT / mm
        # Lowest baseline for item rows; the footer sits below it
        self.content_bottom_mm = self.page_height_mm - 60

    def _text(self, canvas: Canvas, x: float, top: float, text: str) -> None:
        """Draw text with its baseline ``top`` mm below the top edge."""
        canvas.drawString(x * mm, PAGE_HEIGHT - top * mm, text)

    def _rule(self, canvas: Canvas, top: float) -> None:
        canvas.setStrokeColorRGB(*RULE_COLOR)
        y = PAGE_HEIGHT - top * mm
        canvas.line(MARGIN * mm, y, (self.page_width_mm - MARGIN) * mm, y)

    def _draw_header(self, canvas: Canvas, estimate: Estimate) -> None:
        canvas.setFillColorRGB(*HEADER_COLOR)
        canvas.rect(
            0,
            PAGE_HEIGHT - HEADER_HEIGHT * mm,
            PAGE_WIDTH,
            HEADER_HEIGHT * mm,
            stroke=0,
            fill=1,
        )
        canvas.setFillColorRGB(1, 1, 1)
        canvas.setFont(FONT_BOLD, 24)
        self._text(canvas, MARGIN, 30, "ESTIMATE")

        total_x = self.page_width_mm - MARGIN - 60
        canvas.setFont(FONT, 16)
        self._text(canvas, total_x, 20, "Grand Total (USD)")
        canvas.setFont(FONT_BOLD, 20)
        self._text(canvas, total_x, 35, format_usd(estimate.total))

    def _draw_parties(self, canvas: Canvas, estimate: Estimate, top: float) -> None:
        canvas.setFillColorRGB(0, 0, 0)
        canvas.setFont(FONT_BOLD, 10)
        self._text(canvas, MARGIN, top, "BILL TO")
        canvas.setFont(FONT, 10)
        self._text(canvas, MARGIN, top + 7, estimate.customer_name)
        if estimate.customer_email:
            self._text(canvas, MARGIN, top + 14, estimate.customer_email)
        if estimate.customer_phone:
            self._text(canvas, MARGIN, top + 21, estimate.customer_phone)

        right_x = self.page_width_mm - MARGIN - 80
        issued = (
            estimate.created_at.date()
            if estimate.created_at
            else dt.datetime.now(dt.timezone.utc).date()
        )
        canvas.setFont(FONT, 9)
        self._text(canvas, right_x, top, f"Estimate Number: {estimate.estimate_number}")
        self._text(canvas, right_x, top + 7, f"Estimate Date: {format_long_date(issued)}")
        if estimate.valid_until:
            self._text(
                canvas,
                right_x,
                top + 14,
                f"Valid Until: {format_long_date(estimate.valid_until)}",
            )
        self._text(
            canvas, right_x, top + 21, f"Grand Total (USD): {format_usd(estimate.total)}"
        )

    def _draw_footer(self, canvas: Canvas) -> None:
        footer_top = self.page_height_mm - 20
        logo_path = self.config.company_logo_path
        if logo_path:
            try:
                canvas.drawImage(
                    logo_path,
                    MARGIN * mm,
                    PAGE_HEIGHT - (self.page_height_mm - 25 + LOGO_SIZE) * mm,
                    width=LOGO_SIZE * mm,
                    height=LOGO_SIZE * mm,
                    preserveAspectRatio=True,
                    mask="auto",
                )
            except OSError as e:
                logger.warning(f"Could not load logo {logo_path}: {e}")

        canvas.setFillColorRGB(*FOOTER_TEXT_COLOR)
        canvas.setFont(FONT, 8)
        text_x = MARGIN + LOGO_SIZE + 5
        self._text(canvas, text_x, footer_top, self.config.company_name)
        self._text(canvas, text_x, footer_top + 6, self.config.company_location)
        canvas.setFillColorRGB(0, 0, 0)

    def _new_page(self, canvas: Canvas) -> float:
        self._draw_footer(canvas)
        canvas.showPage()
        # showPage resets the graphics state
        canvas.setFillColorRGB(0, 0, 0)
        canvas.setFont(FONT, 9)
        return MARGIN + 20

    @log_function_call
    def render(self, estimate: Estimate) -> bytes:
        """Render the estimate and return the PDF bytes."""
        buffer = BytesIO()
        canvas = Canvas(buffer, pagesize=A4)
        canvas.setTitle(f"Estimate {estimate.estimate_number}")
        canvas.setAuthor(self.config.company_name)

        self._draw_header(canvas, estimate)
        top = 70
        self._draw_parties(canvas, estimate, top)
        top += 40
        self._rule(canvas, top)
        top += 15

        column_x = self.page_width_mm - MARGIN - 100
        canvas.setFillColorRGB(0, 0, 0)
        canvas.setFont(FONT_BOLD, 10)
        self._text(canvas, MARGIN, top, "Items")
        canvas.setFont(FONT, 9)
        self._text(canvas, column_x, top, "Quantity")
        self._text(canvas, column_x + 30, top, "Price")
        self._text(canvas, column_x + 60, top, "Amount")
        top += 10

        description_width = (self.page_width_mm - 2 * MARGIN - 100) * mm
        for index, item in enumerate(estimate.items):
            if top > self.content_bottom_mm:
                top = self._new_page(canvas)

            if index == 0 and estimate.project_title:
                canvas.setFont(FONT_BOLD, 9)
                self._text(canvas, MARGIN, top, estimate.project_title)
                top += 7

            canvas.setFont(FONT, 9)
            lines = simpleSplit(item.description or "", FONT, 9, description_width)
            lines = lines or [""]
            # A description longer than the space left continues on the next page
            for offset, line in enumerate(lines):
                if offset:
                    top += LINE_HEIGHT
                    if top > self.content_bottom_mm:
                        top = self._new_page(canvas)
                self._text(canvas, MARGIN, top, line)

            quantity = item.amount if item.amount is not None else 1
            self._text(canvas, column_x, top, format_number(quantity))
            self._text(canvas, column_x + 30, top, format_usd(item.unit_price))
            self._text(canvas, column_x + 60, top, format_usd(item.total))
            top += 10

        if top + 15 > self.content_bottom_mm:
            top = self._new_page(canvas)
        top += 5
        self._rule(canvas, top)
        top += 10

        canvas.setFillColorRGB(0, 0, 0)
        canvas.setFont(FONT_BOLD, 10)
        self._text(canvas, MARGIN, top, "Grand Total (USD):")
        canvas.drawRightString(
            (self.page_width_mm - MARGIN - 20) * mm,
            PAGE_HEIGHT - top * mm,
            format_usd(estimate.total),
        )

        self._draw_footer(canvas)
        canvas.showPage()
        canvas.save()
        logger.debug(
            f"Rendered estimate {estimate.estimate_number} "
            f"with {len(estimate.items)} item(s)"
        )
        return buffer.getvalue()
