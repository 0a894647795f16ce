"""Render invoices to PDF with ReportLab."""

from __future__ import annotations

import logging
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import BinaryIO
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from models import InvoiceData
from utils import format_currency

logger = logging.getLogger(__name__)

PRIMARY = colors.Color(59 / 255, 130 / 255, 246 / 255)
GRAY = colors.Color(107 / 255, 114 / 255, 128 / 255)
DARK = colors.Color(31 / 255, 41 / 255, 55 / 255)
HEADER_FILL = colors.Color(248 / 255, 250 / 255, 252 / 255)
STRIPE_FILL = colors.Color(249 / 255, 250 / 255, 251 / 255)


class ExportError(Exception):
    """Raised when an invoice could not be written."""


def invoice_filename(invoice: InvoiceData) -> str:
    return f"invoice-{invoice.invoice_number}.pdf"


def _format_quantity(quantity: Decimal) -> str:
    """Whole quantities without decimals, fractional ones to two places."""
    if quantity == quantity.to_integral_value():
        return str(int(quantity))
    return f"{quantity.quantize(Decimal('0.01')).normalize():f}"


def _paragraphs(text: str, style: ParagraphStyle) -> list[Paragraph]:
    return [Paragraph(escape(line), style) for line in text.splitlines() if line.strip()]


def render_invoice_pdf(invoice: InvoiceData, target: str | Path | BinaryIO) -> None:
    """Lay out the invoice and write it to a path or binary file object."""
    if isinstance(target, Path):
        target = str(target)

    doc = SimpleDocTemplate(
        target,
        pagesize=A4,
        leftMargin=20 * mm,
        rightMargin=20 * mm,
        topMargin=20 * mm,
        bottomMargin=20 * mm,
        title=f"Invoice {invoice.invoice_number}",
        author=invoice.issuer_name,
    )
    width = doc.width
    styles = getSampleStyleSheet()
    symbol = invoice.currency_symbol

    title_style = ParagraphStyle(
        "InvoiceTitle",
        parent=styles["Heading1"],
        fontName="Helvetica-Bold",
        fontSize=28,
        leading=32,
        textColor=colors.white,
    )
    number_style = ParagraphStyle(
        "InvoiceNumber",
        parent=styles["Normal"],
        fontSize=14,
        leading=18,
        textColor=colors.white,
        alignment=TA_RIGHT,
    )
    label_style = ParagraphStyle(
        "Label",
        parent=styles["Normal"],
        fontName="Helvetica-Bold",
        fontSize=10,
        textColor=GRAY,
    )
    normal_style = ParagraphStyle(
        "Body",
        parent=styles["Normal"],
        fontSize=11,
        leading=14,
        textColor=DARK,
    )
    cell_style = ParagraphStyle("Cell", parent=normal_style, fontSize=10, leading=12)
    footer_style = ParagraphStyle(
        "Footer",
        parent=styles["Normal"],
        fontSize=8,
        textColor=GRAY,
        alignment=TA_RIGHT,
    )

    story = []

    # Banner: INVOICE on the left, number on the right
    banner = Table(
        [[Paragraph("INVOICE", title_style),
          Paragraph(f"# {escape(invoice.invoice_number)}", number_style)]],
        colWidths=[width * 0.5, width * 0.5],
    )
    banner.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, -1), PRIMARY),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("TOPPADDING", (0, 0), (-1, -1), 12),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 12),
        ("LEFTPADDING", (0, 0), (-1, -1), 10),
        ("RIGHTPADDING", (0, 0), (-1, -1), 10),
    ]))
    story.append(banner)
    story.append(Spacer(1, 18))

    # From / To
    from_cell = [Paragraph("FROM:", label_style),
                 Paragraph(escape(invoice.issuer_name), normal_style)]
    to_cell = [Paragraph("TO:", label_style),
               Paragraph(escape(invoice.client_name), normal_style)]
    to_cell.extend(_paragraphs(invoice.client_address, normal_style))

    parties = Table([[from_cell, to_cell]], colWidths=[width * 0.5, width * 0.5])
    parties.setStyle(TableStyle([
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("LEFTPADDING", (0, 0), (-1, -1), 0),
    ]))
    story.append(parties)
    story.append(Spacer(1, 12))

    dates = Table(
        [[Paragraph("INVOICE DATE:", label_style), Paragraph("DUE DATE:", label_style)],
         [Paragraph(invoice.issue_date.strftime("%B %d, %Y"), normal_style),
          Paragraph(invoice.due_date.strftime("%B %d, %Y"), normal_style)]],
        colWidths=[width * 0.5, width * 0.5],
    )
    dates.setStyle(TableStyle([("LEFTPADDING", (0, 0), (-1, -1), 0)]))
    story.append(dates)
    story.append(Spacer(1, 18))

    # Line items
    rows = [["DESCRIPTION", "QTY", "RATE", "AMOUNT"]]
    for line in invoice.lines:
        rows.append([
            Paragraph(escape(line.description), cell_style),
            _format_quantity(line.quantity),
            format_currency(line.rate, symbol),
            format_currency(line.amount, symbol),
        ])

    table_style = [
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_FILL),
        ("TEXTCOLOR", (0, 0), (-1, 0), GRAY),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 10),
        ("TEXTCOLOR", (0, 1), (-1, -1), DARK),
        ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("TOPPADDING", (0, 0), (-1, -1), 6),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
    ]
    for idx in range(2, len(rows), 2):
        table_style.append(("BACKGROUND", (0, idx), (-1, idx), STRIPE_FILL))

    items = Table(rows, colWidths=[width * 0.49, width * 0.12, width * 0.19, width * 0.2],
                  repeatRows=1)
    items.setStyle(TableStyle(table_style))
    story.append(items)
    story.append(Spacer(1, 12))

    # Totals
    totals = Table(
        [["Subtotal:", format_currency(invoice.subtotal, symbol)],
         ["Tax:", format_currency(invoice.tax, symbol)],
         ["TOTAL:", format_currency(invoice.total, symbol)]],
        colWidths=[width * 0.2, width * 0.2],
        hAlign="RIGHT",
    )
    totals.setStyle(TableStyle([
        ("ALIGN", (1, 0), (1, -1), "RIGHT"),
        ("FONTSIZE", (0, 0), (-1, 1), 11),
        ("TEXTCOLOR", (0, 0), (-1, 1), DARK),
        ("LINEABOVE", (0, 0), (-1, 0), 0.5, GRAY),
        ("BACKGROUND", (0, 2), (-1, 2), PRIMARY),
        ("TEXTCOLOR", (0, 2), (-1, 2), colors.white),
        ("FONTNAME", (0, 2), (-1, 2), "Helvetica-Bold"),
        ("FONTSIZE", (0, 2), (-1, 2), 14),
        ("TOPPADDING", (0, 2), (-1, 2), 8),
        ("BOTTOMPADDING", (0, 2), (-1, 2), 8),
    ]))
    story.append(totals)

    if invoice.notes.strip():
        story.append(Spacer(1, 24))
        story.append(Paragraph("NOTES:", label_style))
        story.extend(_paragraphs(invoice.notes, normal_style))

    if invoice.terms.strip():
        story.append(Spacer(1, 12))
        story.append(Paragraph("TERMS:", label_style))
        story.extend(_paragraphs(invoice.terms, normal_style))

    story.append(Spacer(1, 36))
    story.append(Paragraph(f"Generated: {datetime.now().strftime('%m/%d/%Y')}", footer_style))

    doc.build(story)


class InvoiceExporter:
    """Writes invoice PDFs one at a time.

    ``generating`` is True only while an export is running; the app uses it to
    disable the export action.
    """

    def __init__(self):
        self.generating = False

    def export(self, invoice: InvoiceData, directory: Path) -> Path:
        if self.generating:
            raise ExportError("An invoice is already being generated")

        self.generating = True
        path = Path(directory) / invoice_filename(invoice)
        logger.info("Generating invoice %s to %s", invoice.invoice_number, path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            render_invoice_pdf(invoice, path)
        except Exception as e:
            logger.error("Error generating invoice %s: %s", invoice.invoice_number, e, exc_info=True)
            raise ExportError(
                "An error occurred while creating the PDF. Please try again."
            ) from e
        finally:
            self.generating = False

        logger.info("Invoice %s written", invoice.invoice_number)
        return path
