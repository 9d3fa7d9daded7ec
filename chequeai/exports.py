"""
CSV and PDF exports of a single cheque.

Both exports show reconciled values, so they match what the detail view shows.
"""
from __future__ import annotations

import csv
import io
import re
from datetime import datetime
from typing import Any, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

from chequeai.extraction import NOT_AVAILABLE, extract_check_information
from chequeai.schemas import ReconciledCheck

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def _field_rows(info: ReconciledCheck) -> list[tuple[str, str]]:
    return [
        ("MICR Code", info.micr_code),
        ("Cheque Date", info.cheque_date),
        ("Amount (Numbers)", info.amount_number),
        ("Amount (Words)", info.amount_words),
        ("Currency", info.currency),
        ("Payee Name", info.payee_name),
        ("Account Number", info.account_number),
        ("Anti-Fraud Features", info.anti_fraud_features),
    ]


def _format_timestamp(value: Optional[datetime]) -> str:
    if value is None:
        return NOT_AVAILABLE
    return value.strftime("%Y-%m-%d %H:%M:%S")


def _safe_filename_part(value: str) -> str:
    cleaned = _UNSAFE_FILENAME_CHARS.sub("_", value).strip("_")
    return cleaned or "unknown"


# ---------------------------------------------------------------------------
# CSV
# ---------------------------------------------------------------------------

def render_csv(record: Any) -> str:
    info = extract_check_information(record)
    output = io.StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_MINIMAL)
    writer.writerow(["Field", "Value"])
    for field, value in _field_rows(info):
        writer.writerow([field, value or NOT_AVAILABLE])
    writer.writerow(["Extracted On", _format_timestamp(record.created_at)])
    return output.getvalue()


def csv_filename(record: Any) -> str:
    info = extract_check_information(record)
    day = record.created_at.strftime("%Y-%m-%d") if record.created_at else "undated"
    return f"bank_check_{_safe_filename_part(info.payee_name)}_{day}.csv"


# ---------------------------------------------------------------------------
# PDF
# ---------------------------------------------------------------------------

def render_pdf(record: Any) -> bytes:
    """Render a one‑page PDF report using reportlab."""
    info = extract_check_information(record)

    buffer = io.BytesIO()
    doc = SimpleDocTemplate(buffer, pagesize=letter, topMargin=0.75 * inch, bottomMargin=0.75 * inch)
    styles = getSampleStyleSheet()

    title_style = ParagraphStyle(
        "Title", parent=styles["Heading1"], fontSize=24, alignment=1, textColor=colors.HexColor("#0f172a")
    )
    section_style = ParagraphStyle("Section", parent=styles["Heading2"], fontSize=16)
    value_style = ParagraphStyle("Value", parent=styles["Normal"], fontSize=12, leading=16)
    raw_style = ParagraphStyle("Raw", parent=styles["Code"], fontSize=9, leading=11)

    elements = [
        Paragraph("Bank Check AI Extraction", title_style),
        Spacer(1, 24),
        Paragraph(f"Extracted On: {_format_timestamp(record.created_at)}", value_style),
    ]
    if record.image_filename:
        elements.append(Paragraph(f"Image File: {escape(record.image_filename)}", value_style))
    elements.append(Spacer(1, 24))

    elements.append(Paragraph("Extracted Check Details", section_style))
    elements.append(Spacer(1, 8))
    for field, value in _field_rows(info):
        if value:
            elements.append(Paragraph(f"<b>{field}:</b> {escape(value)}", value_style))
            elements.append(Spacer(1, 4))

    if record.extracted_text:
        elements.append(Spacer(1, 24))
        elements.append(Paragraph("Raw Extracted Text", section_style))
        elements.append(Spacer(1, 8))
        raw = escape(record.extracted_text).replace("\n", "<br/>")
        elements.append(Paragraph(raw, raw_style))

    doc.build(elements)
    return buffer.getvalue()


def pdf_filename(record: Any) -> str:
    stamp = record.created_at.strftime("%Y-%m-%dT%H-%M-%S") if record.created_at else "undated"
    return f"bank_check_extraction_{stamp}.pdf"
