"""ReportLab PDF Service Implementation

Renders invoices to PDF.
"""

from io import BytesIO
from typing import List
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Table,
    TableStyle,
    Paragraph,
    Spacer,
)

from src.app.services.pdf_service import PdfService
from src.domain.invoice import Invoice, InvoiceStatus
from src.domain.invoice_line import InvoiceLineItem

COLUMN_WIDTHS = [80 * mm, 25 * mm, 30 * mm, 35 * mm]
ADDRESS_KEYS = ("street", "city", "state", "zip", "country")


def _money(currency: str, amount) -> str:
    return f"{currency} {amount:,.2f}"


def _quantity(value) -> str:
    return f"{value:,.4f}".rstrip("0").rstrip(".")


class ReportLabPdfService(PdfService):
    """
    ReportLab implementation of PdfService

    Drafts carry a DRAFT label; every other status prints as issued.
    """

    def generate_invoice(
        self,
        invoice: Invoice,
        line_items: List[InvoiceLineItem],
        company_name: str = "Tenant Ops",
    ) -> bytes:
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=20 * mm,
            leftMargin=20 * mm,
            topMargin=20 * mm,
            bottomMargin=20 * mm,
            title=invoice.invoice_number,
        )

        styles = getSampleStyleSheet()
        title_style = ParagraphStyle(
            "TitleStyle",
            parent=styles["Heading1"],
            fontSize=24,
            spaceAfter=10,
            textColor=colors.HexColor("#2C3E50"),
        )
        label_style = ParagraphStyle(
            "LabelStyle",
            parent=styles["Heading2"],
            fontSize=14,
            textColor=colors.HexColor("#E74C3C"),
            spaceAfter=20,
        )
        normal_style = ParagraphStyle("NormalStyle", parent=styles["Normal"], fontSize=10)
        bold_style = ParagraphStyle(
            "BoldStyle",
            parent=styles["Normal"],
            fontSize=10,
            fontName="Helvetica-Bold",
        )
        note_style = ParagraphStyle(
            "NoteStyle",
            parent=styles["Normal"],
            fontSize=9,
            textColor=colors.HexColor("#7F8C8D"),
        )

        elements = [
            Paragraph(escape(company_name), title_style),
            Spacer(1, 5 * mm),
        ]
        label = "DRAFT INVOICE" if invoice.status == InvoiceStatus.DRAFT else "INVOICE"
        elements.append(Paragraph(label, label_style))

        # Invoice details
        details = [
            ["Invoice Number:", invoice.invoice_number],
            ["Status:", invoice.status.value.upper()],
            ["Issue Date:", invoice.issue_date.isoformat()],
        ]
        if invoice.due_date:
            details.append(["Due Date:", invoice.due_date.isoformat()])
        details.append(["Currency:", invoice.currency])

        details_table = Table(details, colWidths=[40 * mm, 100 * mm])
        details_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("TEXTCOLOR", (0, 0), (0, -1), colors.HexColor("#7F8C8D")),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        elements.append(details_table)
        elements.append(Spacer(1, 10 * mm))

        # Bill to
        elements.append(Paragraph("Bill To:", bold_style))
        elements.append(Paragraph(escape(invoice.client_name), normal_style))
        if invoice.client_email:
            elements.append(Paragraph(escape(invoice.client_email), normal_style))
        address = invoice.client_address or {}
        address_line = ", ".join(str(address[key]) for key in ADDRESS_KEYS if address.get(key))
        if address_line:
            elements.append(Paragraph(escape(address_line), normal_style))
        elements.append(Spacer(1, 10 * mm))

        # Line items
        line_data = [["Description", "Quantity", "Unit Price", "Amount"]]
        for line in line_items:
            line_data.append(
                [
                    Paragraph(escape(line.description), normal_style),
                    _quantity(line.quantity),
                    _money(invoice.currency, line.unit_price),
                    _money(invoice.currency, line.amount),
                ]
            )

        line_table = Table(line_data, colWidths=COLUMN_WIDTHS)
        line_table.setStyle(
            TableStyle(
                [
                    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#2C3E50")),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("ALIGN", (0, 0), (-1, 0), "CENTER"),
                    ("FONTSIZE", (0, 1), (-1, -1), 9),
                    ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#BDC3C7")),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
                    ("TOPPADDING", (0, 0), (-1, -1), 6),
                    (
                        "ROWBACKGROUNDS",
                        (0, 1),
                        (-1, -1),
                        [colors.white, colors.HexColor("#F8F9F9")],
                    ),
                ]
            )
        )
        elements.append(line_table)
        elements.append(Spacer(1, 5 * mm))

        # Totals
        totals_data = [
            ["", "", "Subtotal:", _money(invoice.currency, invoice.subtotal)],
            ["", "", f"Tax ({invoice.tax_rate}%):", _money(invoice.currency, invoice.tax_amount)],
            ["", "", "Total:", _money(invoice.currency, invoice.total_amount)],
        ]
        totals_table = Table(totals_data, colWidths=COLUMN_WIDTHS)
        totals_table.setStyle(
            TableStyle(
                [
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("ALIGN", (2, 0), (-1, -1), "RIGHT"),
                    ("FONTNAME", (2, -1), (-1, -1), "Helvetica-Bold"),
                    ("LINEABOVE", (2, -1), (-1, -1), 1.5, colors.HexColor("#2C3E50")),
                    ("TOPPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        elements.append(totals_table)

        if invoice.notes:
            elements.append(Spacer(1, 10 * mm))
            elements.append(Paragraph("Notes", bold_style))
            elements.append(Paragraph(escape(invoice.notes), note_style))
        if invoice.terms:
            elements.append(Spacer(1, 5 * mm))
            elements.append(Paragraph("Terms", bold_style))
            elements.append(Paragraph(escape(invoice.terms), note_style))

        doc.build(elements)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes
