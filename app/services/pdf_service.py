"""
PDF operations service for lease signing.

Handles:
- Rendering the lease as a PDF
- Stamping the signature and signer details on the last page
- Appending the audit log page and hashing the final document
"""
import base64
import hashlib
import io
import json
from datetime import datetime
from PIL import Image
from PyPDF2 import PdfReader, PdfWriter
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer
from app.models.enums import SignerRole
from app.services.lease_template import LeaseTemplateContext, render_lease_sections


class PDFServiceError(Exception):
    """Base exception for PDF service errors"""
    pass


class PDFService:
    """Service for PDF operations"""

    SIGNATURE_WIDTH = 200
    SIGNATURE_X = 50
    SIGNATURE_Y = 60
    LABEL_Y = 140
    DETAILS_X = 270

    @staticmethod
    def decode_signature(signature_data: str) -> Image.Image:
        """
        Decode base64 signature data to PIL Image.

        Args:
            signature_data: Base64 encoded image string (with or without data URI prefix)

        Returns:
            PIL Image object

        Raises:
            PDFServiceError: If signature data is invalid
        """
        try:
            # Remove data URI prefix if present (e.g., "data:image/png;base64,")
            if "base64," in signature_data:
                signature_data = signature_data.split("base64,")[1]

            signature_bytes = base64.b64decode(signature_data)
            signature_image = Image.open(io.BytesIO(signature_bytes))
            signature_image.load()

            return signature_image
        except Exception as e:
            raise PDFServiceError(f"Failed to decode signature data: {str(e)}")

    @staticmethod
    def build_lease_pdf(context: LeaseTemplateContext) -> bytes:
        """Render the lease document (same sections as the HTML) to PDF bytes."""
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(buffer, pagesize=letter, leftMargin=54, rightMargin=54, topMargin=54, bottomMargin=54)

        styles = getSampleStyleSheet()
        title_style = ParagraphStyle(name="LeaseTitle", parent=styles["Title"], fontSize=16, alignment=TA_CENTER)
        heading_style = ParagraphStyle(name="LeaseHeading", parent=styles["Heading2"], fontSize=12, spaceBefore=12)
        body_style = ParagraphStyle(name="LeaseBody", parent=styles["BodyText"], fontSize=10, leading=14)
        initials_style = ParagraphStyle(name="LeaseInitials", parent=body_style, fontSize=9, textColor="#666666")

        story = [
            Paragraph("RESIDENTIAL LEASE AGREEMENT", title_style),
            Paragraph(
                f'THIS LEASE AGREEMENT ("Agreement") is made on <b>{_xml(context.today_date)}</b>, between:',
                body_style,
            ),
            Paragraph(f"<b>Landlord:</b> {_xml(context.landlord_name)} (\"Landlord\")", body_style),
            Paragraph(f"<b>Tenant(s):</b> {_xml(context.tenant_name)} (\"Tenant\")", body_style),
        ]

        for title, paragraphs in render_lease_sections(context):
            story.append(Paragraph(_xml(title.upper()), heading_style))
            for paragraph in paragraphs:
                story.append(Paragraph(paragraph, body_style))
            story.append(Paragraph("<b>Tenant Initials:</b> ______________", initials_style))

        story.append(Spacer(1, 24))
        story.append(Paragraph("SIGNATURES", heading_style))
        story.append(Paragraph(f"<b>LANDLORD SIGNATURE:</b> ______________________ <b>DATE:</b> {_xml(context.today_date)}", body_style))
        story.append(Spacer(1, 12))
        story.append(Paragraph(f"<b>TENANT SIGNATURE:</b> ______________________ <b>DATE:</b> {_xml(context.today_date)}", body_style))

        try:
            doc.build(story)
        except Exception as e:
            raise PDFServiceError(f"Failed to render lease PDF: {str(e)}")
        return buffer.getvalue()

    @staticmethod
    def create_signature_overlay(signature_image: Image.Image, page_width: float, page_height: float,
                                 role: SignerRole, signer_name: str, signer_email: str,
                                 signed_at: datetime) -> bytes:
        """PDF overlay with the signature image and the signer details block."""
        packet = io.BytesIO()
        can = canvas.Canvas(packet, pagesize=(page_width, page_height))

        sig_temp = io.BytesIO()
        signature_image.convert("RGBA").save(sig_temp, format="PNG")
        sig_temp.seek(0)

        img_width = PDFService.SIGNATURE_WIDTH
        img_height = signature_image.height / signature_image.width * img_width

        can.setFont("Helvetica", 12)
        can.drawString(PDFService.SIGNATURE_X, PDFService.LABEL_Y, "Signature")
        can.drawImage(ImageReader(sig_temp), PDFService.SIGNATURE_X, PDFService.SIGNATURE_Y,
                      width=img_width, height=img_height, mask="auto")

        role_label = "Tenant" if SignerRole(role) == SignerRole.TENANT else "Landlord"
        can.setFont("Helvetica", 11)
        can.setFillColorRGB(0.1, 0.1, 0.1)
        text = can.beginText(PDFService.DETAILS_X, PDFService.SIGNATURE_Y + img_height - 10)
        text.setLeading(14)
        text.textLine(f"{role_label} Name: {signer_name}")
        text.textLine(f"Email: {signer_email}")
        text.textLine(f"Signed At: {signed_at.isoformat()}")
        can.drawText(text)

        can.save()
        packet.seek(0)
        return packet.getvalue()

    @staticmethod
    def create_audit_page(audit: dict, page_width: float, page_height: float) -> bytes:
        packet = io.BytesIO()
        can = canvas.Canvas(packet, pagesize=(page_width, page_height))
        can.setFont("Helvetica", 16)
        can.drawString(50, page_height - 70, "Audit Log")

        can.setFont("Helvetica", 10)
        text = can.beginText(50, page_height - 100)
        text.setLeading(12)
        for line in json.dumps(audit, indent=2, default=str).splitlines():
            text.textLine(line)
        can.drawText(text)

        can.save()
        packet.seek(0)
        return packet.getvalue()

    @staticmethod
    def stamp_signature(pdf_bytes: bytes, signature_image: Image.Image, role: SignerRole,
                        signer_name: str, signer_email: str, signed_at: datetime,
                        audit: dict) -> bytes:
        """
        Stamp the signature on the last page and append the audit page.

        Raises:
            PDFServiceError: If PDF operations fail
        """
        try:
            reader = PdfReader(io.BytesIO(pdf_bytes))
            writer = PdfWriter()

            last_page_index = len(reader.pages) - 1
            last_page = reader.pages[last_page_index]
            page_width = float(last_page.mediabox.width)
            page_height = float(last_page.mediabox.height)

            for page_num, page in enumerate(reader.pages):
                if page_num == last_page_index:
                    overlay_bytes = PDFService.create_signature_overlay(
                        signature_image, page_width, page_height, role, signer_name, signer_email, signed_at
                    )
                    overlay_pdf = PdfReader(io.BytesIO(overlay_bytes))
                    page.merge_page(overlay_pdf.pages[0])
                writer.add_page(page)

            audit_pdf = PdfReader(io.BytesIO(PDFService.create_audit_page(audit, page_width, page_height)))
            writer.add_page(audit_pdf.pages[0])

            output = io.BytesIO()
            writer.write(output)
            output.seek(0)

            return output.getvalue()
        except Exception as e:
            raise PDFServiceError(f"Failed to insert signature into PDF: {str(e)}")

    @staticmethod
    def document_hash(pdf_bytes: bytes) -> str:
        return hashlib.sha256(pdf_bytes).hexdigest()


def _xml(value: str) -> str:
    return value.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


# Create singleton instance
pdf_service = PDFService()
