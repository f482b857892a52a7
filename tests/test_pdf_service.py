import io
from datetime import datetime
from PIL import Image
from PyPDF2 import PdfReader
import pytest
from app.models.enums import SignerRole
from app.services.lease_template import LeaseTemplateContext
from app.services.pdf_service import PDFServiceError, pdf_service
from app.services.stamp import generate_stamp_signature

CONTEXT = LeaseTemplateContext(
    landlord_name="Maple Property Group",
    tenant_name="Jane Q Public",
    property_label="Maple Court - Unit 4B (apartment)",
    lease_start_date="November 1, 2026",
    lease_end_date="Month-to-Month",
    rent_amount="1,850",
    billing_day_of_month="1",
    today_date="October 19, 2026",
)


def _text(pdf_bytes: bytes) -> str:
    return "\n".join(page.extract_text() for page in PdfReader(io.BytesIO(pdf_bytes)).pages)


def test_decode_signature_accepts_data_uri_and_raw_base64():
    data_url = generate_stamp_signature("Jane Q Public")

    assert pdf_service.decode_signature(data_url).size == (400, 120)
    assert pdf_service.decode_signature(data_url.split(",", 1)[1]).size == (400, 120)


def test_decode_signature_rejects_garbage():
    with pytest.raises(PDFServiceError):
        pdf_service.decode_signature("data:image/png;base64,bm90IGFuIGltYWdl")


def test_lease_pdf_contains_lease_terms():
    text = _text(pdf_service.build_lease_pdf(CONTEXT))

    assert "RESIDENTIAL LEASE AGREEMENT" in text
    assert "Maple Court" in text
    assert "Jane Q Public" in text


def test_stamp_signature_appends_audit_page():
    base_pdf = pdf_service.build_lease_pdf(CONTEXT)
    pages_before = len(PdfReader(io.BytesIO(base_pdf)).pages)
    signature = Image.new("RGB", (400, 120), "#ffffff")

    stamped = pdf_service.stamp_signature(
        base_pdf,
        signature,
        SignerRole.TENANT,
        "Jane Q Public",
        "jane@example.com",
        datetime(2026, 10, 19, 12, 30),
        {"token": "abc", "leaseId": 1},
    )

    reader = PdfReader(io.BytesIO(stamped))
    assert len(reader.pages) == pages_before + 1
    assert "Tenant Name: Jane Q Public" in reader.pages[-2].extract_text()
    assert "Audit Log" in reader.pages[-1].extract_text()


def test_stamp_signature_rejects_invalid_pdf():
    with pytest.raises(PDFServiceError):
        pdf_service.stamp_signature(
            b"not a pdf", Image.new("RGB", (10, 10)), SignerRole.LANDLORD,
            "A", "a@example.com", datetime(2026, 1, 1), {},
        )


def test_document_hash_is_sha256_hex():
    digest = pdf_service.document_hash(b"lease")

    assert len(digest) == 64
    assert digest == pdf_service.document_hash(b"lease")
    assert digest != pdf_service.document_hash(b"lease2")
