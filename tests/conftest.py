import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def invoice_pdf_bytes() -> bytes:
    """Generate a two-page invoice with one amount per line."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "INVOICE NO. A-17")
    c.drawString(72, 700, "Penjualan produk Rp 5,000,000")
    c.showPage()
    c.drawString(72, 720, "Biaya operasional kantor Rp 2,000,000")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def percent_text_pdf_bytes() -> bytes:
    """Generate a single-page PDF whose text contains percent sequences."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Diskon 10%20 unit")
    c.drawString(72, 700, "Pajak 11% dari total")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def encrypted_pdf_bytes() -> bytes:
    """Generate a PDF that needs a user password to open."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter, encrypt="secret")
    c.drawString(72, 720, "Confidential ledger")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def corrupted_xref_pdf_bytes() -> bytes:
    """A PDF header followed by a broken cross-reference table and no catalog."""
    return (
        b"%PDF-1.4\n"
        b"xref\n0 1\nthis is not an xref entry\n"
        b"trailer\n<< /Size 1 >>\n"
        b"startxref\n9\n%%EOF\n"
    )
