"""Static guidance returned instead of document content."""

from docfin.extraction.models import ExtractedText

PDF_GUIDANCE_TEXT = """PDF PROBLEM DETECTED - SOLUTIONS AVAILABLE

The system tried several methods to read your PDF but could not extract readable text.

LIKELY CAUSES:
- The PDF is a scan or photo without a text layer
- The PDF has a corrupted cross-reference (xref) table or a non-standard structure
- The PDF is password protected
- The PDF uses unsupported features or encryption

WHAT YOU CAN TRY:

1. CONVERT TO AN IMAGE (RECOMMENDED):
- Take a screenshot of the pages you want analysed
- Save them as JPG or PNG
- Upload the images so they are processed with OCR

2. USE ANOTHER PDF:
- Export the document again from the application that produced it (Word, Excel, accounting software)
- Remove the password protection before uploading

3. MANUAL INPUT:
- Copy the text from the PDF and paste it into the manual entry form
- The analysis works the same way on pasted text

TIPS FOR THE BEST RESULTS:
- Use images of at least 300 DPI
- Keep the text sharp and the page upright
- Dark text on a white background works best"""

IMAGE_GUIDANCE_TEXT = """DOCUMENT IMAGE ANALYSIS GUIDE

Images are read with OCR (Optical Character Recognition) on your device before analysis.

IMAGE QUALITY:
- Use a resolution of at least 300 DPI
- Make sure the lighting is even, without shadows or glare
- Keep the document upright and fully inside the frame

DOCUMENT FORMAT:
- Dark text on a plain white background gives the best contrast
- Avoid coloured or textured backgrounds
- Avoid small fonts and unclear handwriting

COMPATIBILITY:
- Formats: JPG, PNG, GIF, BMP, WEBP
- Maximum size: 10MB
- Languages: Indonesian and English
- Document types: invoices, receipts, reports, bank statements

Once the text has been recognised it is analysed automatically. Upload a sharper image if the result looks incomplete."""


def pdf_guidance() -> ExtractedText:
    """Guidance used when every PDF extraction attempt failed."""
    return ExtractedText(
        text=PDF_GUIDANCE_TEXT,
        page_count=1,
        is_guidance_only=True,
        source="pdf_guidance",
    )


def image_guidance() -> ExtractedText:
    return ExtractedText(
        text=IMAGE_GUIDANCE_TEXT,
        page_count=1,
        is_guidance_only=True,
        source="image",
    )
