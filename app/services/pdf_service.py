from pypdf import PdfReader
from io import BytesIO
from typing import Tuple


def extract_text_from_pdf(pdf_content: bytes) -> Tuple[str, int]:
    """
    Extract text from a PDF file and return the raw text with the page count.
    """
    try:
        reader = PdfReader(BytesIO(pdf_content))
        text = ""
        for page in reader.pages:
            text += page.extract_text() or ""
        return text.strip(), len(reader.pages)
    except Exception as e:
        raise ValueError(f"Error extracting text from PDF: {str(e)}")
