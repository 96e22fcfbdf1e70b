"""
HTML to Word (DOCX) conversion
"""
from io import BytesIO

from htmldocx import HtmlToDocx


def html_to_docx(html: str) -> bytes:
    """Convert an HTML document to DOCX bytes"""
    document = HtmlToDocx().parse_html_string(html)
    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()
