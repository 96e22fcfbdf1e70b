"""
Configuration

Environment variables:
- PORT / HOST: HTTP server bind address (default: 127.0.0.1:3000)
- USER_AGENT: identifying User-Agent sent to sec.gov
- SEC_ARCHIVE_ROOT: EDGAR archive root (default: https://www.sec.gov/Archives/edgar/data)
- LISTING_SERVICE_URL: fallback listing endpoint (default: edgartools attachments)
- PDF_API_ENDPOINT / PDF_API_KEY: HTML-to-PDF API (PDF export disabled if unset)
- FILENAME_PATTERNS_FILE: JSON file replacing the built-in filename patterns
- HTTP_TIMEOUT: seconds for outbound requests (default: no timeout)
"""
import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_PORT = 3000
DEFAULT_HOST = "127.0.0.1"
DEFAULT_USER_AGENT = "edgar-doc-resolver admin@example.com"
DEFAULT_ARCHIVE_ROOT = "https://www.sec.gov/Archives/edgar/data"


@dataclass
class Settings:
    """Runtime configuration passed to the container"""
    user_agent: str = DEFAULT_USER_AGENT
    archive_root: str = DEFAULT_ARCHIVE_ROOT
    listing_url: Optional[str] = None
    pdf_api_endpoint: Optional[str] = None
    pdf_api_key: Optional[str] = None
    filename_patterns_file: Optional[str] = None
    http_timeout: Optional[float] = None
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    @property
    def pdf_configured(self) -> bool:
        return bool(self.pdf_api_endpoint and self.pdf_api_key)


def _optional(name: str) -> Optional[str]:
    value = os.environ.get(name, "").strip()
    return value or None


def get_port() -> int:
    """Get server port from environment or use default"""
    port_str = os.environ.get("PORT", str(DEFAULT_PORT))
    try:
        return int(port_str)
    except ValueError:
        msg = f"Invalid PORT value: {port_str}"
        raise ValueError(msg) from None


def get_http_timeout() -> Optional[float]:
    """Get outbound request timeout in seconds (None means no timeout)"""
    timeout_str = _optional("HTTP_TIMEOUT")
    if timeout_str is None:
        return None
    try:
        return float(timeout_str)
    except ValueError:
        msg = f"Invalid HTTP_TIMEOUT value: {timeout_str}"
        raise ValueError(msg) from None


def get_user_agent() -> str:
    """Get user agent from environment or use default"""
    return os.environ.get("USER_AGENT", DEFAULT_USER_AGENT)


def load_settings() -> Settings:
    """Build Settings from the environment"""
    return Settings(
        user_agent=get_user_agent(),
        archive_root=os.environ.get("SEC_ARCHIVE_ROOT", DEFAULT_ARCHIVE_ROOT),
        listing_url=_optional("LISTING_SERVICE_URL"),
        pdf_api_endpoint=_optional("PDF_API_ENDPOINT"),
        pdf_api_key=_optional("PDF_API_KEY"),
        filename_patterns_file=_optional("FILENAME_PATTERNS_FILE"),
        http_timeout=get_http_timeout(),
        host=os.environ.get("HOST", DEFAULT_HOST),
        port=get_port(),
    )
