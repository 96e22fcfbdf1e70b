"""
Errors raised by the core

Resolution strategies raise ResolutionError subclasses; the resolver
treats them as "try the next strategy" until the last one fails.
"""


class ResolutionError(Exception):
    """Base class for primary document resolution failures"""


class NetworkFailure(ResolutionError):
    """An upstream fetch did not return a success status"""


class ParseFailure(ResolutionError):
    """Expected table or rows were absent from an index page"""


class NoCandidateFound(ResolutionError):
    """Rows were parsed but selection produced nothing"""


class ListingUnavailable(ResolutionError):
    """The listing service fallback failed"""


class ExportError(Exception):
    """Base class for PDF/spreadsheet export failures"""


class RendererNotConfigured(ExportError):
    """PDF API endpoint or key missing"""


class RenderFailure(ExportError):
    """PDF API returned an error"""


class NoTableFound(ExportError):
    """Resolved document has no HTML table"""


class ConversionFailure(ExportError):
    """Document could not be converted to the requested format"""
