"""
edgar-doc-resolver

Resolve the primary document of an SEC EDGAR filing and export it
as PDF or XLSX.
"""
__version__ = "0.1.0"
