"""
Resolution rules - data tables driving the resolver

FORM_PATHS: form types whose primary document lives at a fixed
path inside every filing folder (EDGAR's XSL-rendered views).

FILENAME_PATTERNS: curated filename regexes per form type. These were
tuned against one filer's historical filenames, so they are plain data
and can be replaced with load_filename_patterns().
"""
import json
import re
from pathlib import Path
from typing import Mapping, Union

from .domain import normalize_form_type

FilenamePatterns = dict[str, list[re.Pattern]]

_OWNERSHIP = "xslF345X05/ownership.xml"

DEFAULT_FORM_PATHS: dict[str, str] = {
    # Ownership (Section 16)
    "3": _OWNERSHIP,
    "3/A": _OWNERSHIP,
    "4": _OWNERSHIP,
    "4/A": _OWNERSHIP,
    "5": _OWNERSHIP,
    "5/A": _OWNERSHIP,
    # Schedule 13D/G
    "SCHEDULE 13D": "xslSCHEDULE_13D_X01/primary_doc.xml",
    "SCHEDULE 13D/A": "xslSCHEDULE_13D_X01/primary_doc.xml",
    "SCHEDULE 13G": "xslSCHEDULE_13G_X01/primary_doc.xml",
    "SCHEDULE 13G/A": "xslSCHEDULE_13G_X01/primary_doc.xml",
    "SC 13D": "xslSCHEDULE_13D_X01/primary_doc.xml",
    "SC 13D/A": "xslSCHEDULE_13D_X01/primary_doc.xml",
    "SC 13G": "xslSCHEDULE_13G_X01/primary_doc.xml",
    "SC 13G/A": "xslSCHEDULE_13G_X01/primary_doc.xml",
    # Regulation D
    "D": "xslFormDX01/primary_doc.xml",
    "D/A": "xslFormDX01/primary_doc.xml",
    # Regulation crowdfunding
    "C": "xslC_X01/primary_doc.xml",
    "C/A": "xslC_X01/primary_doc.xml",
    "C-U": "xslC_X01/primary_doc.xml",
    "C-U/A": "xslC_X01/primary_doc.xml",
    "C-AR": "xslC_X01/primary_doc.xml",
    "C-AR/A": "xslC_X01/primary_doc.xml",
    "C-TR": "xslC_X01/primary_doc.xml",
    # Rule 144
    "144": "xsl144X01/primary_doc.xml",
    "144/A": "xsl144X01/primary_doc.xml",
    # Notice of effectiveness
    "EFFECT": "xslEFFECTX01/primary_doc.xml",
    # Regulation A
    "1-A": "xsl1-A_X01/primary_doc.xml",
    "1-A/A": "xsl1-A_X01/primary_doc.xml",
    "1-K": "xsl1-K_X01/primary_doc.xml",
    "1-K/A": "xsl1-K_X01/primary_doc.xml",
    "1-Z": "xsl1-Z_X01/primary_doc.xml",
    "1-Z/A": "xsl1-Z_X01/primary_doc.xml",
    # Qualification notice
    "QUALIF": "xslQUALIFX01/primary_doc.xml",
}

DEFAULT_FILENAME_PATTERNS: dict[str, list[str]] = {
    "10-K": [r"10-?k(?!a)"],
    "10-K/A": [r"10-?ka", r"10-?k_?a"],
    "10-Q": [r"10-?q(?!a)"],
    "10-Q/A": [r"10-?qa"],
    "8-K": [r"8-?k(?!a)"],
    "8-K/A": [r"8-?ka"],
    "DEF 14A": [r"def-?14a", r"proxy"],
    "S-1": [r"s-?1(?!\d)", r"^ex99-?1\.htm$"],
    "S-1/A": [r"s-?1a", r"s-?1_?a"],
    "S-8": [r"s-?8(?!\d)"],
    "424B4": [r"424b4"],
}


def compile_patterns(raw: Mapping[str, list[str]]) -> FilenamePatterns:
    """Compile {form: [regex, ...]} into case-insensitive patterns, keyed by normalized form"""
    compiled: FilenamePatterns = {}
    for form_type, patterns in raw.items():
        compiled[normalize_form_type(form_type)] = [re.compile(p, re.IGNORECASE) for p in patterns]
    return compiled


def normalize_form_paths(raw: Mapping[str, str]) -> dict[str, str]:
    return {normalize_form_type(form): path.lstrip("/") for form, path in raw.items()}


def load_filename_patterns(path: Union[str, Path]) -> FilenamePatterns:
    """Load filename patterns from a JSON file of {form_type: [regex, ...]}"""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Filename patterns file must hold a JSON object: {path}")
    for form_type, patterns in data.items():
        if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
            raise ValueError(f"Patterns for {form_type!r} must be a list of strings")
    return compile_patterns(data)


def default_filename_patterns() -> FilenamePatterns:
    return compile_patterns(DEFAULT_FILENAME_PATTERNS)
