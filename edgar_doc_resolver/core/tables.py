"""
Table extraction and spreadsheet serialization
"""
from io import BytesIO
from typing import Optional

import pandas as pd
from bs4 import BeautifulSoup

SHEET_NAME = "Data"


def extract_first_table(html: str) -> Optional[list[list[str]]]:
    """Return the first <table> as rows of cell text, or None if there is none.

    Header and data cells are both kept, in document order. Rows without
    any cell are dropped.
    """
    soup = BeautifulSoup(html, "html.parser")
    table = soup.find("table")
    if table is None:
        return None

    rows = []
    for tr in table.find_all("tr"):
        cells = [cell.get_text(strip=True) for cell in tr.find_all(["th", "td"])]
        if cells:
            rows.append(cells)
    return rows or None


def rows_to_xlsx(rows: list[list[str]]) -> bytes:
    """Serialize rows to a single-sheet XLSX workbook"""
    df = pd.DataFrame(rows)
    buffer = BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=SHEET_NAME, index=False, header=False)
    return buffer.getvalue()
