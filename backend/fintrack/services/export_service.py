# Spreadsheet export
# - flattens entries into (label, Amount, Date) rows
# - writes a single-sheet .xlsx workbook into memory; nothing touches the filesystem

import io
import logging
from typing import Sequence

import pandas as pd

from ..models.entry import EntryKind, FinancialEntry

logger = logging.getLogger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def entries_to_frame(kind: EntryKind, entries: Sequence[FinancialEntry]) -> pd.DataFrame:
    columns = [kind.label_header, "Amount", "Date"]
    rows = [
        {
            kind.label_header: getattr(entry, kind.label_field),
            "Amount": entry.amount,
            "Date": entry.date,
        }
        for entry in entries
    ]
    return pd.DataFrame(rows, columns=columns)


def build_workbook(kind: EntryKind, entries: Sequence[FinancialEntry]) -> bytes:
    df = entries_to_frame(kind, entries)
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=kind.sheet_name, index=False)
    logger.info(f"[{kind.name}] Built workbook with {len(df)} rows")
    return buffer.getvalue()
