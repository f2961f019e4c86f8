import csv
import io
import pandas as pd
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Any, List, Optional, Union
from core.constraints import is_empty
from exceptions.custom_errors import FileContentError, FileReadingError
from utils.logger import logger


@dataclass
class RawSection:
    """One header row plus its data rows, before any mapping."""

    name: str
    headers: List[str]
    rows: List[List[Any]] = field(default_factory=list)


def _file_kind(path_or_buffer: Any, filename: Optional[str]) -> str:
    name = filename or (str(path_or_buffer) if isinstance(path_or_buffer, (str, Path)) else "")
    suffix = Path(name).suffix.lower()
    if suffix in (".csv", ".xlsx", ".xls"):
        return suffix
    raise FileContentError(
        f"Unsupported file type {suffix or '(none)'!r}. Please upload a .csv or .xlsx file."
    )


def _read_text(path_or_buffer: Union[str, Path, bytes, IO]) -> str:
    if isinstance(path_or_buffer, (str, Path)):
        return Path(path_or_buffer).read_text(encoding="utf-8-sig")
    if isinstance(path_or_buffer, bytes):
        return path_or_buffer.decode("utf-8-sig")
    content = path_or_buffer.read()
    return content.decode("utf-8-sig") if isinstance(content, bytes) else content


def _clean_cell(value: Any) -> Any:
    return None if is_empty(value) else value


def _make_section(name: str, block: pd.DataFrame) -> RawSection:
    """Build a section from a block whose first row is the header; trailing blank columns are cut."""
    headers = ["" if is_empty(h) else str(h).strip() for h in block.iloc[0].tolist()]
    while headers and headers[-1] == "":
        headers.pop()
    width = len(headers)
    rows = [[_clean_cell(v) for v in row[:width]] for row in block.iloc[1:].values.tolist()]
    return RawSection(name=name, headers=headers, rows=rows)


def split_csv_sections(df: pd.DataFrame) -> List[RawSection]:
    """
    Split a raw CSV frame into sections separated by fully blank rows.

    A block needs a header row and at least one data row to count as a section.
    """
    blank = df.apply(lambda row: all(is_empty(v) for v in row), axis=1)
    sections: List[RawSection] = []
    start = None
    for idx, is_blank in enumerate(blank.tolist() + [True]):
        if not is_blank and start is None:
            start = idx
        elif is_blank and start is not None:
            if idx - start > 1:
                sections.append(
                    _make_section(f"Section {len(sections) + 1}", df.iloc[start:idx])
                )
            start = None
    return sections


def load_csv_sections(path_or_buffer: Union[str, Path, bytes, IO]) -> List[RawSection]:
    try:
        text = _read_text(path_or_buffer)
        width = max((len(r) for r in csv.reader(io.StringIO(text))), default=0)
        if width == 0:
            raise FileContentError("CSV file is empty.")
        df = pd.read_csv(
            io.StringIO(text),
            header=None,
            names=range(width),
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=False,
        )
    except FileContentError:
        raise
    except UnicodeDecodeError:
        raise FileContentError("CSV file is not UTF-8 encoded text.")
    except Exception as e:
        raise FileReadingError(f"Error loading CSV file: {e}")

    return split_csv_sections(df)


def load_xlsx_sections(path_or_buffer: Union[str, Path, bytes, IO]) -> List[RawSection]:
    """One section per non-empty sheet, named after the sheet."""
    if isinstance(path_or_buffer, bytes):
        path_or_buffer = io.BytesIO(path_or_buffer)
    try:
        sheets = pd.read_excel(path_or_buffer, sheet_name=None, header=None, dtype=object)
    except Exception as e:
        raise FileReadingError(f"Error loading XLSX file: {e}")

    sections = []
    for sheet_name, df in sheets.items():
        df = df.dropna(how="all")
        if df.empty:
            continue
        sections.append(_make_section(str(sheet_name), df))
    return sections


def load_sections(
    path_or_buffer: Union[str, Path, bytes, IO], filename: Optional[str] = None
) -> List[RawSection]:
    """
    Load every header+rows section from a CSV or XLSX file.

    Parameters:
        path_or_buffer: Path to the file, raw bytes, or a file-like object.
        filename: Original file name; required to tell CSV from XLSX when a buffer is given.

    Returns:
        List of RawSection in file order.
    """
    kind = _file_kind(path_or_buffer, filename)
    if kind == ".csv":
        sections = load_csv_sections(path_or_buffer)
    else:
        sections = load_xlsx_sections(path_or_buffer)

    if not sections:
        raise FileContentError("File contains no data sections.")
    logger.info(
        "Loaded %d section(s): %s", len(sections), ", ".join(s.name for s in sections)
    )
    return sections
