from io import BytesIO
import pandas as pd
from typing import Dict
from schemas.entities.tables import Entities, EntityTable
from utils.constants import ENTITY_TYPES, UNMAPPED_HEADER

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def entity_to_dataframe(table: EntityTable) -> pd.DataFrame:
    """Table as a DataFrame, without the columns nothing was mapped to."""
    keep = [i for i, h in enumerate(table.headers) if h != UNMAPPED_HEADER]
    rows = [[row[i] if i < len(row) else None for i in keep] for row in table.data]
    return pd.DataFrame(rows, columns=[table.headers[i] for i in keep])


def export_entity_csv(table: EntityTable) -> str:
    return entity_to_dataframe(table).to_csv(index=False)


def export_entity_xlsx(table: EntityTable, sheet_name: str = "Sheet1") -> bytes:
    """Generates an Excel workbook from one entity table."""
    return export_workbook({sheet_name: entity_to_dataframe(table)})


def export_workbook(frames: Dict[str, pd.DataFrame]) -> bytes:
    buffer = BytesIO()
    with pd.ExcelWriter(buffer, engine="xlsxwriter") as writer:
        for sheet_name, df in frames.items():
            df.to_excel(writer, sheet_name=sheet_name, index=False)
    buffer.seek(0)
    return buffer.getvalue()


def export_all_csv(entities: Entities) -> str:
    """
    All non-empty tables in one CSV text, each section introduced by a
    ``# <ENTITY> DATA`` line and separated by a blank line.
    """
    sections = []
    for entity in ENTITY_TYPES:
        table = entities.table(entity)
        if not table.data:
            continue
        sections.append(f"# {entity.upper()} DATA\n{export_entity_csv(table)}")
    return "\n".join(sections)


def export_all_xlsx(entities: Entities) -> bytes:
    """One sheet per non-empty entity table, named after the entity."""
    frames = {
        entity.capitalize(): entity_to_dataframe(entities.table(entity))
        for entity in ENTITY_TYPES
        if entities.table(entity).data
    }
    if not frames:
        frames = {"Empty": pd.DataFrame()}
    return export_workbook(frames)
