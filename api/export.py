from typing import List, Optional
from fastapi import APIRouter, HTTPException
from fastapi.responses import Response
from core.rules_config import dump_rules_config, generate_rules_config
from docs.export.files import (
    export_csv_description,
    export_rules_description,
    export_xlsx_description,
)
from exceptions.custom_errors import *
from schemas.entities.tables import Entities
from schemas.rules.models import Rule
from utils.download import (
    XLSX_MIME,
    export_all_csv,
    export_all_xlsx,
    export_entity_csv,
    export_entity_xlsx,
)

router = APIRouter(prefix="/export", tags=["Export"])


def _attachment(filename: str) -> dict:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}


@router.post(
    "/csv/{entity}",
    description=export_csv_description,
    summary="Export CSV",
)
def export_csv(entity: str, entities: Entities):
    try:
        if entity == "all":
            content = export_all_csv(entities)
        else:
            content = export_entity_csv(entities.table(entity))
    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))
    return Response(
        content=content, media_type="text/csv", headers=_attachment(f"{entity}.csv")
    )


@router.post(
    "/xlsx",
    description=export_xlsx_description,
    summary="Export Excel Workbook",
)
def export_xlsx(entities: Entities, entity: Optional[str] = None):
    try:
        if entity:
            content = export_entity_xlsx(entities.table(entity), entity.capitalize())
        else:
            content = export_all_xlsx(entities)
    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))
    return Response(
        content=content,
        media_type=XLSX_MIME,
        headers=_attachment(f"{entity or 'data-export'}.xlsx"),
    )


@router.post(
    "/rules",
    description=export_rules_description,
    summary="Export Rules Config",
)
def export_rules(rules: List[Rule]):
    config = generate_rules_config(rules)
    return Response(
        content=dump_rules_config(config),
        media_type="application/json",
        headers=_attachment("rules-config.json"),
    )
