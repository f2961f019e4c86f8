from typing import List
from fastapi import APIRouter, HTTPException, Query, Request
from core.mapping import import_section
from docs.mapping.headers import (
    apply_mapping_description,
    load_sections_description,
    map_headers_description,
)
from exceptions.custom_errors import *
from schemas.ai.services import HeaderMappingRequest
from schemas.entities.requests import (
    MappingApplyRequest,
    MappingApplyResponse,
    SectionPayload,
)
from schemas.entities.tables import MappingResult
from utils.helpers.header_mapping import map_headers
from utils.loader import load_sections

router = APIRouter(prefix="/mapping", tags=["Header Mapping"])


@router.post(
    "/sections",
    response_model=List[SectionPayload],
    description=load_sections_description,
    summary="Load Spreadsheet Sections",
)
async def load_spreadsheet_sections(request: Request, filename: str = Query(...)):
    content = await request.body()
    try:
        sections = load_sections(content, filename=filename)
    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=CUSTOM_ERRORS[type(e)], detail=str(e))
    return [
        SectionPayload(name=s.name, headers=s.headers, rows=s.rows) for s in sections
    ]


@router.post(
    "/headers",
    response_model=MappingResult,
    description=map_headers_description,
    summary="Map Headers",
)
def map_section_headers(data: HeaderMappingRequest):
    return map_headers(data.headers, data.sampleRows)


@router.post(
    "/apply",
    response_model=MappingApplyResponse,
    description=apply_mapping_description,
    summary="Apply Header Mapping",
)
def apply_mapping(data: MappingApplyRequest):
    if len(data.mapping.mappedHeaders) != len(data.headers):
        raise HTTPException(
            status_code=400,
            detail=f"mappedHeaders has {len(data.mapping.mappedHeaders)} entries, "
            f"expected {len(data.headers)}",
        )
    imported = import_section(data.rows, data.mapping)
    if imported is None:
        return MappingApplyResponse(imported=False)
    entity, table = imported
    return MappingApplyResponse(imported=True, entity=entity, table=table)
