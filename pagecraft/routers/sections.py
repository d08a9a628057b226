from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from pagecraft.schemas.templates import (
    PaletteEntry,
    SectionErrorOut,
    SectionsValidateRequest,
    SectionsValidateResponse,
)
from pagecraft.services import section_registry
from pagecraft.services.section_registry import UnknownSectionKindError

router = APIRouter(prefix="/sections", tags=["sections"])


@router.get("/palette")
def get_palette() -> dict[str, object]:
    entries = [
        PaletteEntry(type=d.kind, label=d.label, icon=d.icon, category=d.category)
        for d in section_registry.palette()
    ]
    return {"categories": list(section_registry.SECTION_CATEGORIES), "sections": entries}


@router.get("/{kind}/default")
def get_section_default(kind: str):
    try:
        section = section_registry.create_section(kind)
    except UnknownSectionKindError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return section.model_dump(mode="json")


@router.post("/validate", response_model=SectionsValidateResponse)
def validate_sections(payload: SectionsValidateRequest) -> SectionsValidateResponse:
    report = section_registry.validate_sections(payload.sections)
    return SectionsValidateResponse(
        sections=report.accepted,
        errors=[SectionErrorOut(**item) for item in report.error_payload()],
    )
