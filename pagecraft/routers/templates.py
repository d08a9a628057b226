from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from openai import OpenAIError
from sqlalchemy.orm import Session

from pagecraft.config import settings
from pagecraft.db.base import get_session
from pagecraft.db.repositories.custom_variables import CustomVariablesRepository
from pagecraft.llm.client import LLMClientConfigError, LLMResponseError
from pagecraft.schemas.personalization import CustomVariable
from pagecraft.schemas.templates import GenerateRequest, RenderRequest, Template, TemplateUpdateRequest
from pagecraft.services.page_generation import PageGenerationError, generate_sections
from pagecraft.services.page_render import render_page
from pagecraft.services.personalization import build_variables
from pagecraft.services.section_registry import SectionValidationError
from pagecraft.services.template_editor import EditorError, EditorSession, FieldValidationError
from pagecraft.services.template_store import (
    TemplateStore,
    TemplateStoreError,
    build_template_store,
    template_from_document,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/templates", tags=["templates"])


def get_template_store() -> TemplateStore:
    try:
        return build_template_store(settings)
    except TemplateStoreError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc


def _store_error(exc: TemplateStoreError) -> HTTPException:
    detail: object = str(exc)
    errors = getattr(exc, "errors", None)
    if errors:
        detail = {"message": str(exc), "errors": errors}
    return HTTPException(status_code=exc.status_code, detail=detail)


@router.post("/generate")
def generate_page(payload: GenerateRequest):
    try:
        report = generate_sections(payload.prompt, model=payload.model)
    except LLMClientConfigError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except (PageGenerationError, LLMResponseError) as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc
    except OpenAIError as exc:
        logger.warning("Page generation request failed", extra={"error": str(exc)})
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY, detail="The language model request failed."
        ) from exc
    return {
        "sections": [section.model_dump(mode="json") for section in report.accepted],
        "errors": report.error_payload(),
    }


@router.get("/{slug}", response_model=Template)
async def get_template(slug: str, store: TemplateStore = Depends(get_template_store)) -> Template:
    try:
        return template_from_document(await store.load_by_slug(slug))
    except TemplateStoreError as exc:
        raise _store_error(exc) from exc


@router.put("/{template_id}", response_model=Template)
async def update_template(
    template_id: str,
    payload: TemplateUpdateRequest,
    store: TemplateStore = Depends(get_template_store),
) -> Template:
    editor = EditorSession(store, template_id=template_id)
    try:
        await editor.load()
        for name, value in payload.model_dump(exclude_unset=True).items():
            editor.update_field(name, value)
        if editor.is_dirty:
            await editor.save()
    except TemplateStoreError as exc:
        raise _store_error(exc) from exc
    except SectionValidationError as exc:
        raise HTTPException(
            status_code=422,
            detail={"message": str(exc), "index": exc.index, "id": exc.section_id, "errors": exc.messages},
        ) from exc
    except FieldValidationError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except EditorError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    finally:
        editor.close()
    working = editor.working
    assert working is not None
    return working


@router.post("/{slug}/render")
async def render_template(
    slug: str,
    payload: RenderRequest,
    store: TemplateStore = Depends(get_template_store),
    session: Session = Depends(get_session),
):
    try:
        template = template_from_document(await store.load_by_slug(slug))
    except TemplateStoreError as exc:
        raise _store_error(exc) from exc
    custom_variables = [
        CustomVariable.model_validate(record) for record in CustomVariablesRepository(session).list()
    ]
    variables = build_variables(custom_variables, payload.variables)
    page = render_page(template, payload.data, variables)
    logger.info(
        "Rendered template",
        extra={"slug": slug, "sections": len(page.sections), "custom_variables": len(custom_variables)},
    )
    return page.to_dict()
