from __future__ import annotations

import asyncio
import copy
import logging
from typing import Any, Callable, Optional, Protocol

import httpx
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pagecraft.db.models import LandingPageTemplate
from pagecraft.db.repositories.templates import TemplatesRepository
from pagecraft.schemas.templates import Template

logger = logging.getLogger(__name__)


class TemplateStoreError(RuntimeError):
    def __init__(self, message: str, *, status_code: int = 502) -> None:
        super().__init__(message)
        self.status_code = status_code


class TemplateNotFoundError(TemplateStoreError):
    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=404)


class TemplateConflictError(TemplateStoreError):
    def __init__(self, message: str = "Save failed: no template row was updated.") -> None:
        super().__init__(message, status_code=409)


class TemplateLoadError(TemplateStoreError):
    def __init__(self, message: str, *, errors: Optional[list[str]] = None) -> None:
        super().__init__(message, status_code=422)
        self.errors = errors or []


# Template field -> persisted column.
_COLUMNS: dict[str, str] = {
    "id": "id",
    "slug": "slug",
    "name": "name",
    "sections": "sections",
    "accentColor": "accent_color",
    "personalizationConfig": "personalization_config",
}


def to_columns(fields: dict[str, Any]) -> dict[str, Any]:
    unknown = set(fields) - set(_COLUMNS)
    if unknown:
        raise TemplateStoreError(f"Unknown template fields: {sorted(unknown)}", status_code=422)
    return {_COLUMNS[name]: value for name, value in fields.items()}


def template_from_document(document: dict[str, Any]) -> Template:
    """Validate a persisted row into a Template or raise TemplateLoadError."""
    if not isinstance(document, dict):
        raise TemplateLoadError("Template document must be an object.")
    payload = {name: document.get(column) for name, column in _COLUMNS.items()}
    if payload["sections"] is None:
        payload["sections"] = []
    if payload["personalizationConfig"] is None:
        payload["personalizationConfig"] = {}
    try:
        return Template.model_validate(payload)
    except ValidationError as exc:
        errors = [
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()
        ]
        raise TemplateLoadError(
            f"Template {document.get('id')!r} failed validation.",
            errors=errors,
        ) from exc


def _row_to_document(row: LandingPageTemplate) -> dict[str, Any]:
    return {
        "id": row.id,
        "slug": row.slug,
        "name": row.name,
        "sections": copy.deepcopy(row.sections),
        "accent_color": row.accent_color,
        "personalization_config": copy.deepcopy(row.personalization_config),
    }


class TemplateStore(Protocol):
    async def load(self, template_id: str) -> dict[str, Any]: ...

    async def load_by_slug(self, slug: str) -> dict[str, Any]: ...

    async def save(self, template_id: str, fields: dict[str, Any]) -> None: ...


class InMemoryTemplateStore:
    """Holds documents keyed by id. Handy for tests and local previews."""

    def __init__(self, documents: Optional[list[dict[str, Any]]] = None) -> None:
        self.documents: dict[str, dict[str, Any]] = {}
        self.saves: list[tuple[str, dict[str, Any]]] = []
        for document in documents or []:
            self.documents[document["id"]] = copy.deepcopy(document)

    async def load(self, template_id: str) -> dict[str, Any]:
        document = self.documents.get(template_id)
        if document is None:
            raise TemplateNotFoundError(f"Template not found: {template_id}")
        return copy.deepcopy(document)

    async def load_by_slug(self, slug: str) -> dict[str, Any]:
        for document in self.documents.values():
            if document.get("slug") == slug:
                return copy.deepcopy(document)
        raise TemplateNotFoundError(f"Template not found: {slug}")

    async def save(self, template_id: str, fields: dict[str, Any]) -> None:
        document = self.documents.get(template_id)
        if document is None:
            raise TemplateConflictError()
        columns = to_columns(fields)
        document.update(copy.deepcopy(columns))
        self.saves.append((template_id, copy.deepcopy(fields)))


class SqlTemplateStore:
    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def _load(self, *, template_id: Optional[str] = None, slug: Optional[str] = None) -> dict[str, Any]:
        session = self._session_factory()
        try:
            repo = TemplatesRepository(session)
            row = repo.get(template_id=template_id) if template_id else repo.get_by_slug(slug=slug or "")
            if not row:
                raise TemplateNotFoundError(f"Template not found: {template_id or slug}")
            return _row_to_document(row)
        except SQLAlchemyError as exc:
            raise TemplateStoreError(f"Failed to load template: {exc}") from exc
        finally:
            session.close()

    def _save(self, template_id: str, fields: dict[str, Any]) -> None:
        columns = to_columns(fields)
        columns.pop("id", None)
        session = self._session_factory()
        try:
            updated = TemplatesRepository(session).update(template_id=template_id, **columns)
        except SQLAlchemyError as exc:
            session.rollback()
            raise TemplateStoreError(f"Failed to save template: {exc}") from exc
        finally:
            session.close()
        if updated is None:
            raise TemplateConflictError()

    async def load(self, template_id: str) -> dict[str, Any]:
        return await asyncio.to_thread(self._load, template_id=template_id)

    async def load_by_slug(self, slug: str) -> dict[str, Any]:
        return await asyncio.to_thread(self._load, slug=slug)

    async def save(self, template_id: str, fields: dict[str, Any]) -> None:
        await asyncio.to_thread(self._save, template_id, fields)


class RestTemplateStore:
    """PostgREST-style document store (e.g. a Supabase table)."""

    def __init__(
        self,
        *,
        base_url: str,
        api_key: Optional[str] = None,
        table: str = "landing_page_templates",
        timeout: float = 20.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._url = f"{base_url.rstrip('/')}/{table}"
        self._timeout = timeout
        self._transport = transport
        self._headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if api_key:
            self._headers["apikey"] = api_key
            self._headers["Authorization"] = f"Bearer {api_key}"

    async def _request(
        self,
        method: str,
        *,
        params: dict[str, str],
        payload: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> list[Any]:
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.request(
                    method,
                    self._url,
                    params=params,
                    json=payload,
                    headers={**self._headers, **(headers or {})},
                )
        except httpx.RequestError as exc:
            raise TemplateStoreError(f"Network error while calling template store: {exc}") from exc

        if response.status_code >= 400:
            raise TemplateStoreError(
                f"Template store call failed ({response.status_code}): {response.text}",
                status_code=502,
            )
        try:
            body = response.json()
        except ValueError as exc:
            raise TemplateStoreError("Template store returned invalid JSON") from exc
        if not isinstance(body, list):
            raise TemplateStoreError("Template store response must be a JSON array")
        return body

    async def _load_one(self, column: str, value: str) -> dict[str, Any]:
        rows = await self._request("GET", params={column: f"eq.{value}", "select": "*", "limit": "1"})
        if not rows:
            raise TemplateNotFoundError(f"Template not found: {value}")
        return rows[0]

    async def load(self, template_id: str) -> dict[str, Any]:
        return await self._load_one("id", template_id)

    async def load_by_slug(self, slug: str) -> dict[str, Any]:
        return await self._load_one("slug", slug)

    async def save(self, template_id: str, fields: dict[str, Any]) -> None:
        columns = to_columns(fields)
        columns.pop("id", None)
        rows = await self._request(
            "PATCH",
            params={"id": f"eq.{template_id}"},
            payload=columns,
            headers={"Prefer": "return=representation"},
        )
        if not rows:
            logger.warning(
                "Template save affected no rows",
                extra={"template_id": template_id},
            )
            raise TemplateConflictError()


def build_template_store(settings: Any, session_factory: Optional[Callable[[], Session]] = None) -> TemplateStore:
    if settings.TEMPLATE_STORE == "rest":
        if not settings.TEMPLATE_REST_URL:
            raise TemplateStoreError("TEMPLATE_REST_URL is required when TEMPLATE_STORE=rest", status_code=500)
        return RestTemplateStore(
            base_url=settings.TEMPLATE_REST_URL,
            api_key=settings.TEMPLATE_REST_API_KEY,
            table=settings.TEMPLATE_REST_TABLE,
            timeout=settings.TEMPLATE_REST_TIMEOUT_SECONDS,
        )
    if session_factory is None:
        from pagecraft.db.base import SessionLocal

        session_factory = SessionLocal
    return SqlTemplateStore(session_factory)
