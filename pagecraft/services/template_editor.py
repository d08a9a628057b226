from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Iterable, Optional

from pydantic import ValidationError

from pagecraft.schemas.sections import Section, SectionStyle
from pagecraft.schemas.templates import Template
from pagecraft.services import section_registry
from pagecraft.services.section_registry import SectionValidationError
from pagecraft.services.template_store import (
    TemplateStore,
    TemplateStoreError,
    template_from_document,
)

logger = logging.getLogger(__name__)

# Scalar template fields editable through update_field.
EDITABLE_FIELDS: tuple[str, ...] = ("name", "slug", "accentColor", "personalizationConfig")

ORDER_KEY: tuple[str, ...] = ("sections", "order")

DirtyKey = tuple[str, ...]


class EditorState(str, Enum):
    LOADING = "loading"
    CLEAN = "clean"
    DIRTY = "dirty"
    SAVING = "saving"
    ERROR = "error"


class EditorError(RuntimeError):
    pass


class EditorClosedError(EditorError):
    pass


class SaveInProgressError(EditorError):
    def __init__(self) -> None:
        super().__init__("A save is already in progress for this template.")


class SectionNotFoundError(EditorError):
    def __init__(self, section_id: str) -> None:
        super().__init__(f"Section not found: {section_id}")
        self.section_id = section_id


class FieldValidationError(EditorError):
    def __init__(self, field: str, messages: list[str]) -> None:
        super().__init__(f"Invalid value for {field}: {'; '.join(messages)}")
        self.field = field
        self.messages = messages


def _messages(exc: ValidationError) -> list[str]:
    return [str(err.get("msg")) for err in exc.errors()]


class EditorSession:
    """Editing session over one template.

    ``baseline`` is the last loaded or saved document and is only replaced by a
    successful save or a reload. Mutations go to the private working copy and
    ``working`` hands out deep copies of it. Each mutation re-checks
    the fields it touched against the baseline, so ``is_dirty`` is a set lookup.
    """

    def __init__(
        self,
        store: TemplateStore,
        *,
        template_id: Optional[str] = None,
        slug: Optional[str] = None,
    ) -> None:
        if not template_id and not slug:
            raise ValueError("EditorSession requires a template_id or a slug.")
        self._store = store
        self.template_id = template_id
        self.slug = slug
        self._baseline: Optional[Template] = None
        self._working: Optional[Template] = None
        self._dirty: set[DirtyKey] = set()
        self._loading = False
        self._saving = False
        self._closed = False
        self.error: Optional[Exception] = None

    # -- state --------------------------------------------------------------

    @property
    def state(self) -> EditorState:
        if self._loading:
            return EditorState.LOADING
        if self._working is None:
            return EditorState.ERROR if self.error is not None else EditorState.LOADING
        if self._saving:
            return EditorState.SAVING
        return EditorState.DIRTY if self._dirty else EditorState.CLEAN

    @property
    def baseline(self) -> Optional[Template]:
        return self._baseline.model_copy(deep=True) if self._baseline is not None else None

    @property
    def working(self) -> Optional[Template]:
        """A copy of the edited document; changes go through the session's methods."""
        return self._working.model_copy(deep=True) if self._working is not None else None

    @property
    def is_dirty(self) -> bool:
        return bool(self._dirty)

    @property
    def is_saving(self) -> bool:
        return self._saving

    @property
    def dirty_fields(self) -> frozenset[DirtyKey]:
        return frozenset(self._dirty)

    # -- loading ------------------------------------------------------------

    async def load(self) -> Template:
        self._ensure_open()
        self._loading = True
        self.error = None
        try:
            if self.template_id:
                document = await self._store.load(self.template_id)
            else:
                document = await self._store.load_by_slug(self.slug or "")
            template = template_from_document(document)
        except TemplateStoreError as exc:
            if not self._closed:
                self._baseline = None
                self._working = None
                self._dirty.clear()
                self.error = exc
            logger.warning(
                "Template load failed",
                extra={"template_id": self.template_id, "slug": self.slug, "error": str(exc)},
            )
            raise
        finally:
            self._loading = False
        if not self._closed:
            self._set_baseline(template)
        return template.model_copy(deep=True)

    async def reload(self) -> Template:
        return await self.load()

    def _set_baseline(self, template: Template) -> None:
        self._baseline = template
        self._working = template.model_copy(deep=True)
        self.template_id = template.id
        self.slug = template.slug
        self._dirty.clear()

    # -- mutations ----------------------------------------------------------

    def update_field(self, name: str, value: Any) -> None:
        working = self._require_working()
        if name == "sections":
            self.replace_sections(value)
            return
        if name not in EDITABLE_FIELDS:
            raise EditorError(f"Unknown template field: {name}")
        try:
            setattr(working, name, value)
        except ValidationError as exc:
            raise FieldValidationError(name, _messages(exc)) from exc
        self._recheck_field(name)

    def update_section_content(self, section_id: str, field: str, value: Any) -> None:
        section = self._find_section(section_id)
        if field not in type(section.content).model_fields:
            raise SectionValidationError(
                [f"content.{field}: unknown field for section type {section.type!r}"],
                section_id=section_id,
            )
        try:
            setattr(section.content, field, value)
        except ValidationError as exc:
            raise SectionValidationError(
                [f"content.{field}: {msg}" for msg in _messages(exc)], section_id=section_id
            ) from exc
        self._recheck_section_field(section_id, "content", field)

    def update_section_style(self, section_id: str, field: str, value: Any) -> None:
        section = self._find_section(section_id)
        if field not in SectionStyle.model_fields:
            raise SectionValidationError([f"style.{field}: unknown style field"], section_id=section_id)
        try:
            setattr(section.style, field, value)
        except ValidationError as exc:
            raise SectionValidationError(
                [f"style.{field}: {msg}" for msg in _messages(exc)], section_id=section_id
            ) from exc
        self._recheck_section_field(section_id, "style", field)

    def add_section(self, kind: str, index: Optional[int] = None) -> Section:
        working = self._require_working()
        section = section_registry.create_section(kind)
        while working.section_by_id(section.id) is not None:
            section = section_registry.create_section(kind)
        if index is None:
            working.sections.append(section)
        else:
            working.sections.insert(max(0, index), section)
        self._recheck_order()
        return section.model_copy(deep=True)

    def remove_section(self, section_id: str) -> None:
        working = self._require_working()
        section = self._find_section(section_id)
        working.sections.remove(section)
        self._dirty = {key for key in self._dirty if not (key[0] == "section" and key[1] == section_id)}
        self._recheck_order()

    def move_section(self, section_id: str, index: int) -> None:
        working = self._require_working()
        section = self._find_section(section_id)
        working.sections.remove(section)
        index = max(0, min(index, len(working.sections)))
        working.sections.insert(index, section)
        self._recheck_order()

    def replace_sections(self, raw_sections: Iterable[Any]) -> None:
        working = self._require_working()
        report = section_registry.validate_sections(raw_sections)
        if report.rejected:
            raise report.rejected[0]
        working.sections = report.accepted
        self._recompute_dirty()

    def discard(self) -> None:
        self._ensure_open()
        if self._baseline is None:
            return
        self._working = self._baseline.model_copy(deep=True)
        self._dirty.clear()

    # -- saving -------------------------------------------------------------

    async def save(self) -> None:
        working = self._require_working()
        if self._saving:
            raise SaveInProgressError()
        self._saving = True
        self.error = None
        snapshot = working.model_copy(deep=True)
        fields = snapshot.persisted_fields()
        try:
            await self._store.save(snapshot.id, fields)
        except TemplateStoreError as exc:
            if not self._closed:
                self.error = exc
            logger.warning(
                "Template save failed",
                extra={"template_id": snapshot.id, "error": str(exc)},
            )
            raise
        finally:
            self._saving = False
        if self._closed:
            return
        self._baseline = snapshot
        self._recompute_dirty()
        logger.info(
            "Template saved",
            extra={"template_id": snapshot.id, "sections": len(snapshot.sections)},
        )

    def close(self) -> None:
        self._closed = True

    # -- dirty tracking -----------------------------------------------------

    def _ensure_open(self) -> None:
        if self._closed:
            raise EditorClosedError("Editor session is closed.")

    def _require_working(self) -> Template:
        self._ensure_open()
        if self._working is None:
            raise EditorError("No template is loaded.")
        return self._working

    def _find_section(self, section_id: str) -> Section:
        section = self._require_working().section_by_id(section_id)
        if section is None:
            raise SectionNotFoundError(section_id)
        return section

    def _mark(self, key: DirtyKey, dirty: bool) -> None:
        if dirty:
            self._dirty.add(key)
        else:
            self._dirty.discard(key)

    def _recheck_field(self, name: str) -> None:
        assert self._baseline is not None and self._working is not None
        self._mark((name,), getattr(self._working, name) != getattr(self._baseline, name))

    def _recheck_order(self) -> None:
        assert self._baseline is not None and self._working is not None
        working_ids = tuple(section.id for section in self._working.sections)
        baseline_ids = tuple(section.id for section in self._baseline.sections)
        self._mark(ORDER_KEY, working_ids != baseline_ids)

    def _recheck_section_field(self, section_id: str, part: str, field: str) -> None:
        assert self._baseline is not None
        key = ("section", section_id, part, field)
        original = self._baseline.section_by_id(section_id)
        current = self._find_section(section_id)
        if original is None or original.type != current.type:
            # Covered by the order key or the section's type key.
            self._dirty.discard(key)
            return
        self._mark(key, getattr(getattr(current, part), field) != getattr(getattr(original, part), field))

    def _recompute_dirty(self) -> None:
        assert self._baseline is not None and self._working is not None
        self._dirty.clear()
        for name in EDITABLE_FIELDS:
            self._recheck_field(name)
        self._recheck_order()
        for section in self._working.sections:
            original = self._baseline.section_by_id(section.id)
            if original is None:
                continue
            if original.type != section.type:
                self._dirty.add(("section", section.id, "type"))
                continue
            for field in type(section.content).model_fields:
                if getattr(section.content, field) != getattr(original.content, field):
                    self._dirty.add(("section", section.id, "content", field))
            for field in SectionStyle.model_fields:
                if getattr(section.style, field) != getattr(original.style, field):
                    self._dirty.add(("section", section.id, "style", field))
