from __future__ import annotations

import json
import logging
from typing import Any, Optional, get_args, get_origin

from pydantic import BaseModel

from pagecraft.config import settings
from pagecraft.llm.client import LLMClient, LLMGenerationParams
from pagecraft.services import section_registry
from pagecraft.services.section_registry import SectionValidationReport

logger = logging.getLogger(__name__)


class PageGenerationError(RuntimeError):
    pass


# Kinds the generator is asked to compose pages from.
GENERATION_KINDS: tuple[str, ...] = (
    "hero",
    "headline",
    "body",
    "features",
    "benefits",
    "steps",
    "testimonials",
    "stats",
    "cta",
    "faq",
    "footer",
)

_STYLE_HINT = (
    "backgroundColor (hex), textColor (hex), paddingY (e.g. \"64px\"), fontSize, fontWeight, "
    "textAlign, buttonColor, buttonTextColor, maxWidth, accentColor"
)


def _describe_annotation(annotation: Any) -> str:
    if get_origin(annotation) is list:
        (item,) = get_args(annotation)
        if isinstance(item, type) and issubclass(item, BaseModel):
            return f"array of {{{', '.join(item.model_fields)}}}"
        return "array of strings"
    return ""


def _describe_kind(kind: str) -> str:
    content_model = section_registry.get_definition(kind).content_model
    fields = []
    for name, info in content_model.model_fields.items():
        if name.startswith("hide"):
            continue
        detail = _describe_annotation(info.annotation)
        fields.append(f"{name} ({detail})" if detail else name)
    return f'- "{kind}": {", ".join(fields)}'


def build_system_prompt(max_sections: int) -> str:
    kinds = "\n".join(_describe_kind(kind) for kind in GENERATION_KINDS)
    return "\n".join(
        [
            "You are a landing page architect. Given a business description, generate a JSON array of page "
            "sections for a drag-and-drop page builder.",
            "",
            "Available section types and their content fields:",
            kinds,
            "",
            "Each section has:",
            "- id: random 8-char string",
            "- type: one of the types above",
            "- content: object with only the fields listed for its type",
            f"- style: object with {_STYLE_HINT}",
            "",
            f"Generate 5-{max_sections} sections that create a compelling landing page. Use colors that fit "
            "the brand or industry. Make copy specific to the business described, not generic. Use "
            "personalization tokens like {{first_name}} and {{company}} in the headline and subheadline "
            "where it makes sense for outreach. Text may use **bold**, *italic*, "
            "[[size:large]]...[[/size:large]] and [[color:primary]]...[[/color:primary]] markers.",
            "",
            "Return ONLY a valid JSON array, no markdown, no explanation.",
        ]
    )


def _extract_json_array(text: str) -> list[Any]:
    text = (text or "").strip()
    if not text:
        raise PageGenerationError("Model returned empty response")
    try:
        parsed = json.loads(text)
    except ValueError:
        parsed = None
    if isinstance(parsed, list):
        return parsed
    if isinstance(parsed, dict) and isinstance(parsed.get("sections"), list):
        return parsed["sections"]

    start: int | None = None
    depth = 0
    in_string = False
    escape = False
    for i, ch in enumerate(text):
        if start is None:
            if ch == "[":
                start = i
                depth = 1
                in_string = False
                escape = False
            continue

        if in_string:
            if escape:
                escape = False
                continue
            if ch == "\\":
                escape = True
                continue
            if ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
            if depth == 0:
                candidate = text[start : i + 1]
                start = None
                try:
                    parsed = json.loads(candidate)
                except ValueError:
                    continue
                if isinstance(parsed, list):
                    return parsed

    raise PageGenerationError("Model did not return a JSON array")


def _ensure_section_ids(raw_sections: list[Any]) -> None:
    seen: set[str] = set()
    for raw in raw_sections:
        if not isinstance(raw, dict):
            continue
        section_id = raw.get("id")
        if not isinstance(section_id, str) or not section_id.strip() or section_id in seen:
            section_id = section_registry.new_section_id()
            raw["id"] = section_id
        seen.add(section_id)


def generate_sections(
    prompt: str,
    *,
    llm: Optional[LLMClient] = None,
    model: Optional[str] = None,
    max_sections: Optional[int] = None,
) -> SectionValidationReport:
    """Ask the model for a page and keep only the sections that validate."""
    if not prompt or not prompt.strip():
        raise PageGenerationError("prompt is required")
    limit = max_sections or settings.PAGE_GENERATION_MAX_SECTIONS
    llm = llm or LLMClient()
    params = LLMGenerationParams(
        model=model,
        temperature=settings.PAGE_GENERATION_TEMPERATURE,
        system_prompt=build_system_prompt(limit),
        trace_name="page_generation",
    )
    raw_text = llm.generate_text(prompt.strip(), params)
    raw_sections = _extract_json_array(raw_text)
    if len(raw_sections) > limit:
        logger.info(
            "Truncating generated sections",
            extra={"received": len(raw_sections), "limit": limit},
        )
        raw_sections = raw_sections[:limit]
    _ensure_section_ids(raw_sections)
    report = section_registry.validate_sections(raw_sections)
    logger.info(
        "Generated page sections",
        extra={"accepted": len(report.accepted), "rejected": len(report.rejected)},
    )
    if not report.accepted:
        raise PageGenerationError("Model did not return any valid sections")
    return report
