from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from pagecraft.schemas.personalization import PersonalizationData
from pagecraft.schemas.sections import Section
from pagecraft.schemas.templates import Template
from pagecraft.services import markup, section_registry, theme
from pagecraft.services.markup import MarkupNode
from pagecraft.services.personalization import apply_personalization, render_personalized


@dataclass
class RenderedSection:
    section: Section
    text: dict[str, tuple[MarkupNode, ...]] = field(default_factory=dict)
    links: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.section.id,
            "type": self.section.type,
            "content": self.section.content.model_dump(mode="json"),
            "style": self.section.style.model_dump(mode="json", exclude_none=True),
            "html": {name: markup.to_html(nodes) for name, nodes in self.text.items()},
            "plainText": {name: markup.to_plain_text(nodes) for name, nodes in self.text.items()},
            "links": dict(self.links),
        }


@dataclass
class RenderedPage:
    template_id: str
    slug: str
    theme: dict[str, str]
    sections: list[RenderedSection] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "templateId": self.template_id,
            "slug": self.slug,
            "theme": dict(self.theme),
            "themeCss": theme.css_declarations(self.theme),
            "sections": [section.to_dict() for section in self.sections],
        }


def visible_sections(template: Template) -> list[Section]:
    """Sections not switched off through ``show_<type>`` in the template config."""
    return [section for section in template.sections if template.is_enabled(f"show_{section.type}")]


def render_section(
    section: Section,
    data: Optional[PersonalizationData] = None,
    variables: Optional[Mapping[str, str]] = None,
) -> RenderedSection:
    rendered = RenderedSection(section=section)
    for name in section_registry.text_fields(section.type):
        raw = getattr(section.content, name)
        if raw:
            rendered.text[name] = render_personalized(raw, data, variables)
    for name in section_registry.link_fields(section.type):
        raw = getattr(section.content, name)
        if raw:
            rendered.links[name] = apply_personalization(raw, data, variables)
    return rendered


def render_page(
    template: Template,
    data: Optional[PersonalizationData] = None,
    variables: Optional[Mapping[str, str]] = None,
    ambient_theme: Optional[Mapping[str, str]] = None,
) -> RenderedPage:
    page = RenderedPage(
        template_id=template.id,
        slug=template.slug,
        theme=theme.resolve_theme(template.accentColor, ambient_theme),
    )
    for section in visible_sections(template):
        page.sections.append(render_section(section, data, variables))
    return page
