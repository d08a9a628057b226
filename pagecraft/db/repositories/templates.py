from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from pagecraft.db.models import LandingPageTemplate


class TemplatesRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, *, template_id: str) -> Optional[LandingPageTemplate]:
        stmt = select(LandingPageTemplate).where(LandingPageTemplate.id == template_id)
        return self.session.scalars(stmt).first()

    def get_by_slug(self, *, slug: str) -> Optional[LandingPageTemplate]:
        stmt = select(LandingPageTemplate).where(LandingPageTemplate.slug == slug)
        return self.session.scalars(stmt).first()

    def create(
        self,
        *,
        slug: str,
        name: str,
        sections: Optional[list[dict[str, Any]]] = None,
        accent_color: Optional[str] = None,
        personalization_config: Optional[dict[str, Any]] = None,
        template_id: Optional[str] = None,
    ) -> LandingPageTemplate:
        template = LandingPageTemplate(
            slug=slug,
            name=name,
            sections=sections or [],
            accent_color=accent_color,
            personalization_config=personalization_config or {},
        )
        if template_id:
            template.id = template_id
        self.session.add(template)
        self.session.commit()
        self.session.refresh(template)
        return template

    def update(self, *, template_id: str, **fields: Any) -> Optional[LandingPageTemplate]:
        template = self.get(template_id=template_id)
        if not template:
            return None
        for key, value in fields.items():
            setattr(template, key, value)
        self.session.commit()
        self.session.refresh(template)
        return template
