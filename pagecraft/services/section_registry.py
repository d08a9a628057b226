from __future__ import annotations

import logging
import secrets
import string
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, get_args

from pydantic import BaseModel, ValidationError

from pagecraft.schemas.sections import (
    DEFAULT_STYLES,
    BannerSection,
    BenefitsSection,
    BodySection,
    CardsSection,
    ComparisonSection,
    CountdownSection,
    CtaSection,
    DividerSection,
    DocumentSection,
    FaqSection,
    FeaturesSection,
    FooterSection,
    FormSection,
    GallerySection,
    HeadlineSection,
    HeroBgSection,
    HeroFormSection,
    HeroImageSection,
    HeroSection,
    HeroVideoSection,
    ImageSection,
    LogoCloudSection,
    LogoSection,
    NewsletterSection,
    PricingSection,
    QrCodeSection,
    QuoteSection,
    Section,
    SectionAdapter,
    SectionBase,
    SectionContent,
    SectionStyle,
    SocialProofSection,
    SpacerSection,
    StatsSection,
    StepsSection,
    TeamSection,
    TestimonialsSection,
    VideoSection,
)

logger = logging.getLogger(__name__)


class SectionValidationError(RuntimeError):
    def __init__(
        self,
        messages: list[str],
        *,
        section_id: Optional[str] = None,
        index: Optional[int] = None,
    ) -> None:
        self.messages = list(messages)
        self.section_id = section_id
        self.index = index
        where = []
        if index is not None:
            where.append(f"index {index}")
        if section_id:
            where.append(f"id {section_id!r}")
        prefix = f"Invalid section ({', '.join(where)})" if where else "Invalid section"
        super().__init__(f"{prefix}: {'; '.join(self.messages)}")


class UnknownSectionKindError(SectionValidationError):
    def __init__(self, kind: Any, **kwargs: Any) -> None:
        self.kind = kind
        super().__init__([f"Unknown section type: {kind!r}"], **kwargs)


SECTION_CATEGORIES: tuple[str, ...] = (
    "Layout",
    "Text",
    "Media",
    "Social Proof",
    "Content",
    "Conversion",
    "Commerce",
    "People",
)


@dataclass(frozen=True)
class SectionDefinition:
    kind: str
    label: str
    icon: str
    category: str
    model: type[SectionBase]

    @property
    def content_model(self) -> type[SectionContent]:
        return self.model.model_fields["content"].annotation  # type: ignore[return-value]


_DEFINITIONS: tuple[SectionDefinition, ...] = (
    SectionDefinition("logo", "Logo", "Image", "Layout", LogoSection),
    SectionDefinition("hero", "Hero", "Sparkles", "Layout", HeroSection),
    SectionDefinition("heroBg", "Hero Background", "ImageIcon", "Layout", HeroBgSection),
    SectionDefinition("heroVideo", "Hero + Video", "Video", "Layout", HeroVideoSection),
    SectionDefinition("heroImage", "Hero + Image", "ImageIcon", "Layout", HeroImageSection),
    SectionDefinition("heroForm", "Hero + Form", "FileText", "Layout", HeroFormSection),
    SectionDefinition("footer", "Footer", "PanelBottom", "Layout", FooterSection),
    SectionDefinition("spacer", "Spacer", "MoveVertical", "Layout", SpacerSection),
    SectionDefinition("divider", "Divider", "Minus", "Layout", DividerSection),
    SectionDefinition("headline", "Headline", "Type", "Text", HeadlineSection),
    SectionDefinition("body", "Body Text", "AlignLeft", "Text", BodySection),
    SectionDefinition("quote", "Quote", "Quote", "Text", QuoteSection),
    SectionDefinition("video", "Video", "Play", "Media", VideoSection),
    SectionDefinition("image", "Image", "Image", "Media", ImageSection),
    SectionDefinition("gallery", "Gallery", "LayoutGrid", "Media", GallerySection),
    SectionDefinition("banner", "Banner", "Flag", "Media", BannerSection),
    SectionDefinition("testimonials", "Testimonials", "MessageSquare", "Social Proof", TestimonialsSection),
    SectionDefinition("logoCloud", "Logo Cloud", "Building2", "Social Proof", LogoCloudSection),
    SectionDefinition("socialProof", "Social Proof", "ThumbsUp", "Social Proof", SocialProofSection),
    SectionDefinition("stats", "Stats", "BarChart3", "Social Proof", StatsSection),
    SectionDefinition("features", "Features", "Grid3X3", "Content", FeaturesSection),
    SectionDefinition("steps", "Steps", "ListOrdered", "Content", StepsSection),
    SectionDefinition("benefits", "Benefits", "CheckCircle", "Content", BenefitsSection),
    SectionDefinition("comparison", "Comparison", "Columns2", "Content", ComparisonSection),
    SectionDefinition("cards", "Cards", "LayoutGrid", "Content", CardsSection),
    SectionDefinition("cta", "Call to Action", "MousePointerClick", "Conversion", CtaSection),
    SectionDefinition("form", "Form", "ClipboardList", "Conversion", FormSection),
    SectionDefinition("newsletter", "Newsletter", "Mail", "Conversion", NewsletterSection),
    SectionDefinition("document", "Document", "FileDown", "Conversion", DocumentSection),
    SectionDefinition("countdown", "Countdown", "Timer", "Conversion", CountdownSection),
    SectionDefinition("pricing", "Pricing", "CreditCard", "Commerce", PricingSection),
    SectionDefinition("faq", "FAQ", "HelpCircle", "Commerce", FaqSection),
    SectionDefinition("team", "Team", "Users", "People", TeamSection),
    SectionDefinition("qrCode", "QR Code", "QrCode", "Conversion", QrCodeSection),
)

SECTION_DEFINITIONS: dict[str, SectionDefinition] = {d.kind: d for d in _DEFINITIONS}

# Top-level string fields that hold addresses or machine values rather than copy.
_NON_TEXT_SUFFIXES = ("Url", "Link", "Email", "Date")
_NON_TEXT_FIELDS = {"dividerStyle", "imageLayout"}

_ID_ALPHABET = string.ascii_lowercase + string.digits


def new_section_id() -> str:
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(8))


def get_definition(kind: str) -> SectionDefinition:
    definition = SECTION_DEFINITIONS.get(kind) if isinstance(kind, str) else None
    if definition is None:
        raise UnknownSectionKindError(kind)
    return definition


def palette() -> list[SectionDefinition]:
    return list(_DEFINITIONS)


def default_for(kind: str) -> tuple[SectionContent, SectionStyle]:
    """Return fresh (content, style) defaults for ``kind``."""
    definition = get_definition(kind)
    content = definition.content_model()
    style = SectionStyle.model_validate(DEFAULT_STYLES.get(kind, {}))
    return content, style


def create_section(kind: str, section_id: Optional[str] = None) -> Section:
    definition = get_definition(kind)
    content, style = default_for(kind)
    return definition.model(id=section_id or new_section_id(), content=content, style=style)


def text_fields(kind: str) -> tuple[str, ...]:
    content_model = get_definition(kind).content_model
    names: list[str] = []
    for name, info in content_model.model_fields.items():
        if info.annotation is not str:
            continue
        if name in _NON_TEXT_FIELDS or name.endswith(_NON_TEXT_SUFFIXES):
            continue
        names.append(name)
    return tuple(names)


def link_fields(kind: str) -> tuple[str, ...]:
    content_model = get_definition(kind).content_model
    return tuple(
        name
        for name, info in content_model.model_fields.items()
        if info.annotation is str and name.endswith(("Url", "Link"))
    )


def _format_errors(exc: ValidationError) -> list[str]:
    messages: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()))
        if err.get("type") == "extra_forbidden":
            messages.append(f"{loc}: unknown field for this section type")
        else:
            messages.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return messages


def validate(raw: Any, *, index: Optional[int] = None) -> Section:
    """Validate an untrusted section payload and return the typed section.

    Missing content fields take the kind's defaults; missing style keys take the
    kind's default style.
    """
    if isinstance(raw, BaseModel):
        raw = raw.model_dump(mode="json")
    if not isinstance(raw, dict):
        raise SectionValidationError(["Section must be an object."], index=index)
    section_id = raw.get("id") if isinstance(raw.get("id"), str) else None
    kind = raw.get("type")
    if not isinstance(kind, str) or kind not in SECTION_DEFINITIONS:
        raise UnknownSectionKindError(kind, section_id=section_id, index=index)
    try:
        return SectionAdapter.validate_python(raw)
    except ValidationError as exc:
        raise SectionValidationError(_format_errors(exc), section_id=section_id, index=index) from exc


@dataclass
class SectionValidationReport:
    accepted: list[Section] = field(default_factory=list)
    rejected: list[SectionValidationError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.rejected

    def error_payload(self) -> list[dict[str, Any]]:
        return [
            {"index": err.index, "id": err.section_id, "errors": err.messages}
            for err in self.rejected
        ]


def validate_sections(raw_sections: Iterable[Any]) -> SectionValidationReport:
    report = SectionValidationReport()
    seen_ids: set[str] = set()
    for index, raw in enumerate(raw_sections):
        try:
            section = validate(raw, index=index)
        except SectionValidationError as exc:
            report.rejected.append(exc)
            continue
        if section.id in seen_ids:
            report.rejected.append(
                SectionValidationError(
                    [f"Duplicate section id: {section.id!r}"],
                    section_id=section.id,
                    index=index,
                )
            )
            continue
        seen_ids.add(section.id)
        report.accepted.append(section)
    if report.rejected:
        logger.info(
            "Rejected sections during validation",
            extra={
                "accepted": len(report.accepted),
                "rejected": len(report.rejected),
                "rejected_indexes": [err.index for err in report.rejected],
            },
        )
    return report


def _check_registry() -> None:
    declared = set(get_args(get_args(Section)[0]))
    registered = {d.model for d in _DEFINITIONS}
    if declared != registered:
        raise RuntimeError("Section registry is out of sync with the Section union.")
    for definition in _DEFINITIONS:
        if definition.category not in SECTION_CATEGORIES:
            raise RuntimeError(f"Unknown palette category {definition.category!r} for {definition.kind}.")


_check_registry()
