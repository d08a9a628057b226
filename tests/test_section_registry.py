from datetime import date, timedelta

import pytest

from pagecraft.schemas.sections import CountdownContent, HeadlineSection
from pagecraft.services import section_registry
from pagecraft.services.section_registry import (
    SECTION_CATEGORIES,
    SectionValidationError,
    UnknownSectionKindError,
)


def test_registry_has_every_kind_in_palette_order():
    kinds = [definition.kind for definition in section_registry.palette()]
    assert len(kinds) == 34
    assert kinds[0] == "logo"
    assert kinds[-1] == "qrCode"
    assert len(set(kinds)) == len(kinds)
    assert {definition.category for definition in section_registry.palette()} <= set(SECTION_CATEGORIES)


def test_default_for_returns_registered_defaults():
    content, style = section_registry.default_for("hero")
    assert content.text == "Build Something Amazing"
    assert content.buttonLink == "#"
    assert style.backgroundColor == "#0f172a"

    content, _ = section_registry.default_for("benefits")
    assert len(content.benefitItems) == 6


def test_default_for_returns_fresh_instances():
    first, _ = section_registry.default_for("faq")
    first.faqItems.clear()
    second, _ = section_registry.default_for("faq")
    assert len(second.faqItems) == 3


def test_default_for_unknown_kind():
    with pytest.raises(UnknownSectionKindError):
        section_registry.default_for("carousel")


def test_countdown_defaults_to_one_week_out():
    assert CountdownContent().countdownDate == (date.today() + timedelta(days=7)).isoformat()


def test_create_section_uses_defaults_and_fresh_id():
    section = section_registry.create_section("stats")
    assert section.type == "stats"
    assert len(section.id) == 8
    assert len(section.content.statItems) == 4
    assert section.style.accentColor == "#6d54df"
    assert section_registry.create_section("stats", section_id="fixed").id == "fixed"


def test_validate_fills_missing_content_and_style_from_defaults():
    section = section_registry.validate(
        {"id": "h1", "type": "headline", "content": {"text": "Hi"}, "style": {"textColor": "#000000"}}
    )
    assert isinstance(section, HeadlineSection)
    assert section.content.text == "Hi"
    assert section.style.textColor == "#000000"
    assert section.style.fontSize == "48px"


def test_validate_drops_unknown_style_keys():
    section = section_registry.validate({"id": "h1", "type": "headline", "style": {"bogus": 1}})
    assert "bogus" not in section.style.model_dump()


def test_validate_rejects_unknown_content_keys():
    with pytest.raises(SectionValidationError) as exc_info:
        section_registry.validate(
            {"id": "h1", "type": "headline", "content": {"text": "x", "heroBadge": "New"}}
        )
    assert exc_info.value.section_id == "h1"
    assert any("heroBadge" in message for message in exc_info.value.messages)


def test_validate_rejects_unknown_kind():
    with pytest.raises(UnknownSectionKindError) as exc_info:
        section_registry.validate({"id": "x1", "type": "carousel", "content": {}})
    assert exc_info.value.section_id == "x1"


def test_validate_rejects_wrong_field_type():
    with pytest.raises(SectionValidationError):
        section_registry.validate({"id": "q1", "type": "qrCode", "content": {"qrCodeSize": "big"}})
    with pytest.raises(SectionValidationError):
        section_registry.validate({"id": "b1", "type": "benefits", "content": {"benefitItems": "one"}})


def test_validate_requires_object_and_id():
    with pytest.raises(SectionValidationError):
        section_registry.validate(["not", "a", "section"])
    with pytest.raises(SectionValidationError):
        section_registry.validate({"type": "headline", "content": {}})


def test_validate_sections_reports_and_skips():
    report = section_registry.validate_sections(
        [
            {"id": "a1", "type": "headline", "content": {"text": "One"}},
            {"id": "b2", "type": "nope"},
            {"id": "a1", "type": "body", "content": {}},
            {"id": "c3", "type": "cta", "content": {"buttonText": "Go"}},
        ]
    )
    assert [section.id for section in report.accepted] == ["a1", "c3"]
    assert [error.index for error in report.rejected] == [1, 2]
    assert not report.ok
    payload = report.error_payload()
    assert payload[1]["id"] == "a1"
    assert "Duplicate" in payload[1]["errors"][0]


def test_text_fields_exclude_links_and_machine_values():
    hero_fields = section_registry.text_fields("hero")
    assert "text" in hero_fields
    assert "heroSubheadline" in hero_fields
    assert "buttonText" in hero_fields
    assert "buttonLink" not in hero_fields
    assert "heroImageUrl" not in hero_fields
    assert "countdownDate" not in section_registry.text_fields("countdown")
    assert "formRecipientEmail" not in section_registry.text_fields("form")
    assert section_registry.text_fields("spacer") == ()


def test_link_fields():
    assert set(section_registry.link_fields("hero")) == {
        "buttonLink",
        "secondaryButtonLink",
        "heroImageUrl",
    }
