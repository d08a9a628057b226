import pytest

from pagecraft.schemas.personalization import CustomVariable, PersonalizationData
from pagecraft.services.markup import StyledNode, TextNode, to_plain_text
from pagecraft.services.personalization import (
    SYSTEM_VARIABLES,
    apply_personalization,
    build_variables,
    render_personalized,
)

def _data(**kwargs) -> PersonalizationData:
    return PersonalizationData(**kwargs)

def test_replaces_system_tokens_case_insensitively():
    data = _data(first_name="Ada", company="Acme")
    assert apply_personalization("Hi {{first_name}} from {{COMPANY}}", data) == "Hi Ada from Acme"
    assert apply_personalization("{{First_Name}}", data) == "Ada"

def test_company_name_is_an_alias_for_company():
    assert apply_personalization("{{company_name}}", _data(company="Acme")) == "Acme"

@pytest.mark.parametrize(
    "data, expected",
    [
        ({"first_name": "Ada", "last_name": "Lovelace"}, "Ada Lovelace"),
        ({"first_name": "Ada"}, "Ada"),
        ({"last_name": "Lovelace"}, "Lovelace"),
        ({"first_name": "Ada", "last_name": "Lovelace", "full_name": "Countess Ada"}, "Countess Ada"),
        ({}, ""),
    ],
)
def test_full_name_derivation(data, expected):
    assert apply_personalization("{{full_name}}", _data(**data)) == expected

def test_unresolved_tokens_are_removed_and_result_trimmed():
    assert apply_personalization("  {{unknown}} Hello {{custom_field}} ", _data()) == "Hello"

def test_token_free_strings_are_returned_unchanged():
    raw = "  spaced   out\n\ntext  "
    assert apply_personalization(raw, _data(first_name="Ada")) == raw
    assert apply_personalization(apply_personalization(raw, _data()), _data()) == raw

def test_internal_whitespace_is_preserved():
    assert apply_personalization("Hi  {{first_name}}\n\nBye", _data(first_name="Ada")) == "Hi  Ada\n\nBye"

@pytest.mark.parametrize(
    "raw, data, expected",
    [
        ("Hi {{first_name}}", {"first_name": "{{last_name}}", "last_name": "Lovelace"}, "Hi"),
        ("Go {{company}}", {"company": "{{secret}}"}, "Go"),
        ("{{company}} rocks", {"company": "Acme {{x}}{{y}} Inc"}, "Acme  Inc rocks"),
        ("https://x.test/?c={{company}}", {"company": "{{landing_page}}"}, "https://x.test/?c="),
    ],
)
def test_tokens_carried_by_values_are_removed(raw, data, expected):
    out = apply_personalization(raw, _data(**data))
    assert out == expected
    assert "{{" not in out
    assert to_plain_text(render_personalized(raw, _data(**data))) == expected

def test_custom_variables_resolve_by_name():
    variables = {"promo_code": "SAVE10"}
    assert apply_personalization("Use {{Promo_Code}}", _data(), variables) == "Use SAVE10"

def test_system_tokens_win_over_custom_variables():
    variables = {"first_name": "Other"}
    assert apply_personalization("{{first_name}}", _data(first_name="Ada"), variables) == "Ada"

def test_build_variables_prefers_recipient_values_over_fallback():
    variable = CustomVariable(name="Promo", token="promo_code", fallback_value="WELCOME")
    assert variable.token == "{{promo_code}}"
    assert build_variables([variable]) == {"promo_code": "WELCOME"}
    assert build_variables([variable], {"promo_code": "VIP"}) == {"promo_code": "VIP"}
    assert build_variables([variable], {"Promo": "VIP2"}) == {"promo_code": "VIP2"}
    assert build_variables([variable], {"promo_code": ""}) == {"promo_code": "WELCOME"}

def test_system_variables_cover_all_caps_spellings():
    tokens = {item["token"] for item in SYSTEM_VARIABLES}
    assert "{{first_name}}" in tokens
    assert "{{FIRST_NAME}}" in tokens
    data = _data(first_name="Ada")
    assert apply_personalization("{{FIRST_NAME}}", data) == apply_personalization("{{first_name}}", data)

def test_render_personalized_keeps_values_out_of_markup():
    nodes = render_personalized("Welcome **{{company}}**", _data(company="*Acme*"))
    assert nodes == (
        TextNode("Welcome "),
        StyledNode("bold", "", (TextNode("*Acme*"),)),
    )

def test_render_personalized_drops_unresolved_tokens_before_markup():
    assert render_personalized("{{nope}}**x**", _data()) == (StyledNode("bold", "", (TextNode("x"),)),)

def test_render_personalized_without_tokens_matches_plain_render():
    assert render_personalized("*hi*", _data()) == (StyledNode("italic", "", (TextNode("hi"),)),)
    assert render_personalized("", _data()) == ()


@pytest.mark.parametrize(
    "raw, data",
    [
        ("{{first_name}} says hi", {"first_name": "  Ada "}),
        ("Thanks, {{first_name}}", {"first_name": "Ada  "}),
        ("{{first_name}}{{last_name}} here", {"first_name": " ", "last_name": "  Lovelace"}),
        ("  {{company}}  ", {"company": "\tAcme\n"}),
    ],
)
def test_render_personalized_trims_like_apply(raw, data):
    expected = apply_personalization(raw, _data(**data))
    assert to_plain_text(render_personalized(raw, _data(**data))) == expected
