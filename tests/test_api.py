import uuid

import pytest
from fastapi.testclient import TestClient
from openai import OpenAIError

from pagecraft.llm.client import LLMResponseError
from pagecraft.routers import templates as templates_router
from pagecraft.services.page_generation import PageGenerationError
from pagecraft.services.section_registry import SectionValidationReport, create_section


def test_health(api_client: TestClient):
    resp = api_client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}


def test_palette_lists_every_kind(api_client: TestClient):
    resp = api_client.get("/sections/palette")
    assert resp.status_code == 200
    body = resp.json()
    assert len(body["sections"]) == 34
    assert body["sections"][1] == {"type": "hero", "label": "Hero", "icon": "Sparkles", "category": "Layout"}
    assert "Commerce" in body["categories"]


def test_section_default(api_client: TestClient):
    resp = api_client.get("/sections/pricing/default")
    assert resp.status_code == 200
    assert resp.json()["type"] == "pricing"
    assert len(resp.json()["content"]["pricingItems"]) == 3
    assert api_client.get("/sections/carousel/default").status_code == 404


def test_validate_sections_reports_rejections(api_client: TestClient):
    resp = api_client.post(
        "/sections/validate",
        json={
            "sections": [
                {"id": "a1", "type": "headline", "content": {"text": "Hi"}},
                {"id": "b2", "type": "headline", "content": {"bogus": True}},
            ]
        },
    )
    assert resp.status_code == 200
    body = resp.json()
    assert [section["id"] for section in body["sections"]] == ["a1"]
    assert body["sections"][0]["style"]["fontSize"] == "48px"
    assert body["errors"][0]["index"] == 1
    assert body["errors"][0]["id"] == "b2"


def test_get_template_by_slug(api_client: TestClient, seeded_template):
    resp = api_client.get(f"/templates/{seeded_template.slug}")
    assert resp.status_code == 200
    body = resp.json()
    assert body["id"] == seeded_template.id
    assert body["accentColor"] is None
    assert body["personalizationConfig"] == {}
    assert [section["type"] for section in body["sections"]] == ["hero", "headline", "faq"]

    assert api_client.get(f"/templates/missing-{uuid.uuid4().hex}").status_code == 404


def test_update_template_saves_all_fields(api_client: TestClient, seeded_template):
    resp = api_client.put(
        f"/templates/{seeded_template.id}",
        json={"name": "Updated", "accentColor": "#ff0000", "personalizationConfig": {"show_faq": False}},
    )
    assert resp.status_code == 200
    assert resp.json()["name"] == "Updated"

    fetched = api_client.get(f"/templates/{seeded_template.slug}").json()
    assert fetched["name"] == "Updated"
    assert fetched["accentColor"] == "#ff0000"
    assert fetched["personalizationConfig"] == {"show_faq": False}


def test_update_template_replaces_sections(api_client: TestClient, seeded_template):
    section = create_section("cta", section_id="cta00001").model_dump(mode="json")
    resp = api_client.put(f"/templates/{seeded_template.id}", json={"sections": [section]})
    assert resp.status_code == 200
    assert [s["id"] for s in resp.json()["sections"]] == ["cta00001"]


def test_update_template_rejects_invalid_sections(api_client: TestClient, seeded_template):
    resp = api_client.put(
        f"/templates/{seeded_template.id}",
        json={"sections": [{"id": "x1", "type": "carousel"}]},
    )
    assert resp.status_code == 422
    assert resp.json()["detail"]["index"] == 0

    fetched = api_client.get(f"/templates/{seeded_template.slug}").json()
    assert len(fetched["sections"]) == 3


def test_update_missing_template(api_client: TestClient):
    resp = api_client.put(f"/templates/missing-{uuid.uuid4().hex}", json={"name": "x"})
    assert resp.status_code == 404


def test_render_template_with_custom_variable(api_client: TestClient, seeded_template):
    token = f"promo_{uuid.uuid4().hex[:8]}"
    created = api_client.post("/variables", json={"name": "Promo", "token": token, "fallback_value": "WELCOME"})
    assert created.status_code == 201
    assert created.json()["token"] == f"{{{{{token}}}}}"

    section = create_section("headline", section_id="head0009").model_dump(mode="json")
    section["content"]["text"] = f"Use **{{{{{token}}}}}**, {{{{first_name}}}}"
    assert api_client.put(f"/templates/{seeded_template.id}", json={"sections": [section]}).status_code == 200

    resp = api_client.post(f"/templates/{seeded_template.slug}/render", json={"data": {"first_name": "Ada"}})
    assert resp.status_code == 200
    rendered = resp.json()["sections"][0]
    assert rendered["html"]["text"] == "Use <strong>WELCOME</strong>, Ada"

    resp = api_client.post(
        f"/templates/{seeded_template.slug}/render",
        json={"data": {"first_name": "Ada"}, "variables": {token: "VIP"}},
    )
    assert resp.json()["sections"][0]["plainText"]["text"] == "Use VIP, Ada"

    duplicate = api_client.post("/variables", json={"name": "Promo 2", "token": token})
    assert duplicate.status_code == 409
    assert api_client.delete(f"/variables/{created.json()['id']}").status_code == 204


def test_list_variables_includes_system_tokens(api_client: TestClient):
    resp = api_client.get("/variables")
    assert resp.status_code == 200
    assert {"token": "{{full_name}}", "name": "Full Name", "type": "System"} in resp.json()["system"]


def test_generate_page(api_client: TestClient, monkeypatch):
    def fake_generate_sections(prompt, *, model=None):
        assert prompt == "A yoga studio"
        return SectionValidationReport(accepted=[create_section("hero", section_id="gen00001")])

    monkeypatch.setattr(templates_router, "generate_sections", fake_generate_sections)
    resp = api_client.post("/templates/generate", json={"prompt": "A yoga studio"})
    assert resp.status_code == 200
    assert resp.json()["sections"][0]["id"] == "gen00001"
    assert resp.json()["errors"] == []


def test_generate_page_upstream_failure(api_client: TestClient, monkeypatch):
    def failing_generate_sections(prompt, *, model=None):
        raise PageGenerationError("Model did not return a JSON array")

    monkeypatch.setattr(templates_router, "generate_sections", failing_generate_sections)
    resp = api_client.post("/templates/generate", json={"prompt": "A yoga studio"})
    assert resp.status_code == 502


@pytest.mark.parametrize(
    "error",
    [
        LLMResponseError("Model gpt-4o returned an empty completion."),
        OpenAIError("connection reset"),
    ],
)
def test_generate_page_model_failures_are_bad_gateway(api_client: TestClient, monkeypatch, error):
    def failing_generate_sections(prompt, *, model=None):
        raise error

    monkeypatch.setattr(templates_router, "generate_sections", failing_generate_sections)
    resp = api_client.post("/templates/generate", json={"prompt": "A yoga studio"})
    assert resp.status_code == 502


def test_update_variable_normalizes_token(api_client: TestClient):
    suffix = uuid.uuid4().hex[:8]
    created = api_client.post("/variables", json={"name": "Region", "token": f"region_{suffix}"})
    other = api_client.post("/variables", json={"name": "City", "token": f"city_{suffix}"})
    variable_id = created.json()["id"]

    resp = api_client.patch(
        f"/variables/{variable_id}",
        json={"token": f" area_{suffix} ", "fallback_value": "nearby"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["token"] == f"{{{{area_{suffix}}}}}"
    assert body["name"] == "Region"
    assert body["fallback_value"] == "nearby"

    duplicate = api_client.patch(f"/variables/{variable_id}", json={"token": f"city_{suffix}"})
    assert duplicate.status_code == 409

    assert api_client.patch(f"/variables/missing-{suffix}", json={"name": "x"}).status_code == 404
    api_client.delete(f"/variables/{variable_id}")
    api_client.delete(f"/variables/{other.json()['id']}")
