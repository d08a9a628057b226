import asyncio
import json
import uuid

import httpx
import pytest

from conftest import template_document
from pagecraft.db.base import SessionLocal
from pagecraft.services.template_store import (
    RestTemplateStore,
    SqlTemplateStore,
    TemplateConflictError,
    TemplateLoadError,
    TemplateNotFoundError,
    TemplateStoreError,
    template_from_document,
)


def test_template_from_document_maps_columns():
    template = template_from_document(template_document())
    assert template.id == "tpl-1"
    assert template.accentColor is None
    assert template.personalizationConfig == {}
    assert template.sections[2].type == "faq"


def test_template_from_document_rejects_duplicate_section_ids():
    document = template_document()
    document["sections"][1]["id"] = "hero0001"
    with pytest.raises(TemplateLoadError) as exc_info:
        template_from_document(document)
    assert exc_info.value.errors


def test_template_is_enabled_defaults_to_true():
    document = template_document()
    document["personalization_config"] = {"show_faq": False, "show_hero": True}
    template = template_from_document(document)
    assert template.is_enabled("show_hero")
    assert template.is_enabled("show_stats")
    assert not template.is_enabled("show_faq")


def test_sql_store_round_trip(seeded_template):
    store = SqlTemplateStore(SessionLocal)

    document = asyncio.run(store.load(seeded_template.id))
    assert document["slug"] == seeded_template.slug
    assert asyncio.run(store.load_by_slug(seeded_template.slug))["id"] == seeded_template.id

    template = template_from_document(document)
    template.name = "Renamed"
    template.accentColor = "#ff0000"
    asyncio.run(store.save(template.id, template.persisted_fields()))

    reloaded = template_from_document(asyncio.run(store.load(template.id)))
    assert reloaded.name == "Renamed"
    assert reloaded.accentColor == "#ff0000"
    assert [section.id for section in reloaded.sections] == ["hero0001", "head0002", "faq00003"]


def test_sql_store_missing_rows():
    store = SqlTemplateStore(SessionLocal)
    missing = f"missing-{uuid.uuid4().hex}"
    with pytest.raises(TemplateNotFoundError):
        asyncio.run(store.load(missing))
    with pytest.raises(TemplateConflictError):
        asyncio.run(store.save(missing, {"name": "x"}))


def test_rest_store_load_and_save():
    calls: list[httpx.Request] = []
    row = template_document()

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if request.method == "GET":
            assert request.url.params["id"] == "eq.tpl-1"
            return httpx.Response(200, json=[row])
        assert request.method == "PATCH"
        assert request.headers["Prefer"] == "return=representation"
        body = json.loads(request.content)
        assert "id" not in body
        assert body["accent_color"] == "#00ff00"
        return httpx.Response(200, json=[{**row, **body}])

    store = RestTemplateStore(
        base_url="https://db.example.test/rest/v1/",
        api_key="anon-key",
        transport=httpx.MockTransport(handler),
    )
    template = template_from_document(asyncio.run(store.load("tpl-1")))
    template.accentColor = "#00ff00"
    asyncio.run(store.save(template.id, template.persisted_fields()))

    assert str(calls[0].url).startswith("https://db.example.test/rest/v1/landing_page_templates?")
    assert calls[0].headers["apikey"] == "anon-key"
    assert calls[1].headers["Authorization"] == "Bearer anon-key"


def test_rest_store_zero_rows_is_a_conflict():
    store = RestTemplateStore(
        base_url="https://db.example.test/rest/v1",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json=[])),
    )
    with pytest.raises(TemplateConflictError):
        asyncio.run(store.save("tpl-1", {"name": "x"}))
    with pytest.raises(TemplateNotFoundError):
        asyncio.run(store.load_by_slug("launch"))


def test_rest_store_http_errors():
    store = RestTemplateStore(
        base_url="https://db.example.test/rest/v1",
        transport=httpx.MockTransport(lambda request: httpx.Response(500, text="boom")),
    )
    with pytest.raises(TemplateStoreError) as exc_info:
        asyncio.run(store.load("tpl-1"))
    assert exc_info.value.status_code == 502
    assert not isinstance(exc_info.value, TemplateConflictError)


def test_save_rejects_unknown_fields():
    store = RestTemplateStore(
        base_url="https://db.example.test/rest/v1",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json=[{}])),
    )
    with pytest.raises(TemplateStoreError):
        asyncio.run(store.save("tpl-1", {"owner": "someone"}))
