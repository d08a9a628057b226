import pytest

from pagecraft.observability import langfuse as langfuse_module


@pytest.fixture(autouse=True)
def reset_langfuse_state():
    langfuse_module._client = None
    langfuse_module._initialized = False
    yield
    langfuse_module._client = None
    langfuse_module._initialized = False


def _enable(monkeypatch: pytest.MonkeyPatch, *, auth_check: bool = True) -> None:
    monkeypatch.setattr(langfuse_module.settings, "LANGFUSE_ENABLED", True)
    monkeypatch.setattr(langfuse_module.settings, "LANGFUSE_REQUIRED", False)
    monkeypatch.setattr(langfuse_module.settings, "LANGFUSE_PUBLIC_KEY", "pk-test")
    monkeypatch.setattr(langfuse_module.settings, "LANGFUSE_SECRET_KEY", "sk-test")
    monkeypatch.setattr(langfuse_module.settings, "LANGFUSE_BASE_URL", None)
    monkeypatch.setattr(langfuse_module.settings, "LANGFUSE_SAMPLE_RATE", 1.0)
    monkeypatch.setattr(langfuse_module.settings, "LANGFUSE_AUTH_CHECK", auth_check)


def test_disabled_langfuse_yields_no_generation(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(langfuse_module.settings, "LANGFUSE_ENABLED", False)
    monkeypatch.setattr(langfuse_module.settings, "LANGFUSE_REQUIRED", False)

    with langfuse_module.start_langfuse_generation(name="page_generation", model="gpt-test") as generation:
        assert generation is None
    assert langfuse_module.get_langfuse_client() is None


def test_required_but_disabled_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(langfuse_module.settings, "LANGFUSE_ENABLED", False)
    monkeypatch.setattr(langfuse_module.settings, "LANGFUSE_REQUIRED", True)

    with pytest.raises(langfuse_module.LangfuseConfigError, match="LANGFUSE_REQUIRED is true"):
        langfuse_module.initialize_langfuse()


def test_missing_keys_raise(monkeypatch: pytest.MonkeyPatch) -> None:
    _enable(monkeypatch)
    monkeypatch.setattr(langfuse_module.settings, "LANGFUSE_SECRET_KEY", None)

    with pytest.raises(langfuse_module.LangfuseConfigError, match="LANGFUSE_SECRET_KEY"):
        langfuse_module.initialize_langfuse()


def test_auth_check_false_leaves_client_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    _enable(monkeypatch)

    class FakeLangfuse:
        def __init__(self, **_kwargs):
            pass

        def auth_check(self) -> bool:
            return False

    monkeypatch.setattr(langfuse_module, "Langfuse", FakeLangfuse)

    with pytest.raises(langfuse_module.LangfuseConfigError, match="auth check returned false"):
        langfuse_module.initialize_langfuse()
    assert langfuse_module._initialized is False
    assert langfuse_module._client is None


def test_enabled_langfuse_builds_client_with_host(monkeypatch: pytest.MonkeyPatch) -> None:
    _enable(monkeypatch, auth_check=False)
    captured: dict = {}

    class FakeLangfuse:
        def __init__(self, **kwargs):
            captured.update(kwargs)

    monkeypatch.setattr(langfuse_module, "Langfuse", FakeLangfuse)

    client = langfuse_module.get_langfuse_client()
    assert isinstance(client, FakeLangfuse)
    assert captured["public_key"] == "pk-test"
    assert captured["host"] == langfuse_module.settings.LANGFUSE_HOST
    assert "base_url" not in captured
