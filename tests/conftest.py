# tests/conftest.py
import pytest


SETTINGS_ENV = (
    "AI_MODEL",
    "ANTHROPIC_API_KEY",
    "OPENAI_API_KEY",
    "GEMINI_API_KEY",
    "YANDEX_API_KEY",
    "YANDEX_FOLDER_ID",
    "STRICT",
    "IGNORE_PATTERNS",
    "COMMENT_ANCHOR",
    "MAX_CONCURRENCY",
    "DEFAULT_LANGUAGE",
)


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch, request):
    """Keep developer credentials out of unit and integration tests."""
    if request.node.get_closest_marker("e2e"):
        return
    for name in SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
