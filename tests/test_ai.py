"""Tests for the OpenAI helpers that don't need the network."""

import pytest
from fastapi import HTTPException

from app.config import settings
from app.core.ai import extract_json, get_ai_provider, require_ai


def test_extract_json_plain_object():
    assert extract_json('{"summary": "ok"}') == {"summary": "ok"}


def test_extract_json_strips_markdown_fence():
    text = 'Here you go:\n```json\n{"insights": ["a", "b"]}\n```\nHope this helps!'
    assert extract_json(text) == {"insights": ["a", "b"]}


def test_extract_json_without_object():
    with pytest.raises(ValueError):
        extract_json("I can't help with that.")


def test_extract_json_invalid_json():
    with pytest.raises(ValueError):
        extract_json("{not: valid}")


def test_provider_is_none_without_key(monkeypatch):
    monkeypatch.setattr(settings, "openai_api_key", None)
    assert get_ai_provider() is None


def test_require_ai_is_service_unavailable():
    with pytest.raises(HTTPException) as exc:
        require_ai(None)
    assert exc.value.status_code == 503
