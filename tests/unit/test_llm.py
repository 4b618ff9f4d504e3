"""Unit tests for LLM response parsing and provider selection."""

import pytest

from vitae.utils.llm import get_provider, parse_json_object, strip_code_fences


@pytest.mark.unit
@pytest.mark.parametrize(
    "text",
    [
        '{"summary": "ok"}',
        '```json\n{"summary": "ok"}\n```',
        '```\n{"summary": "ok"}\n```',
        'Here is the résumé:\n```json\n{"summary": "ok"}\n```\nLet me know!',
        'Sure! {"summary": "ok"} Hope that helps.',
    ],
)
def test_parse_json_object(text):
    """Test JSON recovery from bare, fenced and chatty replies."""
    assert parse_json_object(text) == {"summary": "ok"}


@pytest.mark.unit
@pytest.mark.parametrize("text", ["no json here", "[1, 2, 3]", "{broken: json}"])
def test_parse_json_object_failure(text):
    """Test that replies without a JSON object raise ValueError."""
    with pytest.raises(ValueError):
        parse_json_object(text)


@pytest.mark.unit
def test_strip_code_fences_without_fence():
    """Test that unfenced text is only stripped."""
    assert strip_code_fences("  plain  ") == "plain"


@pytest.mark.unit
def test_get_provider_unknown():
    """Test that an unknown provider name raises ValueError."""
    with pytest.raises(ValueError, match="Unknown provider"):
        get_provider("mistral")


@pytest.mark.unit
def test_get_provider_requires_api_key(monkeypatch):
    """Test that a missing API key raises ValueError."""
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    with pytest.raises(ValueError, match="OPENAI_API_KEY"):
        get_provider("openai")
