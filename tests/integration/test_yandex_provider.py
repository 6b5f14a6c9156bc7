# tests/integration/test_yandex_provider.py
import httpx
import pytest
from openai import APIConnectionError
from unittest.mock import AsyncMock, MagicMock
from ai_pr_review.errors import BackendError
from ai_pr_review.providers.gpt import OpenAIProvider
from ai_pr_review.providers.yandex import YandexProvider


def _mock_completion(text: str | None):
    """Create a mock ChatCompletion response."""
    choice = MagicMock()
    choice.message.content = text
    completion = MagicMock()
    completion.choices = [choice]
    return completion


@pytest.mark.integration
@pytest.mark.asyncio
async def test_yandex_provider_returns_raw_text():
    provider = YandexProvider(api_key="test-key", folder_id="test-folder")
    provider.client = AsyncMock()
    provider.client.chat.completions.create = AsyncMock(
        return_value=_mock_completion('{"summary": "Code looks good", "remarks": []}')
    )

    text = await provider.call("Review this code")

    assert text == '{"summary": "Code looks good", "remarks": []}'

    provider.client.chat.completions.create.assert_called_once()
    call_kwargs = provider.client.chat.completions.create.call_args.kwargs
    assert call_kwargs["model"] == "gpt://test-folder/yandexgpt/latest"
    assert call_kwargs["messages"] == [{"role": "user", "content": "Review this code"}]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_yandex_provider_rejects_empty_reply():
    provider = YandexProvider(api_key="test-key", folder_id="test-folder")
    provider.client = AsyncMock()
    provider.client.chat.completions.create = AsyncMock(return_value=_mock_completion(None))

    with pytest.raises(BackendError):
        await provider.call("Review this code")


@pytest.mark.integration
@pytest.mark.asyncio
async def test_openai_provider_sends_system_message():
    provider = OpenAIProvider(api_key="test-key")
    provider.client = AsyncMock()
    provider.client.chat.completions.create = AsyncMock(
        return_value=_mock_completion('{"summary": "ok", "remarks": []}')
    )

    text = await provider.call("Review this code")

    assert text == '{"summary": "ok", "remarks": []}'
    call_kwargs = provider.client.chat.completions.create.call_args.kwargs
    assert call_kwargs["model"] == "gpt-3.5-turbo"
    assert call_kwargs["messages"] == [
        {"role": "system", "content": "You are a code review assistant."},
        {"role": "user", "content": "Review this code"},
    ]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_openai_provider_wraps_connection_errors():
    provider = OpenAIProvider(api_key="test-key")
    provider.client = AsyncMock()
    provider.client.chat.completions.create = AsyncMock(
        side_effect=APIConnectionError(request=httpx.Request("POST", "https://api.openai.com/v1/chat/completions"))
    )

    with pytest.raises(BackendError):
        await provider.call("Review this code")


@pytest.mark.integration
@pytest.mark.asyncio
async def test_openai_provider_wraps_empty_choices():
    completion = MagicMock()
    completion.choices = []
    provider = OpenAIProvider(api_key="test-key")
    provider.client = AsyncMock()
    provider.client.chat.completions.create = AsyncMock(return_value=completion)

    with pytest.raises(BackendError):
        await provider.call("Review this code")


@pytest.mark.integration
@pytest.mark.asyncio
async def test_yandex_provider_wraps_empty_choices():
    completion = MagicMock()
    completion.choices = []
    provider = YandexProvider(api_key="test-key", folder_id="test-folder")
    provider.client = AsyncMock()
    provider.client.chat.completions.create = AsyncMock(return_value=completion)

    with pytest.raises(BackendError):
        await provider.call("Review this code")
