"""Tests for the completion gateway."""

from unittest.mock import AsyncMock, MagicMock, patch

import openai
import pytest

from commit_critic.config import Config
from commit_critic.errors import ConfigError, GatewayError
from commit_critic.llm import CompletionGateway, get_openrouter_client


def make_response(content):
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = content
    return response


@pytest.fixture
def client():
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=make_response('{"commits": []}'))
    return client


@pytest.fixture
def gateway(client):
    return CompletionGateway(client, model="test-model", max_tokens=100)


@pytest.mark.asyncio
async def test_complete_returns_raw_text(gateway, client):
    text = await gateway.complete("system", "user")

    assert text == '{"commits": []}'
    kwargs = client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "test-model"
    assert kwargs["max_tokens"] == 100
    assert kwargs["messages"] == [
        {"role": "system", "content": "system"},
        {"role": "user", "content": "user"},
    ]


@pytest.mark.asyncio
async def test_complete_does_not_interpret_reply(gateway, client):
    client.chat.completions.create = AsyncMock(return_value=make_response("```json\nnot json```"))
    assert await gateway.complete("s", "u") == "```json\nnot json```"


@pytest.mark.asyncio
async def test_api_error_becomes_gateway_error(gateway, client):
    client.chat.completions.create = AsyncMock(side_effect=openai.OpenAIError("API Error"))

    with pytest.raises(GatewayError) as exc_info:
        await gateway.complete("s", "u")

    assert "API Error" in str(exc_info.value)
    assert client.chat.completions.create.call_count == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("content", [None, "", "   \n"])
async def test_empty_content_is_an_error(gateway, client, content):
    client.chat.completions.create = AsyncMock(return_value=make_response(content))
    with pytest.raises(GatewayError):
        await gateway.complete("s", "u")


@pytest.mark.asyncio
async def test_no_choices_is_an_error(gateway, client):
    response = MagicMock()
    response.choices = []
    client.chat.completions.create = AsyncMock(return_value=response)
    with pytest.raises(GatewayError):
        await gateway.complete("s", "u")


def test_client_requires_key():
    with pytest.raises(ConfigError):
        get_openrouter_client(Config(api_key=None))


def test_from_config_uses_base_url_and_model():
    config = Config(api_key="sk-test", base_url="https://example.test/v1", model="m")
    with patch("commit_critic.llm.AsyncOpenAI") as mock:
        gateway = CompletionGateway.from_config(config)
    mock.assert_called_once_with(base_url="https://example.test/v1", api_key="sk-test")
    assert gateway.model == "m"
