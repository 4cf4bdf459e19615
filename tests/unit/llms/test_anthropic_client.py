# tests/unit/llms/test_anthropic_client.py

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from anthropic import APIError

from contentops.llms.anthropic import DEFAULT_MAX_TOKENS, AnthropicLLMClient
from contentops.llms.base import Message, Role


@pytest.fixture
def mock_anthropic_response() -> MagicMock:
    """Create a mock Anthropic response."""
    response = MagicMock()

    text_block = MagicMock()
    text_block.type = "text"
    text_block.text = '{"queries": ["saas pricing 2026"]}'

    response.content = [text_block]
    response.stop_reason = "end_turn"
    response.usage.input_tokens = 10
    response.usage.output_tokens = 8
    return response


class TestAnthropicLLMClient:
    @pytest.mark.asyncio
    async def test_complete_basic(self, mock_anthropic_response: MagicMock) -> None:
        """Test basic completion with a system prompt."""
        with patch("contentops.llms.anthropic.AsyncAnthropic") as mock_anthropic:
            mock_client = MagicMock()
            mock_client.messages.create = AsyncMock(return_value=mock_anthropic_response)
            mock_anthropic.return_value = mock_client

            client = AnthropicLLMClient(api_key="test-key")
            response = await client.complete(
                messages=[
                    Message(role=Role.SYSTEM, content="You are a fact checker."),
                    Message(role=Role.USER, content="Suggest queries"),
                ]
            )

            assert response.content == '{"queries": ["saas pricing 2026"]}'
            assert response.finish_reason == "stop"
            assert response.usage.total_tokens == 18

            kwargs = mock_client.messages.create.call_args.kwargs
            assert kwargs["system"] == "You are a fact checker."
            assert kwargs["messages"] == [{"role": "user", "content": "Suggest queries"}]
            assert kwargs["max_tokens"] == DEFAULT_MAX_TOKENS

    @pytest.mark.asyncio
    async def test_max_tokens_finish_reason(
        self, mock_anthropic_response: MagicMock
    ) -> None:
        """Test that max_tokens stop reason is mapped to length."""
        mock_anthropic_response.stop_reason = "max_tokens"
        with patch("contentops.llms.anthropic.AsyncAnthropic") as mock_anthropic:
            mock_client = MagicMock()
            mock_client.messages.create = AsyncMock(return_value=mock_anthropic_response)
            mock_anthropic.return_value = mock_client

            client = AnthropicLLMClient(api_key="test-key")
            response = await client.complete(
                messages=[Message(role=Role.USER, content="x")], max_tokens=100
            )

            assert response.finish_reason == "length"
            assert mock_client.messages.create.call_args.kwargs["max_tokens"] == 100

    def test_system_messages_are_joined(self) -> None:
        """Test that several system messages are joined."""
        with patch("contentops.llms.anthropic.AsyncAnthropic"):
            client = AnthropicLLMClient(api_key="test-key")

            system, rest = client._extract_system(
                [
                    Message(role=Role.SYSTEM, content="One."),
                    Message(role=Role.USER, content="Hello"),
                    Message(role=Role.SYSTEM, content="Two."),
                ]
            )

            assert system == "One.\n\nTwo."
            assert [m.content for m in rest] == ["Hello"]

    def test_no_system_message(self) -> None:
        """Test that no system message gives None."""
        with patch("contentops.llms.anthropic.AsyncAnthropic"):
            client = AnthropicLLMClient(api_key="test-key")

            system, rest = client._extract_system(
                [Message(role=Role.USER, content="Hello")]
            )

            assert system is None
            assert len(rest) == 1

    @pytest.mark.asyncio
    async def test_errors_propagate(self) -> None:
        """Test that API errors propagate after retries."""
        error = APIError(
            "overloaded",
            httpx.Request("POST", "https://api.anthropic.com/v1/messages"),
            body=None,
        )
        with patch("contentops.llms.anthropic.AsyncAnthropic") as mock_anthropic:
            mock_client = MagicMock()
            mock_client.messages.create = AsyncMock(side_effect=error)
            mock_anthropic.return_value = mock_client

            client = AnthropicLLMClient(api_key="test-key", max_retries=1)
            with pytest.raises(APIError):
                await client.complete(messages=[Message(role=Role.USER, content="x")])

    @pytest.mark.asyncio
    async def test_client_default_max_tokens(
        self, mock_anthropic_response: MagicMock
    ) -> None:
        """Test that the client's max_tokens replaces the built-in default."""
        with patch("contentops.llms.anthropic.AsyncAnthropic") as mock_anthropic:
            mock_client = MagicMock()
            mock_client.messages.create = AsyncMock(return_value=mock_anthropic_response)
            mock_anthropic.return_value = mock_client

            client = AnthropicLLMClient(api_key="test-key", max_tokens=16000)
            await client.complete(messages=[Message(role=Role.USER, content="x")])

            assert mock_client.messages.create.call_args.kwargs["max_tokens"] == 16000

    @pytest.mark.asyncio
    async def test_aclose_closes_sdk_client(self) -> None:
        """Test that aclose releases the SDK's HTTP client."""
        with patch("contentops.llms.anthropic.AsyncAnthropic") as mock_anthropic:
            mock_anthropic.return_value.close = AsyncMock()

            client = AnthropicLLMClient(api_key="test-key")
            await client.aclose()

            mock_anthropic.return_value.close.assert_awaited_once()
