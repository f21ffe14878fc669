"""
Tests for storygen.services.llm

Covers the request model, the fixture client, both network adapters (with
their SDK / HTTP layer patched) and the factory.
"""

import json
import time
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from storygen.core.exceptions import GenerationCallError
from storygen.services.llm import (
    FixtureGenerationClient,
    GeminiGenerationClient,
    GenerationRequest,
    Message,
    OllamaGenerationClient,
    ProviderType,
    ResponseFormat,
    clear_client_cache,
    ensure_json_text,
    get_default_provider_type,
    get_generation_client,
)


def structured_request(**kwargs):
    return GenerationRequest(
        model=kwargs.pop("model", "test-model"),
        messages=[
            Message(role="system", content="You write scripts."),
            Message(role="user", content="Topic: coffee"),
        ],
        temperature=0.4,
        max_tokens=500,
        response_format=ResponseFormat(name="story_script", schema={"type": "object"}),
        **kwargs,
    )


class TestGenerationRequest:
    """Test suite for GenerationRequest"""

    def test_system_instruction_and_conversation(self):
        request = structured_request()

        assert request.system_instruction == "You write scripts."
        assert [m.role for m in request.conversation] == ["user"]
        assert request.expects_json

    def test_to_dict(self):
        data = structured_request().to_dict()

        assert data["max_tokens"] == 500
        assert data["response_format"]["type"] == "json_schema"
        assert data["response_format"]["json_schema"]["name"] == "story_script"

    def test_plain_request_does_not_expect_json(self):
        request = GenerationRequest(model="m", messages=[Message("user", "hi")])

        assert not request.expects_json
        assert "response_format" not in request.to_dict()


class TestEnsureJsonText:
    """Test suite for ensure_json_text"""

    def test_clean_json_returned_unchanged(self):
        assert ensure_json_text('{"a": 1}', provider="x") == '{"a": 1}'

    def test_fenced_json_normalised(self):
        text = '```json\n{"title": "Brew"}\n```'
        assert json.loads(ensure_json_text(text, provider="x")) == {"title": "Brew"}

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_empty_text(self, text):
        with pytest.raises(GenerationCallError, match="Empty response"):
            ensure_json_text(text, provider="x")

    def test_non_json_text(self):
        with pytest.raises(GenerationCallError, match="Non-JSON") as exc_info:
            ensure_json_text("Sure! Here is your story about coffee.", provider="gemini")
        assert exc_info.value.provider == "gemini"


class TestFixtureGenerationClient:
    """Test suite for the deterministic test double"""

    @pytest.mark.asyncio
    async def test_serves_queue_in_order(self):
        client = FixtureGenerationClient([{"n": 1}, '{"n": 2}'])

        first = await client.generate(structured_request())
        second = await client.generate(structured_request())

        assert json.loads(first) == {"n": 1}
        assert json.loads(second) == {"n": 2}
        assert client.call_count == 2

    @pytest.mark.asyncio
    async def test_callable_receives_request(self):
        client = FixtureGenerationClient([lambda request: {"model": request.model}])

        text = await client.generate(structured_request(model="gemma3:4b"))

        assert json.loads(text) == {"model": "gemma3:4b"}
        assert client.requests[0].model == "gemma3:4b"

    @pytest.mark.asyncio
    async def test_raises_queued_exception(self):
        client = FixtureGenerationClient([GenerationCallError("provider down")])

        with pytest.raises(GenerationCallError, match="provider down"):
            await client.generate(structured_request())

    @pytest.mark.asyncio
    async def test_exhausted_queue(self):
        client = FixtureGenerationClient()

        with pytest.raises(GenerationCallError, match="exhausted"):
            await client.generate(structured_request())

    @pytest.mark.asyncio
    async def test_default_after_queue(self):
        client = FixtureGenerationClient([{"n": 1}], default={"n": 0})
        client.queue({"n": 2})

        results = [json.loads(await client.generate(structured_request())) for _ in range(4)]

        assert [r["n"] for r in results] == [1, 2, 0, 0]

    @pytest.mark.asyncio
    async def test_non_json_for_structured_request(self):
        client = FixtureGenerationClient(["not json at all"])

        with pytest.raises(GenerationCallError):
            await client.generate(structured_request())

    def test_port_metadata(self):
        client = FixtureGenerationClient()

        assert client.is_available()
        assert client.name == "fixture"
        assert client.list_models() == ["fixture"]


class TestGeminiGenerationClient:
    """Test suite for the Gemini adapter with the SDK patched"""

    @pytest.fixture
    def mock_genai_client(self):
        with patch("storygen.services.llm.gemini_provider.genai.Client") as mock_cls:
            yield mock_cls.return_value

    def test_unavailable_without_key(self):
        client = GeminiGenerationClient()

        assert not client.is_available()

    @pytest.mark.asyncio
    async def test_generate_without_key_raises(self):
        with pytest.raises(GenerationCallError, match="not available"):
            await GeminiGenerationClient().generate(structured_request())

    @pytest.mark.asyncio
    async def test_generate_structured(self, mock_genai_client):
        mock_genai_client.models.generate_content.return_value = MagicMock(text='{"title": "Brew"}')
        client = GeminiGenerationClient(api_key="test-key")

        text = await client.generate(structured_request(model="gemini-2.5-flash"))

        assert json.loads(text) == {"title": "Brew"}
        call = mock_genai_client.models.generate_content.call_args
        assert call.kwargs["model"] == "gemini-2.5-flash"
        config = call.kwargs["config"]
        assert config.response_mime_type == "application/json"
        assert config.response_json_schema == {"type": "object"}
        assert config.system_instruction == "You write scripts."
        assert config.max_output_tokens == 500
        assert len(call.kwargs["contents"]) == 1

    @pytest.mark.asyncio
    async def test_sdk_error_becomes_generation_error(self, mock_genai_client):
        mock_genai_client.models.generate_content.side_effect = RuntimeError("quota exceeded")
        client = GeminiGenerationClient(api_key="test-key")

        with pytest.raises(GenerationCallError, match="quota exceeded") as exc_info:
            await client.generate(structured_request())
        assert exc_info.value.provider == "gemini"

    @pytest.mark.asyncio
    async def test_timeout(self, mock_genai_client):
        mock_genai_client.models.generate_content.side_effect = lambda **kwargs: time.sleep(0.3)
        client = GeminiGenerationClient(api_key="test-key", timeout=0.05)

        with pytest.raises(GenerationCallError, match="timed out"):
            await client.generate(structured_request())

    @pytest.mark.asyncio
    async def test_non_json_response(self, mock_genai_client):
        mock_genai_client.models.generate_content.return_value = MagicMock(text="I cannot help with that.")
        client = GeminiGenerationClient(api_key="test-key")

        with pytest.raises(GenerationCallError, match="Non-JSON"):
            await client.generate(structured_request())


class TestOllamaGenerationClient:
    """Test suite for the Ollama adapter with httpx patched"""

    @pytest.fixture
    def mock_http(self):
        with patch("storygen.services.llm.ollama_provider.httpx.AsyncClient") as mock_cls:
            http_client = MagicMock()
            http_client.post = AsyncMock()
            mock_cls.return_value.__aenter__.return_value = http_client
            yield http_client

    def _response(self, content):
        response = MagicMock()
        response.raise_for_status = MagicMock()
        response.json.return_value = {"message": {"role": "assistant", "content": content}}
        return response

    @pytest.mark.asyncio
    async def test_generate_structured(self, mock_http):
        mock_http.post.return_value = self._response('{"scenes": []}')
        client = OllamaGenerationClient(base_url="http://ollama:11434/")

        text = await client.generate(structured_request(model="gemma3:12b"))

        assert json.loads(text) == {"scenes": []}
        url = mock_http.post.call_args.args[0]
        payload = mock_http.post.call_args.kwargs["json"]
        assert url == "http://ollama:11434/api/chat"
        assert payload["format"] == {"type": "object"}
        assert payload["options"] == {"temperature": 0.4, "num_predict": 500}
        assert payload["stream"] is False
        assert payload["messages"][0]["role"] == "system"

    @pytest.mark.asyncio
    async def test_timeout(self, mock_http):
        mock_http.post.side_effect = httpx.ReadTimeout("slow")
        client = OllamaGenerationClient(timeout=1.0)

        with pytest.raises(GenerationCallError, match="timed out"):
            await client.generate(structured_request())

    @pytest.mark.asyncio
    async def test_connection_error(self, mock_http):
        mock_http.post.side_effect = httpx.ConnectError("refused")
        client = OllamaGenerationClient()

        with pytest.raises(GenerationCallError, match="refused") as exc_info:
            await client.generate(structured_request())
        assert exc_info.value.provider == "ollama"

    @pytest.mark.asyncio
    async def test_empty_content(self, mock_http):
        mock_http.post.return_value = self._response("")
        client = OllamaGenerationClient()

        with pytest.raises(GenerationCallError, match="Empty response"):
            await client.generate(structured_request())

    def test_base_url_from_env(self, monkeypatch):
        monkeypatch.setenv("OLLAMA_HOST", "http://gpu-box:11434")

        assert OllamaGenerationClient().base_url == "http://gpu-box:11434"


class TestFactory:
    """Test suite for get_generation_client"""

    def test_default_provider_is_ollama_without_key(self):
        assert get_default_provider_type() == ProviderType.OLLAMA

    def test_ollama_client_cached(self):
        first = get_generation_client()
        second = get_generation_client()

        assert isinstance(first, OllamaGenerationClient)
        assert first is second

    def test_cache_can_be_bypassed(self):
        first = get_generation_client(ProviderType.OLLAMA)
        second = get_generation_client(ProviderType.OLLAMA, use_cache=False)

        assert first is not second

    def test_gemini_without_key_raises(self):
        with pytest.raises(ValueError, match="GEMINI_API_KEY"):
            get_generation_client(ProviderType.GEMINI)

    def test_gemini_with_key(self, monkeypatch):
        monkeypatch.setenv("LLM_PROVIDER", "gemini")
        with patch("storygen.services.llm.gemini_provider.genai.Client"):
            client = get_generation_client(api_key="test-key")

        assert isinstance(client, GeminiGenerationClient)
        clear_client_cache()

    def test_fixture_not_built_by_factory(self):
        with pytest.raises(ValueError, match="No factory support"):
            get_generation_client(ProviderType.FIXTURE)
