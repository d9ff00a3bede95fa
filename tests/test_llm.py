"""
Tests for the provider clients. SDK classes and urlopen are replaced with fakes.

Run with:
    pytest tests/test_llm.py -v
"""

import http.client
import io
import json
import urllib.error
from types import SimpleNamespace

import pytest

from easy_commits.config import Config, ConfigError
from easy_commits.llm import AnthropicClient, LLMError, OllamaClient, OpenAIClient, get_client


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

class FakeSDK:
    """Records constructor and create() kwargs; create() returns or raises ``result``."""

    instances = []

    def __init__(self, **kwargs):
        self.init_kwargs = kwargs
        self.create_kwargs = None
        self.result = None
        FakeSDK.instances.append(self)
        # openai: client.chat.completions.create / anthropic: client.messages.create
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))
        self.messages = SimpleNamespace(create=self._create)

    def _create(self, **kwargs):
        self.create_kwargs = kwargs
        if isinstance(self.result, BaseException):
            raise self.result
        return self.result


@pytest.fixture
def fake_sdk(monkeypatch):
    FakeSDK.instances = []
    monkeypatch.setattr("easy_commits.llm.openai.OpenAI", FakeSDK)
    monkeypatch.setattr("easy_commits.llm.anthropic.Anthropic", FakeSDK)
    return FakeSDK


def chat_response(*contents):
    choices = [SimpleNamespace(message=SimpleNamespace(role="assistant", content=c)) for c in contents]
    return SimpleNamespace(choices=choices, usage=SimpleNamespace(total_tokens=42))


def messages_response(*blocks):
    return SimpleNamespace(content=list(blocks), usage=SimpleNamespace(input_tokens=30, output_tokens=12))


class FakeHTTPResponse:

    def __init__(self, body):
        self._body = body

    def read(self):
        if isinstance(self._body, BaseException):
            raise self._body
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *args):
        return False


@pytest.fixture
def fake_urlopen(monkeypatch):
    """Install a fake urlopen; returns the list of captured (request, timeout) pairs."""
    captured = []

    def _install(result):
        def _urlopen(req, timeout=None):
            captured.append((req, timeout))
            if isinstance(result, BaseException):
                raise result
            if isinstance(result, FakeHTTPResponse):
                return result
            return FakeHTTPResponse(result)
        monkeypatch.setattr("easy_commits.llm.ollama.urllib.request.urlopen", _urlopen)
        return captured

    return _install


# ---------------------------------------------------------------------------
# OpenAI (hosted chat)
# ---------------------------------------------------------------------------

class TestOpenAIClient:

    def test_request_shape(self, fake_sdk):
        client = OpenAIClient(api_key="sk-test", model="gpt-3.5-turbo")
        sdk = fake_sdk.instances[0]
        sdk.result = chat_response("feat: add login")

        client.generate("PROMPT")

        assert sdk.init_kwargs == {"api_key": "sk-test", "timeout": 30.0, "max_retries": 0}
        assert sdk.create_kwargs == {
            "model": "gpt-3.5-turbo",
            "messages": [{"role": "user", "content": "PROMPT"}],
        }

    def test_returns_first_choice_trimmed(self, fake_sdk):
        client = OpenAIClient(api_key="sk-test")
        fake_sdk.instances[0].result = chat_response("\n  fix: handle timeout  \n", "docs: other")

        response = client.generate("PROMPT")

        assert response.content == "fix: handle timeout"
        assert response.tokens_used == 42

    def test_empty_choices_raises(self, fake_sdk):
        client = OpenAIClient(api_key="sk-test")
        fake_sdk.instances[0].result = chat_response()

        with pytest.raises(LLMError):
            client.generate("PROMPT")

    def test_missing_content_raises(self, fake_sdk):
        client = OpenAIClient(api_key="sk-test")
        fake_sdk.instances[0].result = chat_response(None)

        with pytest.raises(LLMError):
            client.generate("PROMPT")

    def test_transport_error_propagates_unchanged(self, fake_sdk):
        client = OpenAIClient(api_key="sk-test")
        error = ConnectionError("connection refused")
        fake_sdk.instances[0].result = error

        with pytest.raises(ConnectionError) as excinfo:
            client.generate("PROMPT")
        assert excinfo.value is error

    def test_default_model(self, fake_sdk):
        assert OpenAIClient(api_key="sk-test").model == "gpt-3.5-turbo"


# ---------------------------------------------------------------------------
# Anthropic (hosted messages)
# ---------------------------------------------------------------------------

class TestAnthropicClient:

    def test_request_shape(self, fake_sdk):
        client = AnthropicClient(api_key="sk-ant", model="claude-3-haiku-20240307")
        sdk = fake_sdk.instances[0]
        sdk.result = messages_response(SimpleNamespace(type="text", text="feat: add login"))

        client.generate("PROMPT")

        assert sdk.init_kwargs == {"api_key": "sk-ant", "timeout": 30.0, "max_retries": 0}
        assert sdk.create_kwargs == {
            "model": "claude-3-haiku-20240307",
            "max_tokens": 150,
            "messages": [{"role": "user", "content": "PROMPT"}],
        }

    def test_returns_first_block_text_trimmed(self, fake_sdk):
        client = AnthropicClient(api_key="sk-ant")
        fake_sdk.instances[0].result = messages_response(SimpleNamespace(type="text", text="  refactor(db): extract builder\n"))

        response = client.generate("PROMPT")

        assert response.content == "refactor(db): extract builder"
        assert response.tokens_used == 42

    def test_empty_content_raises(self, fake_sdk):
        client = AnthropicClient(api_key="sk-ant")
        fake_sdk.instances[0].result = messages_response()

        with pytest.raises(LLMError):
            client.generate("PROMPT")

    def test_first_block_without_text_raises(self, fake_sdk):
        client = AnthropicClient(api_key="sk-ant")
        fake_sdk.instances[0].result = messages_response(SimpleNamespace(type="tool_use", id="t1", input={}))

        with pytest.raises(LLMError):
            client.generate("PROMPT")

    def test_non_string_text_raises(self, fake_sdk):
        client = AnthropicClient(api_key="sk-ant")
        fake_sdk.instances[0].result = messages_response(SimpleNamespace(type="text", text=None))

        with pytest.raises(LLMError):
            client.generate("PROMPT")

    def test_transport_error_propagates_unchanged(self, fake_sdk):
        client = AnthropicClient(api_key="sk-ant")
        error = TimeoutError("timed out")
        fake_sdk.instances[0].result = error

        with pytest.raises(TimeoutError) as excinfo:
            client.generate("PROMPT")
        assert excinfo.value is error


# ---------------------------------------------------------------------------
# Ollama (local)
# ---------------------------------------------------------------------------

class TestOllamaClient:

    def test_request_shape(self, fake_urlopen):
        captured = fake_urlopen(json.dumps({"response": "feat: add login"}).encode())
        client = OllamaClient(model="codellama", host="http://localhost:11434")

        client.generate("PROMPT")

        req, timeout = captured[0]
        assert req.full_url == "http://localhost:11434/api/generate"
        assert req.get_method() == "POST"
        assert json.loads(req.data) == {"model": "codellama", "prompt": "PROMPT", "stream": False}
        assert not req.has_header("Authorization")
        assert timeout == 60

    def test_returns_response_exactly(self, fake_urlopen):
        fake_urlopen(json.dumps({"response": "feat: add login"}).encode())
        response = OllamaClient(model="llama2").generate("PROMPT")
        assert response.content == "feat: add login"

    def test_response_trimmed(self, fake_urlopen):
        fake_urlopen(json.dumps({"response": "\n\nchore: bump version \n", "eval_count": 9}).encode())
        response = OllamaClient(model="llama2").generate("PROMPT")
        assert response.content == "chore: bump version"
        assert response.tokens_used == 9

    def test_trailing_slash_in_host(self, fake_urlopen):
        captured = fake_urlopen(json.dumps({"response": "x"}).encode())
        OllamaClient(model="llama2", host="http://gpu-box:11434/").generate("PROMPT")
        assert captured[0][0].full_url == "http://gpu-box:11434/api/generate"

    @pytest.mark.parametrize("body", [
        {"done": True},
        {"response": 17},
        {"response": None},
    ])
    def test_missing_or_non_string_response_raises(self, fake_urlopen, body):
        fake_urlopen(json.dumps(body).encode())
        with pytest.raises(LLMError):
            OllamaClient(model="llama2").generate("PROMPT")

    def test_invalid_json_raises(self, fake_urlopen):
        fake_urlopen(b"<html>bad gateway</html>")
        with pytest.raises(LLMError):
            OllamaClient(model="llama2").generate("PROMPT")

    def test_connection_error_propagates_unchanged(self, fake_urlopen):
        error = urllib.error.URLError(ConnectionRefusedError(111, "Connection refused"))
        fake_urlopen(error)
        with pytest.raises(urllib.error.URLError) as excinfo:
            OllamaClient(model="llama2").generate("PROMPT")
        assert excinfo.value is error

    def test_truncated_body_propagates_unchanged(self, fake_urlopen):
        error = http.client.IncompleteRead(b'{"response": "fe')
        fake_urlopen(FakeHTTPResponse(error))
        with pytest.raises(http.client.IncompleteRead) as excinfo:
            OllamaClient(model="llama2").generate("PROMPT")
        assert excinfo.value is error

    def test_missing_model_reported(self, fake_urlopen):
        body = io.BytesIO(b'{"error": "model \\"mistral\\" not found"}')
        fake_urlopen(urllib.error.HTTPError("http://localhost:11434/api/generate", 404, "Not Found", {}, body))
        with pytest.raises(LLMError) as excinfo:
            OllamaClient(model="mistral").generate("PROMPT")
        assert "ollama pull mistral" in str(excinfo.value)

    def test_server_error_detail_reported(self, fake_urlopen):
        body = io.BytesIO(b'{"error": "out of memory"}')
        fake_urlopen(urllib.error.HTTPError("http://localhost:11434/api/generate", 500, "Internal Server Error", {}, body))
        with pytest.raises(LLMError) as excinfo:
            OllamaClient(model="llama2").generate("PROMPT")
        assert "out of memory" in str(excinfo.value)


# ---------------------------------------------------------------------------
# Provider selection
# ---------------------------------------------------------------------------

class TestGetClient:

    @pytest.mark.parametrize("config, expected", [
        (Config(provider="openai", model="gpt-4o", api_key="k"), OpenAIClient),
        (Config(provider="anthropic", model="claude-3-haiku-20240307", api_key="k"), AnthropicClient),
        (Config(provider="ollama", model="llama2", base_url="http://localhost:11434"), OllamaClient),
    ], ids=["openai", "anthropic", "ollama"])
    def test_selects_client(self, fake_sdk, config, expected):
        client = get_client(config)
        assert isinstance(client, expected)
        assert client.model == config.model

    def test_ollama_uses_configured_base_url(self):
        client = get_client(Config(provider="ollama", model="llama2", base_url="http://gpu-box:11434"))
        assert client.host == "http://gpu-box:11434"

    def test_unknown_provider_is_config_error(self):
        with pytest.raises(ConfigError) as excinfo:
            get_client(Config(provider="gemini", model="pro", api_key="k"))
        assert "Unsupported provider: gemini" in str(excinfo.value)
