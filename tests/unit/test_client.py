"""core.llm.client 单元测试：请求参数、重试次数、错误转换（OpenAI 客户端用 MagicMock 替代）。"""

from __future__ import annotations

import httpx
import openai
import pytest
from unittest.mock import call, patch

from core.llm.client import GenerationError, StructuredClient
from core.llm.prompt import build_review_schema, build_title_schema
from domain.catalog import LanguageSet
from models.schemas import LlmConfigResult

LLM_CONFIG = LlmConfigResult(provider="openai", api_key="sk-test", base_url="https://api.test/v1", model="test-model")


def _connection_error() -> openai.APIConnectionError:
    return openai.APIConnectionError(request=httpx.Request("POST", "https://api.test/v1/chat/completions"))


def _client(openai_client, retry_times: int = 5) -> StructuredClient:
    return StructuredClient(LLM_CONFIG, retry_times=retry_times, retry_sleep_ms=0, client=openai_client)


def test_request_carries_schema_and_temperature(openai_client, completion) -> None:
    openai_client.chat.completions.create.return_value = completion({"text": "Good", "rating": "5"})
    result = _client(openai_client).generate("Product review", build_review_schema(), 0.7)

    assert result == {"text": "Good", "rating": "5"}
    kwargs = openai_client.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "test-model"
    assert kwargs["temperature"] == 0.7
    assert kwargs["messages"] == [{"role": "user", "content": "Product review"}]
    fmt = kwargs["response_format"]
    assert fmt["type"] == "json_schema"
    assert fmt["json_schema"]["name"] == "product_review"
    assert fmt["json_schema"]["strict"] is True
    assert fmt["json_schema"]["schema"]["required"] == ["text", "rating"]


def test_result_returned_unmodified(openai_client, completion) -> None:
    payload = {"title_uk": "Робот-пилосос", "title_en": "Robot vacuum"}
    openai_client.chat.completions.create.return_value = completion(payload)
    schema = build_title_schema(LanguageSet.from_mapping({"uk": "Ukrainian", "en": "English"}))
    assert _client(openai_client).generate("p", schema, 0.8) == payload


def test_retries_transient_failures(openai_client, completion) -> None:
    openai_client.chat.completions.create.side_effect = [
        _connection_error(),
        _connection_error(),
        completion({"text": "ok", "rating": "4"}),
    ]
    result = _client(openai_client).generate("p", build_review_schema(), 0.7)
    assert result["rating"] == "4"
    assert openai_client.chat.completions.create.call_count == 3


def test_exhausted_retries_raise_generation_error(openai_client) -> None:
    openai_client.chat.completions.create.side_effect = _connection_error()
    with pytest.raises(GenerationError, match="product_review") as exc_info:
        _client(openai_client).generate("p", build_review_schema(), 0.7)
    assert openai_client.chat.completions.create.call_count == 5
    assert isinstance(exc_info.value.__cause__, openai.APIConnectionError)


def test_retry_times_configurable(openai_client) -> None:
    openai_client.chat.completions.create.side_effect = _connection_error()
    with pytest.raises(GenerationError):
        _client(openai_client, retry_times=2).generate("p", build_review_schema(), 0.7)
    assert openai_client.chat.completions.create.call_count == 2


def test_non_api_errors_not_retried(openai_client) -> None:
    openai_client.chat.completions.create.side_effect = TypeError("bad argument")
    with pytest.raises(TypeError):
        _client(openai_client).generate("p", build_review_schema(), 0.7)
    assert openai_client.chat.completions.create.call_count == 1


@pytest.mark.parametrize("content", ["", "not json", "[1, 2]", '{"text": "only text"}'])
def test_invalid_content_raises(openai_client, completion, content: str) -> None:
    openai_client.chat.completions.create.return_value = completion(content)
    with pytest.raises(GenerationError):
        _client(openai_client).generate("p", build_review_schema(), 0.7)


def test_missing_api_key_raises() -> None:
    with pytest.raises(GenerationError, match="API Key"):
        StructuredClient(LlmConfigResult(provider="openai", api_key=None, model="m"))


def test_retry_times_must_be_positive(openai_client) -> None:
    with pytest.raises(ValueError):
        StructuredClient(LLM_CONFIG, retry_times=0, client=openai_client)


def test_default_wait_between_attempts(openai_client, completion) -> None:
    openai_client.chat.completions.create.side_effect = [
        _connection_error(),
        _connection_error(),
        completion({"text": "ok", "rating": "4"}),
    ]
    client = StructuredClient(LLM_CONFIG, client=openai_client)
    assert client.retry_sleep_ms == 100

    with patch("time.sleep") as mock_sleep:
        client.generate("p", build_review_schema(), 0.7)

    assert mock_sleep.call_args_list == [call(0.1), call(0.1)]
