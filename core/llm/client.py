"""结构化生成客户端：提交提示词与 JSON Schema，返回模型按 Schema 生成的字段。"""

from __future__ import annotations

import json
import logging
from typing import Any

import openai
from openai import OpenAI
from tenacity import Retrying, before_sleep_log, retry_if_exception_type, stop_after_attempt, wait_fixed

from domain.catalog import ObjectSchema
from models.schemas import LlmConfigResult

logger = logging.getLogger(__name__)

DEFAULT_RETRY_TIMES = 5
DEFAULT_RETRY_SLEEP_MS = 100


class GenerationError(RuntimeError):
    """结构化生成失败：重试次数用尽或返回内容不符合 Schema。"""


class StructuredClient:
    """
    OpenAI 兼容接口的结构化输出调用。

    重试由 tenacity 控制（默认最多 5 次、间隔 100ms），SDK 自身的重试关闭，
    保证总尝试次数与配置一致。
    """

    def __init__(
        self,
        llm_config: LlmConfigResult,
        *,
        retry_times: int = DEFAULT_RETRY_TIMES,
        retry_sleep_ms: int = DEFAULT_RETRY_SLEEP_MS,
        client: OpenAI | None = None,
    ) -> None:
        if retry_times < 1:
            raise ValueError("retry_times 至少为 1")
        self.provider = llm_config.provider
        self.model = llm_config.model
        self.retry_times = retry_times
        self.retry_sleep_ms = retry_sleep_ms
        if client is None:
            if not llm_config.api_key:
                raise GenerationError("未配置大模型 API Key，无法生成内容")
            client = OpenAI(api_key=llm_config.api_key, base_url=llm_config.base_url or None, max_retries=0)
        self._client = client

    def _create(self, prompt: str, schema: ObjectSchema, temperature: float) -> Any:
        return self._client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
            response_format={
                "type": "json_schema",
                "json_schema": {
                    "name": schema.name,
                    "description": schema.description,
                    "schema": schema.to_json_schema(),
                    "strict": True,
                },
            },
        )

    def generate(self, prompt: str, schema: ObjectSchema, temperature: float) -> dict[str, Any]:
        """
        调用结构化生成，返回解析后的字段字典。

        Raises:
            GenerationError: 重试用尽仍失败，或返回内容不是包含全部必填字段的 JSON 对象。
        """
        logger.info("[结构化生成] schema=%s, model=%s, temperature=%.1f", schema.name, self.model, temperature)
        logger.debug("[结构化生成] 提示词: %s", prompt)
        retrying = Retrying(
            stop=stop_after_attempt(self.retry_times),
            wait=wait_fixed(self.retry_sleep_ms / 1000),
            retry=retry_if_exception_type(openai.APIError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        try:
            resp = retrying(self._create, prompt, schema, temperature)
        except openai.APIError as e:
            logger.error("[结构化生成] %s 失败（已尝试 %d 次）: %s", schema.name, self.retry_times, e)
            raise GenerationError(f"结构化生成失败 [{schema.name}]: {e}") from e
        return self._parse(resp, schema)

    def _parse(self, resp: Any, schema: ObjectSchema) -> dict[str, Any]:
        choice = resp.choices[0] if resp.choices else None
        content = (getattr(choice.message, "content", None) or "").strip() if choice else ""
        if not content:
            raise GenerationError(f"结构化生成返回为空 [{schema.name}]")
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise GenerationError(f"结构化生成返回内容不是 JSON [{schema.name}]: {content[:200]}") from e
        if not isinstance(data, dict):
            raise GenerationError(f"结构化生成返回内容不是对象 [{schema.name}]")
        missing = [name for name in schema.required_fields if name not in data]
        if missing:
            raise GenerationError(f"结构化生成缺少必填字段 [{schema.name}]: {', '.join(missing)}")
        logger.info("[结构化生成] %s 完成，共 %d 个字段", schema.name, len(data))
        return data
