"""大模型配置：provider、api_key（明文/加密）、base_url、model；加解密与脱敏。"""

from __future__ import annotations

import base64
import logging
import os

from models.schemas import LlmConfigResult, LlmConfigSchema

logger = logging.getLogger(__name__)

_FERNET_SALT = b"catalog_content_key_salt_v1"
_KEY_PASSPHRASE = "catalog_content_key_v1"

# provider -> (默认 base_url, 默认模型)；均为 OpenAI 兼容接口
PROVIDER_DEFAULTS: dict[str, tuple[str, str]] = {
    "openai": ("https://api.openai.com/v1", "gpt-4o-mini"),
    "deepseek": ("https://api.deepseek.com/v1", "deepseek-chat"),
    "dashscope": ("https://dashscope.aliyuncs.com/compatible-mode/v1", "qwen-plus"),
    "ollama": ("http://localhost:11434/v1", "llama3.1"),
}


def build_llm_config_result(schema: LlmConfigSchema) -> LlmConfigResult:
    """
    从 llm 节解析出 LlmConfigResult。
    优先 api_key 明文，否则 api_key_encrypted 解密，否则环境变量 OPENAI_API_KEY。
    """
    if schema.provider not in PROVIDER_DEFAULTS:
        raise ValueError(f"不支持的大模型服务商: {schema.provider}（可选: {', '.join(PROVIDER_DEFAULTS)}）")
    default_url, default_model = PROVIDER_DEFAULTS[schema.provider]
    base_url = (schema.base_url or default_url).rstrip("/")
    model = schema.model or default_model
    api_key: str | None = None
    if schema.api_key:
        api_key = schema.api_key
        logger.info("大模型配置已加载（api_key 明文），provider=%s, base_url=%s, model=%s", schema.provider, base_url, model)
    elif schema.api_key_encrypted:
        dec = decrypt_key(schema.api_key_encrypted)
        if dec:
            api_key = dec
            logger.info("大模型配置已加载（api_key_encrypted 解密成功），provider=%s, model=%s", schema.provider, model)
        else:
            logger.warning("api_key_encrypted 解密失败，请确认使用 python -m core.config encrypt <明文key> 生成")
    if api_key is None:
        api_key = os.environ.get("OPENAI_API_KEY", "").strip() or None
        if api_key:
            logger.info("大模型 API Key 来自环境变量 OPENAI_API_KEY")
    if api_key is None:
        logger.warning("未配置大模型 API Key（app_config.yaml 或环境变量 OPENAI_API_KEY）")
    return LlmConfigResult(provider=schema.provider, api_key=api_key, base_url=base_url, model=model)


def mask_key(key: str | None) -> str:
    """脱敏展示：不可直接展示明文 key。"""
    if not key or not key.strip():
        return ""
    k = key.strip()
    if len(k) <= 8:
        return "***"
    if k.startswith("sk-"):
        return f"{k[:6]}***{k[-4:]}" if len(k) > 10 else "sk-***"
    return f"{k[:2]}***{k[-2:]}"


def _fernet_key_from_passphrase(passphrase: str) -> bytes:
    from cryptography.hazmat.primitives.hashes import SHA256
    from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

    kdf = PBKDF2HMAC(
        algorithm=SHA256(),
        length=32,
        salt=_FERNET_SALT,
        iterations=100000,
    )
    return base64.urlsafe_b64encode(kdf.derive(passphrase.encode("utf-8")))


def encrypt_key(plain_key: str, passphrase: str = _KEY_PASSPHRASE) -> str:
    """将明文 Key 加密为 base64 字符串，可写入 app_config.yaml。"""
    from cryptography.fernet import Fernet

    f = Fernet(_fernet_key_from_passphrase(passphrase))
    return f.encrypt(plain_key.encode("utf-8")).decode("ascii")


def decrypt_key(encrypted_b64: str, passphrase: str = _KEY_PASSPHRASE) -> str | None:
    """从配置中的加密字符串解密出明文 Key；密文无效时返回 None。"""
    from cryptography.fernet import Fernet, InvalidToken

    try:
        f = Fernet(_fernet_key_from_passphrase(passphrase))
        return f.decrypt(encrypted_b64.encode("ascii")).decode("utf-8")
    except (InvalidToken, ValueError):
        return None


def load_llm_config(schema: LlmConfigSchema | None = None) -> LlmConfigResult:
    """加载大模型配置；未传 schema 时按默认 llm 节解析（仅环境变量中的 key 生效）。"""
    return build_llm_config_result(schema or LlmConfigSchema())
