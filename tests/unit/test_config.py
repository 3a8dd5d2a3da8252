"""core.config 单元测试：YAML 加载、Key 解析与脱敏、路径覆盖。"""

from __future__ import annotations

from pathlib import Path

import pytest

from core.config import (
    decrypt_key,
    encrypt_key,
    get_app_config,
    get_config_display,
    get_llm_config,
    get_pexels_api_key,
    load_app_config,
    mask_key,
    resolve_disk_root,
)
from core.config.llm import build_llm_config_result
from core.config.loader import load_app_config_yaml
from models.schemas import AppConfigSchema, LlmConfigSchema


@pytest.fixture
def config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    d = tmp_path / "config"
    d.mkdir()
    monkeypatch.setenv("CATALOG_CONTENT_CONFIG_DIR", str(d))
    monkeypatch.setenv("CATALOG_CONTENT_STORAGE_DIR", str(tmp_path / "storage"))
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("PEXELS_API_KEY", raising=False)
    return d


def test_defaults_without_file(config_dir: Path) -> None:
    cfg = load_app_config()
    assert cfg == AppConfigSchema()
    assert cfg.generation.title_temperature == 0.8
    assert cfg.generation.review_temperature == 0.7
    assert cfg.generation.retry_times == 5
    assert cfg.generation.retry_sleep_ms == 100
    assert cfg.pexels.timeout == 10.0
    assert cfg.storage.default == "local"
    assert get_llm_config().api_key is None
    assert get_pexels_api_key() is None


def test_yaml_sections(config_dir: Path) -> None:
    (config_dir / "app_config.yaml").write_text(
        "llm:\n"
        "  provider: DeepSeek\n"
        "  api_key: sk-abcdefghijkl\n"
        "generation:\n"
        "  languages:\n"
        "    en: English\n"
        "    de: German\n"
        "pexels:\n"
        "  api_key: px-key-123456\n"
        "storage:\n"
        "  default: public\n"
        "  disks:\n"
        "    public:\n"
        "      root: public\n",
        encoding="utf-8",
    )
    cfg = get_app_config()
    assert list(cfg.generation.languages) == ["en", "de"]
    assert cfg.storage.default == "public"
    llm = get_llm_config()
    assert llm.provider == "deepseek"
    assert llm.base_url == "https://api.deepseek.com/v1"
    assert llm.model == "deepseek-chat"
    assert llm.api_key == "sk-abcdefghijkl"
    assert get_pexels_api_key() == "px-key-123456"


def test_invalid_yaml_values_fall_back_to_defaults(config_dir: Path) -> None:
    (config_dir / "app_config.yaml").write_text("generation:\n  retry_times: 0\n", encoding="utf-8")
    assert load_app_config_yaml().generation.retry_times == 5


def test_broken_yaml_falls_back_to_defaults(config_dir: Path) -> None:
    (config_dir / "app_config.yaml").write_text("llm: [unclosed\n", encoding="utf-8")
    assert load_app_config_yaml() == AppConfigSchema()


def test_env_keys(config_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env-000000")
    monkeypatch.setenv("PEXELS_API_KEY", "px-from-env")
    assert get_llm_config().api_key == "sk-from-env-000000"
    assert get_pexels_api_key() == "px-from-env"


def test_encrypted_key_roundtrip() -> None:
    enc = encrypt_key("sk-secret-value")
    assert enc != "sk-secret-value"
    assert decrypt_key(enc) == "sk-secret-value"
    assert decrypt_key("not-a-token") is None
    result = build_llm_config_result(LlmConfigSchema(api_key_encrypted=enc))
    assert result.api_key == "sk-secret-value"


def test_unknown_provider() -> None:
    with pytest.raises(ValueError, match="不支持"):
        build_llm_config_result(LlmConfigSchema(provider="acme"))


def test_explicit_base_url_and_model() -> None:
    result = build_llm_config_result(
        LlmConfigSchema(provider="ollama", base_url="http://gpu:11434/v1/", model="qwen2.5", api_key="ollama")
    )
    assert result.base_url == "http://gpu:11434/v1"
    assert result.model == "qwen2.5"


def test_mask_key() -> None:
    assert mask_key(None) == ""
    assert mask_key("short") == "***"
    assert mask_key("sk-1234567890abcd") == "sk-123***abcd"
    assert mask_key("px-abcdefghij") == "px***ij"


def test_config_display_hides_keys(config_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-1234567890abcd")
    display = get_config_display()
    assert display["configured"] == "是"
    assert display["api_key_masked"] == "sk-123***abcd"
    assert "sk-1234567890abcd" not in display.values()


def test_resolve_disk_root(config_dir: Path, tmp_path: Path) -> None:
    assert resolve_disk_root("app") == tmp_path / "storage" / "app"
    assert resolve_disk_root(str(tmp_path / "abs")) == tmp_path / "abs"
