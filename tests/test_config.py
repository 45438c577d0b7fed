# File: tests/test_config.py
import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from sitemap_audit.config import DEFAULT_PROXY_URL, AuditConfig, load_config


def write_file(tmp_path: Path, content: str, suffix: str) -> Path:
    path = tmp_path / f"config{suffix}"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.mark.parametrize(
    "content,suffix,expect_exc",
    [
        ("concurrency: 20\ntimeout: 5", ".yaml", None),
        (json.dumps({"concurrency": 20, "timeout": 5}), ".json", None),
        ("concurrency: 0", ".yaml", ValidationError),
        ("unknown_field: 1", ".yaml", ValidationError),
        ("not: a: mapping", ".yaml", ValueError),
        ("- just\n- a list", ".yaml", TypeError),
        ("{broken json", ".json", ValueError),
    ],
)
def test_load_config_variants(tmp_path, content, suffix, expect_exc):
    cfg_path = write_file(tmp_path, content, suffix)
    if expect_exc:
        with pytest.raises(expect_exc):
            load_config(cfg_path)
    else:
        cfg = load_config(cfg_path)
        assert isinstance(cfg, AuditConfig)
        assert cfg.concurrency == 20
        assert cfg.timeout == 5.0
        assert cfg.max_redirects == 3


def test_load_config_defaults_without_path():
    cfg = load_config(None)
    assert cfg.concurrency == 10
    assert cfg.max_retries == 2
    assert cfg.retry_statuses == (503,)


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.yaml")


def test_load_config_unsupported_suffix(tmp_path):
    with pytest.raises(ValueError):
        load_config(write_file(tmp_path, "x", ".toml"))


@pytest.mark.parametrize(
    "field,value",
    [("concurrency", 0), ("timeout", 0.5), ("max_redirects", 0), ("max_retries", -1), ("delay", -0.1)],
)
def test_bounds_are_validated(field, value):
    with pytest.raises(ValidationError):
        AuditConfig(**{field: value})


def test_retry_statuses_must_be_http_codes():
    with pytest.raises(ValidationError):
        AuditConfig(retry_statuses=[503, 999])


def test_override_ignores_none_and_revalidates():
    cfg = AuditConfig()
    assert cfg.override(concurrency=None) is cfg
    assert cfg.override(concurrency=3).concurrency == 3
    with pytest.raises(ValidationError):
        cfg.override(concurrency=0)


def test_with_env_reads_proxy_key(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SITEMAP_AUDIT_PROXY_KEY", "secret")

    cfg = AuditConfig().with_env()

    assert cfg.proxy_api_key == "secret"
    assert cfg.proxy_url == DEFAULT_PROXY_URL


def test_with_env_reads_dotenv_file(tmp_path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text("SITEMAP_AUDIT_PROXY_KEY=from-file\nSITEMAP_AUDIT_PROXY_URL=http://proxy.local:3128\n")

    cfg = AuditConfig().with_env(env_file)

    assert cfg.proxy_api_key == "from-file"
    assert cfg.proxy_url == "http://proxy.local:3128"


def test_without_env_there_is_no_proxy(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    cfg = AuditConfig().with_env()

    assert cfg.proxy_api_key is None
    assert cfg.proxy_url is None


def test_with_env_accepts_zyte_key_name(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ZYTE_API_KEY", "zyte-key")

    cfg = AuditConfig().with_env()

    assert cfg.proxy_api_key == "zyte-key"
    assert cfg.proxy_url == DEFAULT_PROXY_URL


def test_project_key_wins_over_zyte_key(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("ZYTE_API_KEY", "zyte-key")
    monkeypatch.setenv("SITEMAP_AUDIT_PROXY_KEY", "own-key")

    assert AuditConfig().with_env().proxy_api_key == "own-key"
