# === FILE: sitemap_audit/config.py ===
"""
Модуль для загрузки и валидации конфигурации аудита SitemapAudit.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from dotenv import find_dotenv, load_dotenv
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

PROXY_KEY_ENV = "SITEMAP_AUDIT_PROXY_KEY"
PROXY_URL_ENV = "SITEMAP_AUDIT_PROXY_URL"
#: key variable name used by the Zyte proxy client tools
PROXY_KEY_ENV_ALIAS = "ZYTE_API_KEY"
DEFAULT_PROXY_URL = "http://proxy.zyte.com:8011"


class AuditConfig(BaseModel):
    """Конфигурация для одного запуска аудита."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    concurrency: int = Field(10, ge=1, description="Максимум одновременных запросов.")
    timeout: float = Field(10.0, ge=1, description="Таймаут на один запрос (секунд).")
    max_redirects: int = Field(3, ge=1, description="Максимум переходов по редиректам на URL.")
    max_retries: int = Field(2, ge=0, description="Число повторных проходов по временным ошибкам.")
    delay: float = Field(0.01, ge=0, description="Минимальная пауза между запусками запросов (секунд).")
    retry_delay: float = Field(1.0, ge=0, description="Пауза перед каждым повторным проходом (секунд).")
    retry_statuses: tuple[int, ...] = Field(
        (503,), description="HTTP-статусы, которые считаются временными."
    )
    user_agent: str = Field("SitemapAudit/0.1", min_length=1, description="Заголовок User-Agent.")
    proxy_url: Optional[str] = Field(None, description="Адрес upstream-прокси.")
    proxy_api_key: Optional[str] = Field(None, repr=False, description="Ключ basic-auth для прокси.")

    @field_validator("retry_statuses")
    def _check_statuses(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        bad = [code for code in v if not 100 <= code <= 599]
        if bad:
            raise ValueError(f"invalid HTTP status in retry_statuses: {bad[0]}")
        return v

    @field_validator("proxy_url", mode="before")
    def _blank_proxy_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="before")
    @classmethod
    def _default_proxy_url(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("proxy_api_key") and not data.get("proxy_url"):
            data = {**data, "proxy_url": DEFAULT_PROXY_URL}
        return data

    def with_env(self, dotenv_path: Union[str, Path, None] = None) -> AuditConfig:
        """Возвращает копию с параметрами прокси из окружения (и файла .env, если он есть)."""
        load_dotenv(dotenv_path=dotenv_path or find_dotenv(usecwd=True))
        return self.override(
            proxy_api_key=os.environ.get(PROXY_KEY_ENV) or os.environ.get(PROXY_KEY_ENV_ALIAS) or None,
            proxy_url=os.environ.get(PROXY_URL_ENV) or None,
        )

    def override(self, **values: Any) -> AuditConfig:
        """Копия конфига с непустыми значениями из CLI; результат проходит валидацию заново."""
        updates = {k: v for k, v in values.items() if v is not None}
        if not updates:
            return self
        return AuditConfig(**{**self.model_dump(), **updates})


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> AuditConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект AuditConfig.
    Без пути возвращает конфиг по умолчанию; отсутствующий файл → FileNotFoundError.
    """
    if path is None:
        return AuditConfig()

    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    try:
        return AuditConfig(**data)
    except ValidationError:
        raise


__all__ = ["AuditConfig", "load_config", "PROXY_KEY_ENV", "PROXY_URL_ENV", "DEFAULT_PROXY_URL"]
