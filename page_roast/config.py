# === FILE: page_roast/config.py ===
"""
Загрузка и валидация конфигурации PageRoast.
Схема описана через Pydantic; ключ API может прийти из файла или из окружения.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    SecretStr,
    field_validator,
)

API_KEY_ENV = "OPENAI_API_KEY"
DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; LandingPageRoast/1.0)"


class RoastConfig(BaseModel):
    """Настройки одного процесса: загружаются один раз и больше не меняются."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    api_key: Optional[SecretStr] = Field(
        None, description="Ключ бэкенда оценки. Отсутствие ключа включает демо-режим."
    )
    api_url: HttpUrl = Field(
        "https://api.openai.com/v1/chat/completions",
        validate_default=True,
        description="Endpoint chat-completions, совместимый с OpenAI.",
    )
    model: str = Field("gpt-4o-mini", min_length=1, description="Идентификатор модели.")
    temperature: float = Field(0.7, ge=0, le=2, description="Разнообразие ответа.")
    max_tokens: int = Field(1500, gt=0, description="Лимит генерируемых токенов.")
    timeout: float = Field(30.0, gt=0, description="Таймаут на один внешний запрос (секунд).")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="Заголовок User-Agent.")

    @field_validator("api_key", mode="before")
    def _blank_key_is_missing(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def is_configured(self) -> bool:
        return self.api_key is not None


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def _read_file(path_obj: Path) -> dict[str, Any]:
    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")


def load_config(
    path: Union[str, Path, None] = None,
    env: Optional[Mapping[str, str]] = None,
) -> RoastConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект RoastConfig.

    Без пути берётся ``configs/default.yaml``, а если его нет, то значения по
    умолчанию. Явно указанный, но отсутствующий файл даёт FileNotFoundError.
    Ключ API, не заданный в файле, читается из переменной ``OPENAI_API_KEY``.
    """
    if path is None:
        data = _read_file(_DEFAULT_CFG) if _DEFAULT_CFG.is_file() else {}
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))
        data = _read_file(path_obj)

    environ = os.environ if env is None else env
    if not data.get("api_key") and environ.get(API_KEY_ENV):
        data["api_key"] = environ[API_KEY_ENV]

    return RoastConfig(**data)


__all__ = ["RoastConfig", "load_config", "API_KEY_ENV", "DEFAULT_USER_AGENT"]
