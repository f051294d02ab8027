"""
Модуль для загрузки и валидации конфигурации краулера SiteCrawler.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator


class CrawlerConfig(BaseModel):
    """Конфигурация для одного запуска обхода."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    seeds: str = Field("", description="Корневые адреса через запятую.")
    proxy_url: Optional[HttpUrl] = Field(
        "http://127.0.0.1:5000",
        validate_default=True,
        description="Базовый URL crawl-прокси, null для запросов напрямую."
    )
    max_attempts: int = Field(4, ge=1, description="Всего попыток загрузки одного URL.")
    timeout: float = Field(10.0, gt=0, description="Таймаут на одну попытку (секунд).")
    retry_backoff: float = Field(0.5, ge=0, description="Начальная пауза между попытками (секунд).")
    concurrency: int = Field(1, ge=1, description="Число параллельных воркеров.")
    max_pages: int = Field(1000, ge=1, description="Жесткий лимит по числу загрузок.")
    follow_links: bool = Field(True, description="Добавлять найденные ссылки в очередь.")
    dedupe: bool = Field(True, description="Не посещать один URL дважды за запуск.")
    user_agent: str = Field("SiteCrawler/0.1", min_length=1, description="Заголовок User-Agent.")

    @field_validator("seeds", mode="before")
    def _join_seed_list(cls, v: Any) -> Any:
        if isinstance(v, (list, tuple)):
            return ",".join(str(item) for item in v)
        return v


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


def load_config(path: Union[str, Path, None]) -> CrawlerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlerConfig.
    Без пути берёт configs/default.yaml, а если его нет, значения по умолчанию.
    """
    if path is None:
        if not _DEFAULT_CFG.is_file():
            return CrawlerConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return CrawlerConfig(**data)
