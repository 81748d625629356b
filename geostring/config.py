"""
Конфигурация лексера.

Определяет, какие глифы распознаются как символы градусов, минут и секунд.
Конфигурация может быть загружена из YAML файла.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Tuple

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigError

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")

# Символы, занятые основной грамматикой
_RESERVED_CHARS = set("0123456789:,+-NSEWnsew")

_MARK_KEYS = ("degree_marks", "minute_marks", "second_marks")


@dataclass(frozen=True)
class LexerConfig:
    """
    Набор распознаваемых глифов единиц измерения.

    Attributes:
        degree_marks: Глифы градусов
        minute_marks: Глифы минут (апостроф и штрих)
        second_marks: Глифы секунд (кавычка и двойной штрих)
    """
    degree_marks: Tuple[str, ...] = ("°", "Â°")
    minute_marks: Tuple[str, ...] = ("'", "′")
    second_marks: Tuple[str, ...] = ('"', "″")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LexerConfig":
        """Создание экземпляра из словаря (из YAML). Отсутствующие ключи берутся по умолчанию."""
        unknown = set(data) - set(_MARK_KEYS)
        if unknown:
            raise ConfigError(f"Unknown lexer config keys: {', '.join(sorted(unknown))}")

        values: Dict[str, Tuple[str, ...]] = {}
        for key in _MARK_KEYS:
            if key in data:
                values[key] = _coerce_marks(key, data[key])

        config = cls(**values)
        config.validate()
        return config

    def to_dict(self) -> Dict[str, Any]:
        """Сериализация в словарь для YAML."""
        return {key: list(getattr(self, key)) for key in _MARK_KEYS}

    def validate(self) -> None:
        """Проверяет, что глифы не пересекаются между собой и с грамматикой."""
        seen: Dict[str, str] = {}
        for key in _MARK_KEYS:
            for mark in getattr(self, key):
                if any(ch in _RESERVED_CHARS or ch.isspace() for ch in mark):
                    raise ConfigError(f"{key}: mark {mark!r} overlaps reserved characters")
                if mark in seen and seen[mark] != key:
                    raise ConfigError(f"{key}: mark {mark!r} already used in {seen[mark]}")
                seen[mark] = key


def _coerce_marks(key: str, raw: Any) -> Tuple[str, ...]:
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list) or not raw:
        raise ConfigError(f"{key}: expected non-empty list of strings, got {raw!r}")
    for mark in raw:
        if not isinstance(mark, str) or not mark:
            raise ConfigError(f"{key}: expected non-empty string, got {mark!r}")
    return tuple(raw)


DEFAULT_LEXER_CONFIG = LexerConfig()


def _read_yaml_map(path: Path) -> dict:
    """Читает YAML файл и возвращает словарь."""
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}", str(path)) from e
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}", str(path))
    return raw


def load_lexer_config(path: Path) -> LexerConfig:
    """
    Загружает конфигурацию лексера из YAML файла.

    Args:
        path: Путь к файлу конфигурации

    Returns:
        Конфигурация лексера (по умолчанию, если файла нет)

    Raises:
        ConfigError: При некорректном содержимом файла
    """
    path = Path(path)
    if not path.is_file():
        logger.debug("Lexer config %s not found, using defaults", path)
        return DEFAULT_LEXER_CONFIG

    config = LexerConfig.from_dict(_read_yaml_map(path))
    logger.debug("Loaded lexer config from %s: %s", path, config)
    return config


__all__ = ["LexerConfig", "DEFAULT_LEXER_CONFIG", "load_lexer_config"]
