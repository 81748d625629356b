"""
Parsing of free-form geographic coordinate strings.

Accepts decimal degrees, degrees/minutes/seconds, degrees/minutes and
colon-separated notation, with optional cardinal letters or sign,
and returns a single number or a (x, y) pair.
"""

from __future__ import annotations

from importlib import metadata

from .config import DEFAULT_LEXER_CONFIG, LexerConfig, load_lexer_config
from .errors import ConfigError, CoordinateRangeError, CoordinateSyntaxError, GeoStringError
from .lexer import CoordinateLexer
from .model import ParseResult, Token, TokenType
from .parser import CoordinateParser, parse, try_parse

try:
    __version__ = metadata.version("geostring")
except metadata.PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "parse",
    "try_parse",
    "CoordinateParser",
    "CoordinateLexer",
    "Token",
    "TokenType",
    "ParseResult",
    "LexerConfig",
    "DEFAULT_LEXER_CONFIG",
    "load_lexer_config",
    "GeoStringError",
    "CoordinateSyntaxError",
    "CoordinateRangeError",
    "ConfigError",
]
