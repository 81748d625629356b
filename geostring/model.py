"""
Модели данных для разбора координат.

Содержит типы токенов, сам токен, требования парсера к следующему
символу и к сторонам света, а также результат безопасного разбора.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from .errors import GeoStringError


class TokenType(Enum):
    """
    Типы токенов.

    Значение каждого элемента - человекочитаемое описание,
    которое подставляется в сообщения о синтаксических ошибках.
    """
    NONE = "unrecognized text"
    INTEGER = "integer"
    FLOAT = "float"
    CARDINAL_LAT = "latitude direction (N or S)"
    CARDINAL_LON = "longitude direction (E or W)"
    COMMA = "comma"
    PLUS = "plus sign"
    MINUS = "minus sign"
    PERIOD = "period"  # лексер не выдаёт: одиночная точка становится NONE
    COLON = "colon"
    APOSTROPHE = "minute symbol"
    QUOTE = "second symbol"
    DEGREE = "degree symbol"


NUMERIC_TYPES = (TokenType.INTEGER, TokenType.FLOAT)
CARDINAL_TYPES = (TokenType.CARDINAL_LAT, TokenType.CARDINAL_LON)

Number = Union[int, float]
Point = Union[Number, Tuple[Number, Number]]


@dataclass(frozen=True)
class Token:
    """
    Токен координатной строки.

    Attributes:
        type: Тип токена
        value: int для INTEGER, float для FLOAT, исходный текст для остальных
        position: Смещение первого символа в байтах UTF-8
    """
    type: TokenType
    value: Union[int, float, str]
    position: int

    def __repr__(self):
        return f"Token({self.type.name}, {self.value!r}, pos={self.position})"


class SymbolRequirement(Enum):
    """Какой символ единицы измерения парсер ожидает следующим."""
    UNDETERMINED = "undetermined"
    COLON = "colon"
    DEGREE = "degree"
    APOSTROPHE = "apostrophe"  # минуты
    QUOTE = "quote"            # секунды
    NO_SYMBOL = "no_symbol"    # значение без символов


class CardinalRequirement(Enum):
    """
    Требование к стороне света для следующей координаты пары.

    NONE_REQUIRED означает, что первая координата была записана со знаком,
    поэтому вторая тоже не может использовать букву.
    """
    UNDETERMINED = "undetermined"
    NONE_REQUIRED = "none_required"
    LATITUDE = "latitude"
    LONGITUDE = "longitude"

    @property
    def is_required(self) -> bool:
        return self in (CardinalRequirement.LATITUDE, CardinalRequirement.LONGITUDE)

    @property
    def token_type(self) -> TokenType:
        if self is CardinalRequirement.LONGITUDE:
            return TokenType.CARDINAL_LON
        return TokenType.CARDINAL_LAT


@dataclass
class ParseResult:
    """
    Результат разбора без исключений.

    Ровно одно из полей заполнено: value при успехе, error при ошибке.
    """
    value: Optional[Point] = None
    error: Optional[GeoStringError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Point:
        """Возвращает значение или выбрасывает сохранённую ошибку."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


__all__ = [
    "TokenType",
    "Token",
    "Number",
    "Point",
    "NUMERIC_TYPES",
    "CARDINAL_TYPES",
    "SymbolRequirement",
    "CardinalRequirement",
    "ParseResult",
]
