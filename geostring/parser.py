"""
Парсер географических координат с рекурсивным спуском.

Преобразует поток токенов в одно число или пару чисел.
Грамматика локально неоднозначна, поэтому парсер переносит между
правилами два требования: какой символ единицы ожидается следующим
и нужна ли (и какая) буква стороны света у следующей координаты.

Грамматика:
point      → coordinate [","] coordinate | coordinate
coordinate → [sign] degrees [cardinal]
sign       → "+" | "-"
degrees    → FLOAT ["°"] | INTEGER [symbol minutes]
minutes    → INTEGER [symbol seconds] | FLOAT [symbol]
seconds    → number [symbol]
number     → INTEGER | FLOAT
cardinal   → "N" | "S" | "E" | "W"
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .config import LexerConfig
from .errors import CoordinateRangeError, CoordinateSyntaxError, GeoStringError
from .lexer import CoordinateLexer
from .model import (
    CARDINAL_TYPES,
    NUMERIC_TYPES,
    CardinalRequirement,
    Number,
    ParseResult,
    Point,
    SymbolRequirement,
    TokenType,
)

logger = logging.getLogger(__name__)

# Символ, который должен следовать за значением, и требование после него
_SYMBOL_TRANSITIONS = {
    SymbolRequirement.COLON: (TokenType.COLON, SymbolRequirement.COLON),
    SymbolRequirement.DEGREE: (TokenType.DEGREE, SymbolRequirement.APOSTROPHE),
    SymbolRequirement.APOSTROPHE: (TokenType.APOSTROPHE, SymbolRequirement.QUOTE),
    SymbolRequirement.QUOTE: (TokenType.QUOTE, SymbolRequirement.QUOTE),
}

# Буква → (знак, граница диапазона, требование ко второй координате)
_CARDINALS = {
    "n": (1, 90, CardinalRequirement.LONGITUDE),
    "s": (-1, 90, CardinalRequirement.LONGITUDE),
    "e": (1, 180, CardinalRequirement.LATITUDE),
    "w": (-1, 180, CardinalRequirement.LATITUDE),
}


@dataclass
class ParseContext:
    """
    Состояние одного вызова parse().

    Создаётся заново на каждый вызов и передаётся во все правила грамматики.
    """
    input: str
    lexer: CoordinateLexer
    next_symbol: SymbolRequirement = SymbolRequirement.UNDETERMINED
    next_cardinal: CardinalRequirement = CardinalRequirement.UNDETERMINED


class CoordinateParser:
    """
    Парсер строк координат.

    Экземпляр можно переиспользовать для последовательных вызовов,
    но не из нескольких потоков одновременно: лексер общий.
    """

    def __init__(self, config: Optional[LexerConfig] = None):
        self.lexer = CoordinateLexer(config)

    def parse(self, text: str) -> Point:
        """
        Парсит строку координат.

        Args:
            text: Строка вида "40° 26' 46\\" N", "40:26:46", "-79.553" и т.п.

        Returns:
            Число или пара (x, y)

        Raises:
            CoordinateSyntaxError: При неожиданном токене
            CoordinateRangeError: При выходе значения за допустимый диапазон
        """
        logger.debug("Parsing coordinate string %r", text)

        ctx = ParseContext(input=text, lexer=self.lexer)
        ctx.lexer.set_input(text)
        # Переводим лексер на первый токен
        ctx.lexer.advance()

        result = self._point(ctx)

        logger.debug("Parsed %r -> %r", text, result)
        return result

    def try_parse(self, text: str) -> ParseResult:
        """Как parse(), но возвращает ParseResult вместо исключения."""
        try:
            return ParseResult(value=self.parse(text))
        except GeoStringError as e:
            return ParseResult(error=e)

    # Правила грамматики

    def _point(self, ctx: ParseContext) -> Point:
        """Одно значение или пара координат."""
        x = self._coordinate(ctx)

        # Больше токенов нет - одиночное значение
        if ctx.lexer.lookahead is None:
            return x

        # Координаты пары могут разделяться запятой
        if ctx.lexer.is_next(TokenType.COMMA):
            self._match(ctx, TokenType.COMMA)

        y = self._coordinate(ctx)

        if ctx.lexer.lookahead is not None:
            raise self._syntax_error(ctx, "end of string")

        return x, y

    def _coordinate(self, ctx: ParseContext) -> Number:
        """Одна координата со знаком или буквой стороны света."""
        sign: Optional[int] = None

        # Знак допустим, только если буква не обязательна
        if not ctx.next_cardinal.is_required and ctx.lexer.is_next_any((TokenType.PLUS, TokenType.MINUS)):
            sign = self._sign(ctx)

        value = self._degrees(ctx)

        if sign is None and (
            ctx.next_cardinal.is_required
            or (
                ctx.next_cardinal is CardinalRequirement.UNDETERMINED
                and ctx.lexer.is_next_any(CARDINAL_TYPES)
            )
        ):
            return self._cardinal(ctx, value)

        # Первая координата без буквы - вторая тоже без неё
        ctx.next_cardinal = CardinalRequirement.NONE_REQUIRED

        return (1 if sign is None else sign) * value

    def _sign(self, ctx: ParseContext) -> int:
        if ctx.lexer.is_next(TokenType.PLUS):
            self._match(ctx, TokenType.PLUS)
            return 1

        self._match(ctx, TokenType.MINUS)
        return -1

    def _degrees(self, ctx: ParseContext) -> Number:
        """Градусы, возможно с минутами и секундами."""
        # Новое значение начинает цикл символов заново
        if ctx.next_symbol in (SymbolRequirement.APOSTROPHE, SymbolRequirement.QUOTE):
            ctx.next_symbol = SymbolRequirement.DEGREE

        # Дробные градусы не могут иметь минут и секунд
        if ctx.lexer.is_next(TokenType.FLOAT):
            degrees = self._match(ctx, TokenType.FLOAT)

            if ctx.lexer.is_next(TokenType.DEGREE):
                self._match(ctx, TokenType.DEGREE)
                # Второе значение пары тоже должно иметь символ градуса
                ctx.next_symbol = SymbolRequirement.DEGREE

            return degrees

        degrees = self._number(ctx)

        # Без символа после целого значение завершено
        if not self._symbol(ctx):
            return degrees

        # Пары через пробел: "40° 79°" - число с градусом дальше относится
        # уже ко второй координате, а не к минутам первой
        after_next = ctx.lexer.glimpse()
        if (
            ctx.next_symbol is not SymbolRequirement.COLON
            and ctx.lexer.is_next_any(NUMERIC_TYPES)
            and after_next is not None
            and after_next.type == TokenType.DEGREE
        ):
            return degrees

        return degrees + self._minutes(ctx)

    def _symbol(self, ctx: ParseContext) -> bool:
        """
        Потребляет символ единицы, если он обязателен или присутствует.

        Returns:
            False, если значение записано без символов
        """
        if ctx.next_symbol is SymbolRequirement.UNDETERMINED:
            # Двоеточие закрепляется до конца разбора
            if ctx.lexer.is_next(TokenType.COLON):
                self._match(ctx, TokenType.COLON)
                ctx.next_symbol = SymbolRequirement.COLON
                return True

            if ctx.lexer.is_next(TokenType.DEGREE):
                self._match(ctx, TokenType.DEGREE)
                ctx.next_symbol = SymbolRequirement.APOSTROPHE
                return True

        transition = _SYMBOL_TRANSITIONS.get(ctx.next_symbol)
        if transition is not None:
            token_type, requirement = transition
            self._match(ctx, token_type)
            ctx.next_symbol = requirement
            return True

        ctx.next_symbol = SymbolRequirement.NO_SYMBOL
        return False

    def _minutes(self, ctx: ParseContext) -> Number:
        if ctx.next_symbol is SymbolRequirement.COLON or ctx.lexer.is_next(TokenType.INTEGER):
            minutes = self._match(ctx, TokenType.INTEGER)

            if minutes > 60:
                raise self._range_error(ctx, "Minutes", 60)

            fraction = minutes / 60

            # Через двоеточие без следующего двоеточия значение закончено
            if ctx.next_symbol is SymbolRequirement.COLON and not ctx.lexer.is_next(TokenType.COLON):
                return fraction

            self._symbol(ctx)

            return fraction + self._seconds(ctx)

        # Дробные минуты не могут иметь секунд
        if ctx.lexer.is_next(TokenType.FLOAT):
            minutes = self._match(ctx, TokenType.FLOAT)

            if minutes > 60:
                raise self._range_error(ctx, "Minutes", 60)

            self._symbol(ctx)

            return minutes / 60

        return 0

    def _seconds(self, ctx: ParseContext) -> Number:
        if ctx.lexer.is_next_any(NUMERIC_TYPES):
            seconds = self._number(ctx)

            if seconds > 60:
                raise self._range_error(ctx, "Seconds", 60)

            # Для двоеточий символов после секунд нет
            if ctx.next_symbol is not SymbolRequirement.COLON:
                self._symbol(ctx)

            return seconds / 3600

        return 0

    def _number(self, ctx: ParseContext) -> Number:
        if ctx.lexer.is_next_any(NUMERIC_TYPES):
            return ctx.lexer.advance().value  # type: ignore[union-attr,return-value]

        raise self._syntax_error(ctx, "integer or float")

    def _cardinal(self, ctx: ParseContext, value: Number) -> Number:
        """Применяет знак по букве стороны света и проверяет диапазон."""
        # Для первой координаты пары подходит любая сторона света
        if ctx.next_cardinal is CardinalRequirement.UNDETERMINED:
            if ctx.lexer.is_next(TokenType.CARDINAL_LON):
                ctx.next_cardinal = CardinalRequirement.LONGITUDE
            else:
                ctx.next_cardinal = CardinalRequirement.LATITUDE

        letter = self._match(ctx, ctx.next_cardinal.token_type)
        sign, bound, ctx.next_cardinal = _CARDINALS[str(letter).lower()]

        if value > bound:
            raise self._range_error(ctx, "Degrees", bound, -bound)

        return value * sign

    # Вспомогательные методы

    def _match(self, ctx: ParseContext, token_type: TokenType):
        """Потребляет токен указанного типа и возвращает его значение."""
        if not ctx.lexer.is_next(token_type):
            raise self._syntax_error(ctx, token_type.value)

        return ctx.lexer.advance().value  # type: ignore[union-attr]

    @staticmethod
    def _syntax_error(ctx: ParseContext, expected: str) -> CoordinateSyntaxError:
        token = ctx.lexer.lookahead
        if token is None:
            error = CoordinateSyntaxError(expected, None, -1, ctx.input)
        else:
            error = CoordinateSyntaxError(expected, token.value, token.position, ctx.input)
        logger.debug("RAISE %s", error)
        return error

    @staticmethod
    def _range_error(ctx: ParseContext, component: str, high: int, low: Optional[int] = None) -> CoordinateRangeError:
        error = CoordinateRangeError(component, high, ctx.input, low)
        logger.debug("RAISE %s", error)
        return error


def parse(text: str, config: Optional[LexerConfig] = None) -> Point:
    """Разбирает строку координат новым парсером (безопасно для потоков)."""
    return CoordinateParser(config).parse(text)


def try_parse(text: str, config: Optional[LexerConfig] = None) -> ParseResult:
    """Разбирает строку координат, возвращая ParseResult вместо исключения."""
    return CoordinateParser(config).try_parse(text)


__all__ = ["CoordinateParser", "ParseContext", "parse", "try_parse"]
