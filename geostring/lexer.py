"""
Лексер для разбора географических координат.

Выполняет токенизацию строки координат, разбивая её на значимые элементы:
- Числа (целые и с плавающей точкой, включая экспоненту)
- Символы единиц (градусы, минуты, секунды, двоеточие)
- Знаки (+, -), запятая
- Стороны света (N, S, E, W в любом регистре)
- Пробелы (игнорируются)

Лексер работает в потоковом режиме: хранит текущий токен и один токен
предпросмотра, а glimpse() позволяет заглянуть ещё на один токен вперёд
без изменения состояния.
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator, List, Optional, Tuple

from .config import DEFAULT_LEXER_CONFIG, LexerConfig
from .errors import CoordinateSyntaxError
from .model import Token, TokenType


class CoordinateLexer:
    """
    Лексер координатных строк с двухтокенным буфером.

    Поддерживаемые токены:
    - INTEGER, FLOAT: числовые литералы
    - DEGREE, APOSTROPHE, QUOTE, COLON: символы единиц
    - PLUS, MINUS, COMMA
    - CARDINAL_LAT (N/S), CARDINAL_LON (E/W)
    - NONE: любой нераспознанный символ
    """

    # Спецификация токенов, не зависящих от конфигурации: (regex_pattern, token_type, ignore_flag)
    # NUMBER уточняется до INTEGER/FLOAT после захвата
    BASE_TOKEN_SPECS = [
        # Пробелы и табуляция (игнорируем)
        (r'\s+', None, True),

        # Числа проверяем до букв, чтобы "1e5" не распался на 1 и e
        (r'[0-9]+(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?', 'NUMBER', False),

        (r':', TokenType.COLON, False),
        (r',', TokenType.COMMA, False),
        (r'-', TokenType.MINUS, False),
        (r'\+', TokenType.PLUS, False),
        (r'[NSns]', TokenType.CARDINAL_LAT, False),
        (r'[EWew]', TokenType.CARDINAL_LON, False),
    ]

    def __init__(self, config: Optional[LexerConfig] = None):
        self.config = config or DEFAULT_LEXER_CONFIG

        # Символы единиц идут перед NONE; длинные глифы раньше коротких
        mark_specs = []
        for marks, token_type in (
            (self.config.degree_marks, TokenType.DEGREE),
            (self.config.minute_marks, TokenType.APOSTROPHE),
            (self.config.second_marks, TokenType.QUOTE),
        ):
            for mark in marks:
                mark_specs.append((mark, token_type))
        mark_specs.sort(key=lambda spec: len(spec[0]), reverse=True)

        specs = list(self.BASE_TOKEN_SPECS)
        specs.extend((re.escape(mark), token_type, False) for mark, token_type in mark_specs)
        # Неизвестный символ: передаём парсеру для сообщения об ошибке
        specs.append((r'.', TokenType.NONE, False))

        self._compiled_patterns = [
            (re.compile(pattern, re.DOTALL), token_type, ignore)
            for pattern, token_type, ignore in specs
        ]

        self._input = ""
        self._offsets: List[int] = [0]
        self._cursor = 0
        self.token: Optional[Token] = None
        self.lookahead: Optional[Token] = None

    def set_input(self, text: str) -> None:
        """
        Задаёт новую строку для разбора и сбрасывает состояние.

        Текущий токен и предпросмотр очищаются; первый токен попадёт
        в lookahead после вызова advance().
        """
        self._input = text
        # Байтовые смещения каждого символа (и конца строки)
        offsets = [0]
        for ch in text:
            offsets.append(offsets[-1] + len(ch.encode("utf-8")))
        self._offsets = offsets
        self._cursor = 0
        self.token = None
        self.lookahead = None

    def advance(self) -> Optional[Token]:
        """
        Продвигает лексер: lookahead становится текущим токеном,
        следующий токен сканируется в lookahead.

        Returns:
            Новый текущий токен (None до первого токена или после конца строки)
        """
        self.token = self.lookahead
        self.lookahead, self._cursor = self._scan(self._cursor)
        return self.token

    def peek_next(self) -> Optional[Token]:
        """Возвращает токен предпросмотра без продвижения."""
        return self.lookahead

    def glimpse(self) -> Optional[Token]:
        """Возвращает токен после lookahead, не изменяя состояние лексера."""
        token, _ = self._scan(self._cursor)
        return token

    def is_next(self, token_type: TokenType) -> bool:
        """Проверяет тип токена предпросмотра."""
        return self.lookahead is not None and self.lookahead.type == token_type

    def is_next_any(self, token_types: Iterable[TokenType]) -> bool:
        """Проверяет, что тип токена предпросмотра входит в набор."""
        return self.lookahead is not None and self.lookahead.type in tuple(token_types)

    def tokenize(self, text: str) -> List[Token]:
        """
        Разбивает строку на токены.

        Лексер при этом переиспользуется: предыдущее состояние сбрасывается.

        Args:
            text: Строка координат

        Returns:
            Список токенов (без завершающего маркера)
        """
        return list(self.tokenize_stream(text))

    def tokenize_stream(self, text: str) -> Iterator[Token]:
        """
        Генератор для ленивой токенизации.

        Args:
            text: Строка координат

        Yields:
            Token: Очередной токен
        """
        self.set_input(text)
        self.advance()
        while self.lookahead is not None:
            yield self.advance()

    def _scan(self, index: int) -> Tuple[Optional[Token], int]:
        """Сканирует один токен начиная с индекса символа; не меняет состояние."""
        text = self._input

        while index < len(text):
            for pattern, token_type, ignore in self._compiled_patterns:
                match = pattern.match(text, index)
                if not match:
                    continue

                value = match.group(0)
                end = match.end()

                if ignore:
                    index = end
                    break

                position = self._offsets[index]
                if token_type == 'NUMBER':
                    return self._number_token(value, position), end
                return Token(type=token_type, value=value, position=position), end
            else:
                # Недостижимо: последний паттерн совпадает с любым символом
                raise RuntimeError(f"Failed to tokenize at position {self._offsets[index]}")

        return None, index

    def _number_token(self, literal: str, position: int) -> Token:
        if any(ch in literal for ch in ".eE"):
            return Token(type=TokenType.FLOAT, value=float(literal), position=position)
        try:
            value = int(literal)
        except ValueError as e:
            # Превышен лимит длины при преобразовании строки в int
            raise CoordinateSyntaxError("integer", literal, position, self._input) from e
        return Token(type=TokenType.INTEGER, value=value, position=position)


__all__ = ["CoordinateLexer"]
