"""SQL tokenizer for the explorer's SELECT subset.

Converts raw query text into a list of typed tokens with line/column
positions. Keywords are case-insensitive and normalised to upper case;
identifiers keep their original spelling.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from sql_quest.core.exceptions import QuerySyntaxError


class TokenType(Enum):
    KEYWORD = auto()
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()
    OPERATOR = auto()
    STAR = auto()
    COMMA = auto()
    SEMICOLON = auto()
    EOF = auto()


# Reserved words; none of them may be used as an identifier.
KEYWORDS = frozenset(
    {
        "SELECT",
        "FROM",
        "WHERE",
        "ORDER",
        "BY",
        "ASC",
        "DESC",
        "LIMIT",
        "IS",
        "NOT",
        "NULL",
        "TRUE",
        "FALSE",
        "AND",
        "OR",
        "AS",
        "JOIN",
        "ON",
        "GROUP",
        "HAVING",
        "DISTINCT",
        # Statements outside the supported subset
        "INSERT",
        "UPDATE",
        "DELETE",
        "DROP",
        "CREATE",
        "ALTER",
        "TRUNCATE",
        "REPLACE",
        "MERGE",
        "GRANT",
        "REVOKE",
        "WITH",
        "BEGIN",
        "COMMIT",
        "ROLLBACK",
    }
)

OPERATORS = frozenset({"=", "!=", "<>", ">", "<", ">=", "<="})


@dataclass(frozen=True)
class Token:
    """Immutable token with position info.

    ``value`` is the upper-cased word for keywords, the unescaped text for
    strings, an ``int``/``float`` for numbers and the source text otherwise.
    """

    type: TokenType
    value: Any
    text: str
    line: int
    column: int

    def is_keyword(self, *words: str) -> bool:
        return self.type is TokenType.KEYWORD and self.value in words

    def describe(self) -> str:
        if self.type is TokenType.EOF:
            return "end of input"
        return f"'{self.text}'"


# Order matters: multi-character operators before single ones, and the
# malformed-identifier check before plain numbers.
_TOKEN_SPEC = [
    ("WS", r"\s+"),
    ("STRING_SQ", r"'(?:''|[^'])*'"),
    ("STRING_DQ", r'"(?:""|[^"])*"'),
    ("BAD_IDENT", r"\d+(?:\.\d+)?[A-Za-z_]\w*"),
    ("NUMBER", r"-?\d+(?:\.\d+)?"),
    ("WORD", r"[A-Za-z_][A-Za-z0-9_]*"),
    ("OP", r">=|<=|!=|<>|=|<|>"),
    ("STAR", r"\*"),
    ("COMMA", r","),
    ("SEMICOLON", r";"),
]
_TOKEN_RE = re.compile("|".join(f"(?P<{name}>{pattern})" for name, pattern in _TOKEN_SPEC))


class Tokenizer:
    """Lexer for the SELECT subset. Call ``tokenize(text)`` to get tokens."""

    def tokenize(self, text: str) -> list[Token]:
        """Tokenize query text into a list ending with an EOF token.

        Raises:
            QuerySyntaxError: On an unexpected character, an unterminated
                string literal, a malformed identifier or an oversized number.
        """
        tokens: list[Token] = []
        pos = 0
        line = 1
        line_start = 0

        while pos < len(text):
            match = _TOKEN_RE.match(text, pos)
            column = pos - line_start + 1

            if match is None:
                char = text[pos]
                if char in ("'", '"'):
                    raise QuerySyntaxError(
                        f"Unterminated string literal at line {line}:{column}",
                        line=line,
                        column=column,
                        token=text[pos : pos + 20],
                    )
                raise QuerySyntaxError(
                    f"Unexpected character '{char}' at line {line}:{column}",
                    line=line,
                    column=column,
                    token=char,
                )

            kind = match.lastgroup
            lexeme = match.group(0)

            if kind == "BAD_IDENT":
                raise QuerySyntaxError(
                    f"Malformed identifier '{lexeme}' at line {line}:{column}",
                    line=line,
                    column=column,
                    token=lexeme,
                )
            if kind != "WS":
                tokens.append(self._make_token(kind, match, line, column))

            newlines = lexeme.count("\n")
            if newlines:
                line += newlines
                line_start = pos + lexeme.rfind("\n") + 1
            pos = match.end()

        tokens.append(Token(TokenType.EOF, None, "", line, pos - line_start + 1))
        return tokens

    def _make_token(self, kind: str, match: re.Match[str], line: int, column: int) -> Token:
        lexeme = match.group(0)

        if kind == "STRING_SQ":
            value = lexeme[1:-1].replace("''", "'")
            return Token(TokenType.STRING, value, lexeme, line, column)
        if kind == "STRING_DQ":
            value = lexeme[1:-1].replace('""', '"')
            return Token(TokenType.STRING, value, lexeme, line, column)
        if kind == "NUMBER":
            try:
                number: int | float = float(lexeme) if "." in lexeme else int(lexeme)
            except ValueError:
                number = math.inf
            if isinstance(number, float) and math.isinf(number):
                raise QuerySyntaxError(
                    f"Numeric literal too large at line {line}:{column}",
                    line=line,
                    column=column,
                    token=lexeme[:20],
                )
            return Token(TokenType.NUMBER, number, lexeme, line, column)
        if kind == "WORD":
            upper = lexeme.upper()
            if upper in KEYWORDS:
                return Token(TokenType.KEYWORD, upper, lexeme, line, column)
            return Token(TokenType.IDENTIFIER, lexeme, lexeme, line, column)
        if kind == "OP":
            return Token(TokenType.OPERATOR, lexeme, lexeme, line, column)
        if kind == "STAR":
            return Token(TokenType.STAR, lexeme, lexeme, line, column)
        if kind == "COMMA":
            return Token(TokenType.COMMA, lexeme, lexeme, line, column)
        return Token(TokenType.SEMICOLON, lexeme, lexeme, line, column)


def tokenize(text: str) -> list[Token]:
    """Tokenize query text with a default ``Tokenizer``."""
    return Tokenizer().tokenize(text)
