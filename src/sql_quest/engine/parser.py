"""Recursive-descent parser for the explorer's SELECT subset.

Grammar (keywords case-insensitive)::

    statement := SELECT columns FROM ident [where] [order] [limit] [";"] EOF
    columns   := "*" | ident ("," ident)*
    where     := WHERE ident op literal | WHERE ident IS [NOT] NULL
    order     := ORDER BY ident [ASC | DESC]
    limit     := LIMIT integer
    literal   := string | number | TRUE | FALSE | NULL

Every input is either accepted or rejected with a positioned error; there is
no partial match.
"""

from __future__ import annotations

import re

from sql_quest.core.exceptions import QuerySyntaxError, UnsupportedStatementError
from sql_quest.engine.query import (
    ComparisonOp,
    LiteralValue,
    OrderBy,
    ParsedQuery,
    Predicate,
    SortDirection,
)
from sql_quest.engine.tokenizer import Token, Tokenizer, TokenType
from sql_quest.models.schema import ValueKind

# Statements recognised but rejected (read-only engine, SELECT subset only)
UNSUPPORTED_STATEMENTS = frozenset(
    {
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

_FIRST_WORD = re.compile(r"\s*([A-Za-z_][A-Za-z0-9_]*)")


class Parser:
    """Parser over a token list. Call ``parse()`` to get a ``ParsedQuery``."""

    def __init__(self, tokens: list[Token]) -> None:
        self._tokens = tokens
        self._pos = 0

    # Token helpers

    def _peek(self) -> Token:
        return self._tokens[self._pos]

    def _advance(self) -> Token:
        token = self._tokens[self._pos]
        if token.type is not TokenType.EOF:
            self._pos += 1
        return token

    def _match_keyword(self, *words: str) -> Token | None:
        if self._peek().is_keyword(*words):
            return self._advance()
        return None

    def _error(self, message: str, token: Token | None = None) -> QuerySyntaxError:
        token = token or self._peek()
        return QuerySyntaxError(
            f"{message} at line {token.line}:{token.column}",
            line=token.line,
            column=token.column,
            token=token.text or None,
        )

    def _expect_keyword(self, word: str) -> Token:
        token = self._match_keyword(word)
        if token is None:
            raise self._error(f"Expected {word} but found {self._peek().describe()}")
        return token

    def _expect_identifier(self, what: str) -> str:
        token = self._peek()
        if token.type is TokenType.IDENTIFIER:
            self._advance()
            return token.value
        if token.type is TokenType.KEYWORD:
            raise self._error(f"Expected {what} but found reserved word {token.describe()}")
        raise self._error(f"Expected {what} but found {token.describe()}")

    # Grammar

    def parse(self) -> ParsedQuery:
        """Parse a single SELECT statement.

        Raises:
            QuerySyntaxError: If the tokens do not form a valid statement.
            UnsupportedStatementError: If the statement is not a SELECT.
        """
        first = self._peek()
        if first.type is TokenType.EOF:
            raise self._error("Empty query")
        if first.type is TokenType.KEYWORD and first.value in UNSUPPORTED_STATEMENTS:
            raise UnsupportedStatementError(first.value)
        if not first.is_keyword("SELECT"):
            raise self._error(f"Query must start with SELECT, found {first.describe()}")
        self._advance()

        columns = self._parse_columns()
        self._expect_keyword("FROM")
        table = self._expect_identifier("table name")

        predicate = self._parse_where() if self._match_keyword("WHERE") else None
        order_by = None
        if self._match_keyword("ORDER"):
            self._expect_keyword("BY")
            order_by = self._parse_order()
        limit = self._parse_limit() if self._match_keyword("LIMIT") else None

        if self._peek().type is TokenType.SEMICOLON:
            self._advance()
        trailing = self._peek()
        if trailing.type is not TokenType.EOF:
            raise self._error(f"Unexpected {trailing.describe()} after end of statement")

        return ParsedQuery(
            table=table,
            columns=columns,
            predicate=predicate,
            order_by=order_by,
            limit=limit,
        )

    def _parse_columns(self) -> tuple[str, ...] | None:
        if self._peek().type is TokenType.STAR:
            self._advance()
            if self._peek().type is TokenType.COMMA:
                raise self._error("'*' cannot be combined with other columns")
            return None

        columns: list[str] = []
        seen: set[str] = set()
        while True:
            token = self._peek()
            name = self._expect_identifier("column name")
            if name.lower() in seen:
                raise self._error(f"Duplicate column '{name}' in select list", token)
            seen.add(name.lower())
            columns.append(name)
            if self._peek().type is not TokenType.COMMA:
                break
            self._advance()
        return tuple(columns)

    def _parse_where(self) -> Predicate:
        column = self._expect_identifier("column name")

        if self._match_keyword("IS"):
            op = ComparisonOp.IS_NOT_NULL if self._match_keyword("NOT") else ComparisonOp.IS_NULL
            self._expect_keyword("NULL")
            return Predicate(column=column, op=op)

        token = self._peek()
        if token.type is not TokenType.OPERATOR:
            raise self._error(f"Expected comparison operator but found {token.describe()}")
        self._advance()
        op = ComparisonOp.from_symbol(token.value)
        return Predicate(column=column, op=op, literal=self._parse_literal())

    def _parse_literal(self) -> LiteralValue:
        token = self._peek()
        if token.type is TokenType.STRING:
            self._advance()
            return LiteralValue(ValueKind.STRING, token.value)
        if token.type is TokenType.NUMBER:
            self._advance()
            return LiteralValue(ValueKind.NUMBER, token.value)
        if token.is_keyword("TRUE", "FALSE"):
            self._advance()
            return LiteralValue(ValueKind.BOOLEAN, token.value == "TRUE")
        if token.is_keyword("NULL"):
            self._advance()
            return LiteralValue(ValueKind.NULL, None)
        raise self._error(f"Expected literal value but found {token.describe()}")

    def _parse_order(self) -> OrderBy:
        column = self._expect_identifier("column name")
        direction = SortDirection.ASC
        token = self._match_keyword("ASC", "DESC")
        if token is not None:
            direction = SortDirection(token.value)
        return OrderBy(column=column, direction=direction)

    def _parse_limit(self) -> int:
        token = self._peek()
        if token.type is not TokenType.NUMBER or not isinstance(token.value, int) or token.value < 0:
            raise self._error(f"LIMIT expects a non-negative integer, found {token.describe()}")
        self._advance()
        return token.value


def parse_query(text: str) -> ParsedQuery:
    """Parse query text into a ``ParsedQuery``.

    Unsupported statements are detected from the leading word before
    tokenizing, so ``DELETE FROM t WHERE x = @`` reports the statement kind
    rather than the stray character.

    Args:
        text: A single statement.

    Returns:
        The parsed query.

    Raises:
        QuerySyntaxError: If the text is not a valid statement.
        UnsupportedStatementError: If the statement is not a SELECT.
    """
    match = _FIRST_WORD.match(text)
    if match and match.group(1).upper() in UNSUPPORTED_STATEMENTS:
        raise UnsupportedStatementError(match.group(1).upper())

    tokens = Tokenizer().tokenize(text)
    return Parser(tokens).parse()
