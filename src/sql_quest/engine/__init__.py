"""In-memory query engine for the database explorer.

This package provides:
- A tokenizer and recursive-descent parser for a SELECT subset
- Schema validation with static predicate type checks
- A stable, explicitly capped executor over read-only relations
"""

from sql_quest.engine.database import Database, get_database
from sql_quest.engine.parser import parse_query
from sql_quest.engine.query import ComparisonOp, ParsedQuery, SortDirection
from sql_quest.engine.query_runner import (
    QueryRunner,
    execute_query,
    get_query_runner,
    run_query,
)
from sql_quest.engine.validator import validate_query

__all__ = [
    # Database handle
    "Database",
    "get_database",
    # Pipeline stages
    "parse_query",
    "validate_query",
    "ParsedQuery",
    "ComparisonOp",
    "SortDirection",
    # Entry points
    "run_query",
    "execute_query",
    "QueryRunner",
    "get_query_runner",
]
