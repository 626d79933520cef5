"""ContextVar-based format configuration for sqlign.

Provides thread-local configuration using Python's ContextVars (PEP 567).
Renderers read the active config once, when they are constructed.

Usage:
    from sqlign.config import FormatConfig, format_config_context

    with format_config_context(FormatConfig(terminator=" ;")):
        text = format_sql("SELECT 1")

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FormatConfig:
    """Immutable format configuration.

    Kind suffixes decide how node labels are classified; see
    ``sqlign.kinds.classify``.

    Attributes:
        statement_suffix: Kinds ending with this are top-level statements
        clause_suffix: Kinds ending with this are clauses
        subexpression_suffixes: Kinds ending with any of these are
            parenthesized or nested expressions
        dotted_name_kind: Kind rendered with no separator between children
        binary_expression_kind: Kind rendered as ``<left> <op> <right>``
        terminator: Appended after every statement block
        newline: Line break emitted after each clause and terminator

    """

    statement_suffix: str = "statement"
    clause_suffix: str = "clause"
    subexpression_suffixes: tuple[str, ...] = ("parenthesized_expression", "subquery")
    dotted_name_kind: str = "dotted_name"
    binary_expression_kind: str = "binary_expression"
    terminator: str = ";"
    newline: str = "\n"

    @classmethod
    def from_dict(cls, config_dict: dict) -> "FormatConfig":
        """Create FormatConfig from dictionary.

        Only includes keys that are valid FormatConfig fields; unknown keys
        are silently ignored. Lists are accepted for tuple fields.

        Example:
            >>> FormatConfig.from_dict({"terminator": ";;", "bogus": 1}).terminator
            ';;'

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        if "subexpression_suffixes" in filtered:
            filtered["subexpression_suffixes"] = tuple(filtered["subexpression_suffixes"])
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: FormatConfig = FormatConfig()

_format_config: ContextVar[FormatConfig] = ContextVar(
    "format_config",
    default=_DEFAULT_CONFIG,
)


def get_format_config() -> FormatConfig:
    """Get current format configuration (thread-local)."""
    return _format_config.get()


def set_format_config(config: FormatConfig) -> None:
    """Set format configuration for current context.

    Only affects the current thread's context.
    """
    _format_config.set(config)


def reset_format_config() -> None:
    """Reset to the default configuration."""
    _format_config.set(_DEFAULT_CONFIG)


@contextmanager
def format_config_context(config: FormatConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with format_config_context(FormatConfig(terminator=" ;")):
        ...     get_format_config().terminator
        ' ;'

    """
    previous = _format_config.get()
    _format_config.set(config)
    try:
        yield
    finally:
        _format_config.set(previous)


__all__ = [
    "FormatConfig",
    "format_config_context",
    "get_format_config",
    "reset_format_config",
    "set_format_config",
]
