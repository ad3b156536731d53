"""
Safety gate for user-submitted SQL.

A keyword deny-list, not a parser. The upper-cased text is scanned for
each denied keyword as a plain substring, so a string literal or an
identifier containing "DELETE" is rejected as well. This guards the
editor against accidental destructive statements; it is not a security
boundary against adversarial input.

CREATE and INSERT are allowed. Syntax and semantic errors are left to
the query executor.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

DENIED_KEYWORDS: tuple[str, ...] = (
    "DROP",
    "DELETE",
    "TRUNCATE",
    "ALTER",
    "PRAGMA",
    "ATTACH",
    "DETACH",
)

REJECTION_MESSAGE = (
    "Query contains disallowed dangerous operations (e.g., DROP, DELETE, TRUNCATE, ALTER)."
)


@dataclass(frozen=True)
class Classification:
    """Outcome of a safety check.

    Attributes:
        permitted: Whether the statement may run
        matched: Denied keywords found in the text
    """

    permitted: bool
    matched: tuple[str, ...] = field(default_factory=tuple)


class SafetyGate:
    """Classifies SQL text as permitted or rejected.

    Example:
        >>> SafetyGate().classify("select * from t").permitted
        True
        >>> SafetyGate().classify("drop table t").matched
        ('DROP',)
    """

    def __init__(self, denied_keywords: tuple[str, ...] = DENIED_KEYWORDS) -> None:
        self.denied_keywords = tuple(k.upper() for k in denied_keywords)

    def classify(self, sql_text: str) -> Classification:
        upper = sql_text.upper().strip()
        matched = tuple(k for k in self.denied_keywords if k in upper)
        if matched:
            logger.debug("Statement denied", extra={"keywords": list(matched)})
            return Classification(permitted=False, matched=matched)
        return Classification(permitted=True)
