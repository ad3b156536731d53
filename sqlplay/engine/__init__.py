"""
Engine module for SQL Playground - gating, execution and composition.

This module handles:
- Keyword safety gate in front of user SQL (SafetyGate)
- Statement execution and result normalization (QueryExecutor)
- The Playground facade used by the HTTP and CLI layers
"""

from .executor import ExecutionResult, QueryExecutor
from .playground import Playground
from .safety import DENIED_KEYWORDS, Classification, SafetyGate

__all__ = [
    "Classification",
    "DENIED_KEYWORDS",
    "ExecutionResult",
    "Playground",
    "QueryExecutor",
    "SafetyGate",
]
