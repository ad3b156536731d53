"""
SQL Playground test suite.

This package contains:
- unit/: Component tests (safety gate, executor, stores, config, logging)
- integration/: Playground facade, HTTP API and CLI against a temp SQLite file
"""
