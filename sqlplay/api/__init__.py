"""
HTTP API for SQL Playground (FastAPI).

Routes translate JSON requests into Playground calls and map the core's
error kinds onto HTTP status codes. No business rules live here.
"""
