"""
Tools for SQL Playground.

- cli: command line front-end over the Playground core
"""
