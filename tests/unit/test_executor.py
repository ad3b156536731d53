"""
Unit tests for the query executor.

Tests cover:
- Result normalization for row-returning and side-effect statements
- NULL handling and column order
- The SELECT-prefix heuristic and its documented limitation
- Mapping of SQLite failures to QueryError
"""

import pytest

from sqlplay.engine.executor import ExecutionResult, QueryExecutor, is_row_returning
from sqlplay.errors import QueryError, StorageError
from sqlplay.storage import Database


class TestIsRowReturning:
    """Tests for the leading-keyword heuristic."""

    @pytest.mark.parametrize("sql", ["SELECT 1", "  select 1", "\n\tSeLeCt * FROM t"])
    def test_select_prefix(self, sql):
        assert is_row_returning(sql) is True

    @pytest.mark.parametrize(
        "sql",
        [
            "INSERT INTO t VALUES (1)",
            "WITH x AS (SELECT 1) SELECT * FROM x",
            "VALUES (1)",
            "",
        ],
    )
    def test_other_statements(self, sql):
        assert is_row_returning(sql) is False


class TestExecutionResult:
    """Tests for ExecutionResult shapes."""

    def test_empty(self):
        assert ExecutionResult.empty().to_dict() == {"columns": [], "rows": [], "rowCount": 0}

    def test_from_no_rows(self):
        assert ExecutionResult.from_rows([]) == ExecutionResult.empty()


class TestQueryExecutor:
    """Tests for QueryExecutor.execute."""

    @pytest.fixture
    def executor(self, db):
        return QueryExecutor(db)

    @pytest.mark.asyncio
    async def test_select_literal(self, executor):
        result = await executor.execute("SELECT 1 as x")
        assert result.to_dict() == {"columns": ["x"], "rows": [[1]], "rowCount": 1}

    @pytest.mark.asyncio
    async def test_create_insert_select(self, executor):
        """DDL and DML return the empty shape; SELECT returns the data."""
        created = await executor.execute("CREATE TABLE t(a INT)")
        inserted = await executor.execute("INSERT INTO t VALUES (1)")
        selected = await executor.execute("SELECT * FROM t")

        assert created.to_dict() == {"columns": [], "rows": [], "rowCount": 0}
        assert inserted.to_dict() == {"columns": [], "rows": [], "rowCount": 0}
        assert selected.to_dict() == {"columns": ["a"], "rows": [[1]], "rowCount": 1}

    @pytest.mark.asyncio
    async def test_select_zero_rows(self, executor):
        await executor.execute("CREATE TABLE empty_t(a INT, b TEXT)")
        result = await executor.execute("SELECT * FROM empty_t")
        assert result.to_dict() == {"columns": [], "rows": [], "rowCount": 0}

    @pytest.mark.asyncio
    async def test_uniform_row_shape_with_nulls(self, executor):
        await executor.execute("CREATE TABLE people(id INT, name TEXT, age INT)")
        await executor.execute("INSERT INTO people VALUES (1, 'ann', 30), (2, NULL, NULL), (3, 'cy', 41)")

        result = await executor.execute("SELECT id, name, age FROM people ORDER BY id")

        assert result.columns == ["id", "name", "age"]
        assert result.row_count == 3 == len(result.rows)
        assert all(len(row) == len(result.columns) for row in result.rows)
        assert result.rows[1] == [2, None, None]

    @pytest.mark.asyncio
    async def test_column_order_follows_select_list(self, executor):
        result = await executor.execute("SELECT 'b' AS second, 'a' AS first")
        assert result.columns == ["second", "first"]
        assert result.rows == [["b", "a"]]

    @pytest.mark.asyncio
    async def test_blob_values_rendered_as_hex(self, executor):
        result = await executor.execute("SELECT x'FF00' AS b, 'text' AS s")
        assert result.rows == [[b"\xff\x00", "text"]]
        assert result.to_dict()["rows"] == [["ff00", "text"]]

    @pytest.mark.asyncio
    async def test_returning_clause_not_recognised(self, executor):
        """Rows produced by non-SELECT statements are not returned."""
        await executor.execute("CREATE TABLE r(a INT)")
        result = await executor.execute("INSERT INTO r VALUES (7) RETURNING a")
        assert result.to_dict() == {"columns": [], "rows": [], "rowCount": 0}

        stored = await executor.execute("SELECT a FROM r")
        assert stored.rows == [[7]]

    @pytest.mark.asyncio
    async def test_syntax_error_raises_query_error(self, executor):
        with pytest.raises(QueryError) as exc_info:
            await executor.execute("SELEC 1")
        assert "syntax error" in exc_info.value.message
        assert exc_info.value.code == "QUERY_ERROR"

    @pytest.mark.asyncio
    async def test_missing_table_raises_query_error(self, executor):
        with pytest.raises(QueryError) as exc_info:
            await executor.execute("SELECT * FROM nope")
        assert "no such table" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_constraint_violation_raises_query_error(self, executor):
        await executor.execute("CREATE TABLE u(a INT PRIMARY KEY)")
        await executor.execute("INSERT INTO u VALUES (1)")
        with pytest.raises(QueryError) as exc_info:
            await executor.execute("INSERT INTO u VALUES (1)")
        assert "UNIQUE constraint failed" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_multiple_statements_raise_query_error(self, executor):
        with pytest.raises(QueryError):
            await executor.execute("SELECT 1; SELECT 2")

    @pytest.mark.asyncio
    async def test_open_transaction_is_closed(self, executor, db):
        """A bare BEGIN does not leave the shared connection in a transaction."""
        await executor.execute("BEGIN")
        assert db.connection.in_transaction is False

    @pytest.mark.asyncio
    async def test_not_connected_raises_storage_error(self, storage_config):
        executor = QueryExecutor(Database(storage_config))
        with pytest.raises(StorageError):
            await executor.execute("SELECT 1")
