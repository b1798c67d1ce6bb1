"""
Registry API — Mutation Builder Tests
=======================================

Statements are compiled against real dialects; no store is needed.

What we test:
    ✅ Values travel as bound parameters, never in the SQL text
    ✅ Partial update touches only the supplied columns
    ✅ Upsert shape per dialect (ON CONFLICT, guarded insert, savepoint insert)
    ✅ The key column is never in an update's SET clause
"""

import pytest
from sqlalchemy.dialects import mysql, postgresql, sqlite

from app.services.mutations import (
    MutationKind,
    build_company_create,
    build_company_partial_update,
    build_company_upsert,
    build_customer_delete,
)

HOSTILE = "x'; DROP TABLE company; --"


def _compile(statement, dialect):
    return statement.compile(dialect=dialect)


class TestCompanyCreate:
    def test_binds_all_three_values(self):
        mutation = build_company_create("C1", "Acme", "Oslo")
        compiled = _compile(mutation.statement, postgresql.dialect())

        assert mutation.kind is MutationKind.CREATE
        assert mutation.key == "C1"
        assert compiled.params == {
            "COMPANY_ID": "C1",
            "COMPANY_NAME": "Acme",
            "COMPANY_CITY": "Oslo",
        }

    def test_hostile_value_stays_out_of_sql_text(self):
        mutation = build_company_create("C1", HOSTILE, "Oslo")
        compiled = _compile(mutation.statement, postgresql.dialect())

        assert "DROP TABLE" not in str(compiled)
        assert compiled.params["COMPANY_NAME"] == HOSTILE


class TestCompanyPartialUpdate:
    def test_only_name(self):
        mutation = build_company_partial_update("C1", company_name="Acme")
        sql = str(_compile(mutation.statement, postgresql.dialect()))

        assert mutation.kind is MutationKind.PARTIAL_UPDATE
        assert '"COMPANY_NAME"=' in sql
        assert '"COMPANY_CITY"' not in sql

    def test_only_city(self):
        mutation = build_company_partial_update("C1", company_city="Oslo")
        sql = str(_compile(mutation.statement, postgresql.dialect()))

        assert '"COMPANY_CITY"=' in sql
        assert '"COMPANY_NAME"' not in sql

    def test_key_is_only_in_where_clause(self):
        mutation = build_company_partial_update("C1", "Acme", "Oslo")
        sql = str(_compile(mutation.statement, postgresql.dialect()))

        set_clause, where_clause = sql.split("WHERE")
        assert '"COMPANY_ID"' not in set_clause
        assert '"COMPANY_ID"' in where_clause

    def test_no_attributes_is_rejected(self):
        with pytest.raises(ValueError):
            build_company_partial_update("C1")


class TestCompanyUpsert:
    def test_postgresql_single_statement_with_duplicate_flag(self):
        mutation = build_company_upsert("C1", "Acme", "Oslo", "postgresql")
        sql = str(_compile(mutation.statement, postgresql.dialect()))

        assert mutation.kind is MutationKind.UPSERT
        assert mutation.fallback is None
        assert 'ON CONFLICT ("COMPANY_ID") DO UPDATE' in sql
        assert "RETURNING (xmax = 0) AS inserted" in sql

    def test_postgresql_update_branch_excludes_key(self):
        mutation = build_company_upsert("C1", "Acme", "Oslo", "postgresql")
        sql = str(_compile(mutation.statement, postgresql.dialect()))
        update_branch = sql.split("DO UPDATE SET")[1].split("RETURNING")[0]

        assert '"COMPANY_ID"' not in update_branch
        assert '"COMPANY_NAME"' in update_branch
        assert '"COMPANY_CITY"' in update_branch

    def test_sqlite_guarded_insert_with_fallback(self):
        mutation = build_company_upsert("C1", "Acme", "Oslo", "sqlite")
        sql = str(_compile(mutation.statement, sqlite.dialect()))

        assert "ON CONFLICT" in sql and "DO NOTHING" in sql
        assert mutation.fallback is not None
        fallback = _compile(mutation.fallback, sqlite.dialect())
        assert str(fallback).startswith("UPDATE company SET")
        assert fallback.params["COMPANY_NAME"] == "Acme"

    @pytest.mark.parametrize("dialect", ["mysql", "mariadb"])
    def test_mysql_plain_insert_raises_on_duplicate(self, dialect):
        mutation = build_company_upsert("C1", "Acme", "Oslo", dialect)
        sql = str(_compile(mutation.statement, mysql.dialect()))

        assert sql.startswith("INSERT INTO company")
        assert "IGNORE" not in sql
        assert mutation.duplicate_raises
        assert mutation.fallback is not None

    def test_guarded_dialects_do_not_rely_on_errors(self):
        assert not build_company_upsert("C1", "A", "B", "sqlite").duplicate_raises
        assert not build_company_upsert("C1", "A", "B", "postgresql").duplicate_raises

    def test_omitted_attribute_is_bound_as_null(self):
        mutation = build_company_upsert("C1", "Acme", None, "sqlite")
        fallback = _compile(mutation.fallback, sqlite.dialect())

        assert fallback.params["COMPANY_CITY"] is None

    def test_unsupported_dialect(self):
        with pytest.raises(ValueError):
            build_company_upsert("C1", "Acme", "Oslo", "oracle")


class TestCustomerDelete:
    def test_delete_by_code(self):
        mutation = build_customer_delete("C00001")
        compiled = _compile(mutation.statement, postgresql.dialect())

        assert mutation.kind is MutationKind.DELETE
        assert mutation.key == "C00001"
        assert str(compiled).startswith("DELETE FROM customer WHERE")
        assert list(compiled.params.values()) == ["C00001"]
