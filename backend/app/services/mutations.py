"""
Registry API — Mutation Builder
=================================

What:  Turns validated field values into parameterized SQLAlchemy Core
       statements for the four mutation kinds.
How:   Every value is attached with `.values()` / `.where()` and so becomes a
       bound parameter; the only thing that varies with the input is which
       columns appear in the statement.
Who:   Called by CompanyService and CustomerService between acquiring a
       connection and executing.

Upsert by dialect:
    postgresql      INSERT ... ON CONFLICT (COMPANY_ID) DO UPDATE SET ...
                    RETURNING (xmax = 0) AS inserted
                    One statement; the returned flag is false when the row
                    already existed.
    sqlite          guarded INSERT ... ON CONFLICT DO NOTHING plus a fallback
                    UPDATE that the connection runs only when the guarded
                    insert touched no row.
    mysql, mariadb  plain INSERT under a savepoint plus the same fallback
                    UPDATE, run only when the insert fails with a duplicate
                    key. INSERT IGNORE is not used: it downgrades every error
                    (truncation included) to a warning.
"""

import enum
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import delete, insert, literal_column, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.sql import Executable

from app.models.company import Company
from app.models.customer import Customer

_company = Company.__table__
_customer = Customer.__table__


class MutationKind(str, enum.Enum):
    CREATE = "create"
    PARTIAL_UPDATE = "partial-update"
    UPSERT = "upsert"
    DELETE = "delete"


@dataclass(frozen=True)
class Mutation:
    """
    A statement ready for StoreConnection.execute().

    Attributes:
        kind:      Which reconciliation rule applies to the result.
        key:       Record key, used in not-found messages.
        statement: The parameterized statement.
        fallback:  Update to run when an upsert insert hit an existing key.
                   None for everything else.
        duplicate_raises: The insert reports an existing key by raising
                   IntegrityError rather than by touching zero rows; the
                   connection runs it under a savepoint.
    """

    kind: MutationKind
    key: str
    statement: Executable
    fallback: Optional[Executable] = None
    duplicate_raises: bool = False


def build_company_create(company_id: str, company_name: str, company_city: str) -> Mutation:
    statement = insert(_company).values(
        {
            _company.c.COMPANY_ID: company_id,
            _company.c.COMPANY_NAME: company_name,
            _company.c.COMPANY_CITY: company_city,
        }
    )
    return Mutation(kind=MutationKind.CREATE, key=company_id, statement=statement)


def build_company_partial_update(
    company_id: str,
    company_name: Optional[str] = None,
    company_city: Optional[str] = None,
) -> Mutation:
    """
    UPDATE only the supplied attribute columns, matched on COMPANY_ID.

    Raises:
        ValueError: neither attribute was supplied. Callers check this first
            and answer 400; reaching it here is a programming error.
    """
    changes = {}
    if company_name is not None:
        changes[_company.c.COMPANY_NAME] = company_name
    if company_city is not None:
        changes[_company.c.COMPANY_CITY] = company_city
    if not changes:
        raise ValueError("partial update needs at least one attribute")

    statement = (
        update(_company)
        .where(_company.c.COMPANY_ID == company_id)
        .values(changes)
    )
    return Mutation(kind=MutationKind.PARTIAL_UPDATE, key=company_id, statement=statement)


def build_company_upsert(
    company_id: str,
    company_name: Optional[str],
    company_city: Optional[str],
    dialect: str,
) -> Mutation:
    """
    Insert the full row, or overwrite both attributes when the key exists.

    Omitted attributes are bound as NULL: PUT replaces the whole record.
    The key column is never part of the update branch.
    """
    row = {
        _company.c.COMPANY_ID: company_id,
        _company.c.COMPANY_NAME: company_name,
        _company.c.COMPANY_CITY: company_city,
    }

    if dialect == "postgresql":
        stmt = postgresql.insert(_company).values(row)
        statement = stmt.on_conflict_do_update(
            index_elements=[_company.c.COMPANY_ID],
            set_={
                "COMPANY_NAME": stmt.excluded.COMPANY_NAME,
                "COMPANY_CITY": stmt.excluded.COMPANY_CITY,
            },
        ).returning(literal_column("(xmax = 0)").label("inserted"))
        return Mutation(kind=MutationKind.UPSERT, key=company_id, statement=statement)

    overwrite = (
        update(_company)
        .where(_company.c.COMPANY_ID == company_id)
        .values({_company.c.COMPANY_NAME: company_name, _company.c.COMPANY_CITY: company_city})
    )

    if dialect == "sqlite":
        guarded = sqlite.insert(_company).values(row).on_conflict_do_nothing(
            index_elements=[_company.c.COMPANY_ID]
        )
        return Mutation(
            kind=MutationKind.UPSERT, key=company_id, statement=guarded, fallback=overwrite
        )

    if dialect in ("mysql", "mariadb"):
        return Mutation(
            kind=MutationKind.UPSERT,
            key=company_id,
            statement=insert(_company).values(row),
            fallback=overwrite,
            duplicate_raises=True,
        )

    raise ValueError(f"upsert is not supported for dialect '{dialect}'")


def build_customer_delete(cust_code: str) -> Mutation:
    statement = delete(_customer).where(_customer.c.CUST_CODE == cust_code)
    return Mutation(kind=MutationKind.DELETE, key=cust_code, statement=statement)
