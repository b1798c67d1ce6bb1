"""
Registry API — Request Pipeline Runner
========================================

What:  The shared Acquire → Build → Execute → Release → Reconcile sequence,
       plus the single-column read used by the name listings.
Who:   CompanyService, CustomerService and CatalogService.

Statement failures are caught here, logged with full detail, and re-raised
as DatabaseError carrying a generic message. Connection failures already
arrive as StoreUnavailableError from the provider and pass through.
"""

import logging
from typing import Any, Callable, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql import Executable

from app.database import ConnectionProvider, ExecutionResult
from app.exceptions import DatabaseError
from app.services.mutations import Mutation
from app.services.reconciler import Outcome, reconcile

logger = logging.getLogger(__name__)


async def run_mutation(
    provider: ConnectionProvider,
    build: Callable[[str], Mutation],
    resource: str,
) -> Outcome:
    """
    Execute one mutation on a freshly leased connection and reconcile it.

    Args:
        provider: Injected connection provider.
        build:    Receives the connection's dialect name and returns the
                  mutation to execute.
        resource: Display name used in messages ("Company", "Customer").

    Raises:
        DatabaseError: statement execution (or commit) failed.
        StoreUnavailableError: no connection could be acquired.
        NotFoundError: a keyed mutation matched zero rows.
    """
    try:
        async with provider.acquire() as conn:
            mutation = build(conn.dialect_name)
            result: ExecutionResult = await conn.execute(mutation)
    except SQLAlchemyError as exc:
        logger.error("Error executing %s mutation: %s", resource.lower(), exc, exc_info=True)
        raise DatabaseError(
            message="Server error",
            context={"resource": resource, "error_type": type(exc).__name__},
        ) from exc

    logger.info(
        "%s %s %s: rows_affected=%d duplicate=%s",
        resource,
        mutation.key,
        mutation.kind.value,
        result.rows_affected,
        result.was_duplicate,
    )
    return reconcile(mutation, result, resource)


async def fetch_names(provider: ConnectionProvider, statement: Executable, label: str) -> List[Any]:
    """Run a single-column SELECT and return the values."""
    try:
        async with provider.acquire() as conn:
            return await conn.fetch_column(statement)
    except SQLAlchemyError as exc:
        logger.error("Error fetching %s: %s", label, exc, exc_info=True)
        raise DatabaseError(
            message="Internal server error",
            context={"listing": label, "error_type": type(exc).__name__},
        ) from exc
