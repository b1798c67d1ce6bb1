"""
Registry API — Outcome Reconciler
===================================

What:  Decides the HTTP status and message for an executed mutation.
How:   Pure function of (mutation kind, ExecutionResult). Keyed mutations
       that matched nothing raise NotFoundError, which the global handler
       renders as 404.

Rules:
    create          → 201 "<Resource> successfully added"
    partial-update  → 0 rows: 404; otherwise 200 "<Resource> updated successfully"
    upsert          → exactly 1 row and no duplicate signal: 201 "<Resource> added"
                      anything else: 200 "<Resource> updated"
    delete          → 0 rows: 404; otherwise 200 "<Resource> deleted successfully"

The upsert rule depends only on the duplicate signal, never on whether
values changed: overwriting a row with identical values is still "updated".
Store failures never reach this module; they surface as DatabaseError.
"""

from dataclasses import dataclass

from app.database import ExecutionResult
from app.exceptions import NotFoundError
from app.services.mutations import Mutation, MutationKind


@dataclass(frozen=True)
class Outcome:
    status_code: int
    message: str


def reconcile(mutation: Mutation, result: ExecutionResult, resource: str) -> Outcome:
    kind = mutation.kind

    if kind is MutationKind.CREATE:
        return Outcome(201, f"{resource} successfully added")

    if kind is MutationKind.UPSERT:
        if result.rows_affected == 1 and not result.was_duplicate:
            return Outcome(201, f"{resource} added")
        return Outcome(200, f"{resource} updated")

    if result.rows_affected == 0:
        raise NotFoundError(resource=resource, resource_id=mutation.key)

    if kind is MutationKind.PARTIAL_UPDATE:
        return Outcome(200, f"{resource} updated successfully")
    if kind is MutationKind.DELETE:
        return Outcome(200, f"{resource} deleted successfully")

    raise ValueError(f"Unknown mutation kind: {kind!r}")
