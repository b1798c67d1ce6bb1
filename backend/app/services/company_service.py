"""
Registry API — Company Service
================================

What:  Runs the create / partial-update / upsert pipelines for companies.
How:   Each method checks its preconditions, then hands a mutation builder
       to `run_mutation`, which leases a connection, executes, releases and
       reconciles.
Who:   Called by the company routes with the provider injected per request.

Pipeline (one request):
    ┌──────────┐   ┌──────────┐   ┌─────────┐   ┌─────────┐   ┌───────────┐
    │ Validate │──▶│ Acquire  │──▶│  Build  │──▶│ Execute │──▶│ Reconcile │
    │ (FastAPI)│   │(provider)│   │(mutat.) │   │ (conn)  │   │           │
    └──────────┘   └──────────┘   └─────────┘   └─────────┘   └───────────┘

Error Recovery:
    Precondition fails  → ValidationError (400), no connection leased
    Acquire fails       → StoreUnavailableError (500)
    Execute fails       → DatabaseError (500), transaction rolled back
    Zero rows matched   → NotFoundError (404), raised after release
"""

import logging

from app.database import ConnectionProvider
from app.exceptions import ValidationError
from app.schemas.company import CompanyChanges, CompanyCreate
from app.services.mutations import (
    build_company_create,
    build_company_partial_update,
    build_company_upsert,
)
from app.services.pipeline import run_mutation
from app.services.reconciler import Outcome

logger = logging.getLogger(__name__)

RESOURCE = "Company"


class CompanyService:
    """
    Business logic for company records.

    Stateless: the provider arrives with every call, so a single instance
    serves all requests.
    """

    async def create_company(
        self, provider: ConnectionProvider, payload: CompanyCreate
    ) -> Outcome:
        """
        Insert a new company (POST /api/company).

        A duplicate COMPANY_ID is not told apart from other store failures
        and surfaces as a generic 500.
        """
        return await run_mutation(
            provider,
            lambda _dialect: build_company_create(
                payload.company_id, payload.company_name, payload.company_city
            ),
            RESOURCE,
        )

    async def update_company(
        self, provider: ConnectionProvider, company_id: str, changes: CompanyChanges
    ) -> Outcome:
        """
        Change only the supplied attributes (PATCH /api/company/{companyId}).

        Raises:
            ValidationError: neither companyName nor companyCity supplied.
                Checked before any connection is leased.
            NotFoundError: no company with this key.
        """
        if not changes.has_changes():
            logger.info("Rejected empty update for company %s", company_id)
            raise ValidationError(
                message="Provide at least one field to update (companyName or companyCity)",
                location="body",
            )

        return await run_mutation(
            provider,
            lambda _dialect: build_company_partial_update(
                company_id, changes.company_name, changes.company_city
            ),
            RESOURCE,
        )

    async def upsert_company(
        self, provider: ConnectionProvider, company_id: str, changes: CompanyChanges
    ) -> Outcome:
        """
        Insert or overwrite (PUT /api/company/{companyId}).

        Returns an Outcome of 201 "Company added" for a fresh key and
        200 "Company updated" when the key already existed.
        """
        return await run_mutation(
            provider,
            lambda dialect: build_company_upsert(
                company_id, changes.company_name, changes.company_city, dialect
            ),
            RESOURCE,
        )


company_service = CompanyService()
