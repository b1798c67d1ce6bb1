"""
Registry API — Customer Service
=================================

What:  Customer listing and delete-by-code.
Who:   Called by the customer routes.
"""

from typing import List

from sqlalchemy import select

from app.database import ConnectionProvider
from app.models.customer import Customer
from app.services.mutations import build_customer_delete
from app.services.pipeline import fetch_names, run_mutation
from app.services.reconciler import Outcome

RESOURCE = "Customer"


class CustomerService:
    async def list_customer_names(self, provider: ConnectionProvider) -> List[str]:
        return await fetch_names(provider, select(Customer.__table__.c.CUST_NAME), "customers")

    async def delete_customer(self, provider: ConnectionProvider, cust_code: str) -> Outcome:
        """
        Delete one customer by its 6-character code.

        Raises:
            NotFoundError: no customer with this code (→ 404).
        """
        return await run_mutation(
            provider, lambda _dialect: build_customer_delete(cust_code), RESOURCE
        )


customer_service = CustomerService()
