"""
Registry API — Customer Route Handlers
========================================

What:  GET /api/customers (names) and DELETE /api/customers/{custCode}.
"""

from fastapi import APIRouter, Depends

from app.database import ConnectionProvider
from app.dependencies import get_connection_provider
from app.schemas.common import ErrorResponse, MessageResponse, ValidationErrorResponse
from app.schemas.customer import CustCodeField, CustomerListResponse
from app.services.customer_service import customer_service

router = APIRouter(prefix="/api", tags=["Customers"])


@router.get(
    "/customers",
    response_model=CustomerListResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List customer names",
)
async def list_customers(
    provider: ConnectionProvider = Depends(get_connection_provider),
) -> CustomerListResponse:
    names = await customer_service.list_customer_names(provider)
    return CustomerListResponse(customerList=names)


@router.delete(
    "/customers/{custCode}",
    response_model=MessageResponse,
    responses={
        200: {"description": "Customer deleted successfully"},
        400: {"description": "Invalid customer code", "model": ValidationErrorResponse},
        404: {"description": "Customer not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete a customer by code",
)
async def delete_customer(
    custCode: CustCodeField,  # noqa: N803
    provider: ConnectionProvider = Depends(get_connection_provider),
) -> MessageResponse:
    outcome = await customer_service.delete_customer(provider, custCode)
    return MessageResponse(message=outcome.message)
