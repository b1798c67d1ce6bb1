"""
Registry API — Company Route Handlers
=======================================

What:  POST /api/company, PATCH and PUT /api/company/{companyId}.
How:   FastAPI validates the path key and the body with the rule pipelines
       from app.schemas.company (all failures collected, 400 on any). The
       handler then runs the matching CompanyService pipeline and copies the
       Outcome's status onto the response.
"""

from fastapi import APIRouter, Depends, Response

from app.database import ConnectionProvider
from app.dependencies import get_connection_provider
from app.schemas.common import ErrorResponse, MessageResponse, ValidationErrorResponse
from app.schemas.company import CompanyChanges, CompanyCreate, CompanyIdField
from app.services.company_service import company_service

router = APIRouter(prefix="/api", tags=["Company"])

_SERVER_ERROR = {"description": "Server error", "model": ErrorResponse}
_BAD_REQUEST = {"description": "Validation errors", "model": ValidationErrorResponse}


@router.post(
    "/company",
    status_code=201,
    response_model=MessageResponse,
    responses={
        201: {"description": "Company successfully added"},
        400: _BAD_REQUEST,
        500: _SERVER_ERROR,
    },
    summary="Create a new company",
)
async def create_company(
    payload: CompanyCreate,
    response: Response,
    provider: ConnectionProvider = Depends(get_connection_provider),
) -> MessageResponse:
    outcome = await company_service.create_company(provider, payload)
    response.status_code = outcome.status_code
    return MessageResponse(message=outcome.message)


@router.patch(
    "/company/{companyId}",
    response_model=MessageResponse,
    responses={
        200: {"description": "Company updated successfully"},
        400: _BAD_REQUEST,
        404: {"description": "Company not found", "model": ErrorResponse},
        500: _SERVER_ERROR,
    },
    summary="Update some fields of an existing company",
    description="Supply at least one of companyName or companyCity; only those columns change.",
)
async def update_company(
    companyId: CompanyIdField,  # noqa: N803
    changes: CompanyChanges,
    response: Response,
    provider: ConnectionProvider = Depends(get_connection_provider),
) -> MessageResponse:
    outcome = await company_service.update_company(provider, companyId, changes)
    response.status_code = outcome.status_code
    return MessageResponse(message=outcome.message)


@router.put(
    "/company/{companyId}",
    response_model=MessageResponse,
    responses={
        200: {"description": "Company updated"},
        201: {"description": "Company added"},
        400: _BAD_REQUEST,
        500: _SERVER_ERROR,
    },
    summary="Create or replace a company",
    description=(
        "Inserts the company when the ID is new (201) or overwrites its name and city "
        "when it already exists (200). Omitted fields are stored as null."
    ),
)
async def upsert_company(
    companyId: CompanyIdField,  # noqa: N803
    changes: CompanyChanges,
    response: Response,
    provider: ConnectionProvider = Depends(get_connection_provider),
) -> MessageResponse:
    outcome = await company_service.upsert_company(provider, companyId, changes)
    response.status_code = outcome.status_code
    return MessageResponse(message=outcome.message)
