"""
Registry API — Function Proxy Route
=====================================

What:  GET /say?keyword=... forwards the validated keyword to the external
       function and relays its JSON body under `response`.
       Upstream failures are answered with 502.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from app.dependencies import get_function_client
from app.schemas.common import ErrorResponse, ValidationErrorResponse
from app.schemas.proxy import FunctionResponse, KeywordField
from app.services.function_client import FunctionClient

router = APIRouter(tags=["Proxy"])


@router.get(
    "/say",
    response_model=FunctionResponse,
    responses={
        400: {"description": "Invalid keyword", "model": ValidationErrorResponse},
        502: {"description": "Upstream function failed", "model": ErrorResponse},
    },
    summary="Call the external function with a keyword",
)
async def say(
    keyword: Annotated[
        KeywordField, Query(description="Text forwarded to the function (1-100 chars)")
    ],
    client: FunctionClient = Depends(get_function_client),
) -> FunctionResponse:
    data = await client.call(keyword)
    return FunctionResponse(response=data)
