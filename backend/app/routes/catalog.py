"""GET /api/students and GET /api/foods: read-only name listings."""

from fastapi import APIRouter, Depends

from app.database import ConnectionProvider
from app.dependencies import get_connection_provider
from app.schemas.catalog import FoodListResponse, StudentListResponse
from app.schemas.common import ErrorResponse
from app.services.catalog_service import catalog_service

router = APIRouter(prefix="/api", tags=["Catalog"])

_SERVER_ERROR = {500: {"description": "Server error", "model": ErrorResponse}}


@router.get(
    "/students",
    response_model=StudentListResponse,
    responses=_SERVER_ERROR,
    summary="List student names",
)
async def list_students(
    provider: ConnectionProvider = Depends(get_connection_provider),
) -> StudentListResponse:
    return StudentListResponse(studentList=await catalog_service.list_student_names(provider))


@router.get(
    "/foods",
    response_model=FoodListResponse,
    responses=_SERVER_ERROR,
    summary="List food item names",
)
async def list_foods(
    provider: ConnectionProvider = Depends(get_connection_provider),
) -> FoodListResponse:
    return FoodListResponse(foodList=await catalog_service.list_food_names(provider))
