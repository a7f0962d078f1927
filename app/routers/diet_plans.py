# routers/diet_plans.py
from typing import Annotated, List

from fastapi import Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_session
from app.models.user import User
from app.schemas import ErrorResponse, MessageResponse
from app.schemas.diet_plan import (DietPlanRequest, DietPlanResponse,
                                   DietPlanUpdateRequest, GeneratedDietPlan)
from app.services.diet_plan import DietPlanService
from app.utils.dependencies import get_current_user, get_diet_plan_service
from app.utils.router import get_router

router = get_router("", tag="diet-plans")

ERRORS = {403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}


@router.get("/diet-plans", response_model=List[DietPlanResponse], summary="List my diet plans")
async def get_diet_plans(
    service: Annotated[DietPlanService, Depends(get_diet_plan_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Plans created by the logged-in dietitian, newest first."""
    return await service.get_diet_plans(db, current_user.user_id)


@router.post(
    "/diet-plans",
    response_model=DietPlanResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create diet plan",
    responses={400: {"model": ErrorResponse, "description": "client_id missing or invalid data"}, **ERRORS},
)
async def create_diet_plan(
    data: DietPlanRequest,
    service: Annotated[DietPlanService, Depends(get_diet_plan_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """**client_id** is required in the body."""
    return await service.create_diet_plan(db, data, current_user.user_id)


@router.get(
    "/clients/{client_id}/diet-plans",
    response_model=List[DietPlanResponse],
    summary="List client diet plans",
    responses=ERRORS,
)
async def get_client_diet_plans(
    client_id: int,
    service: Annotated[DietPlanService, Depends(get_diet_plan_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return await service.get_client_diet_plans(db, client_id, current_user.user_id)


@router.get(
    "/clients/{client_id}/diet-plans/active",
    response_model=DietPlanResponse,
    summary="Active client diet plan",
    responses=ERRORS,
)
async def get_active_diet_plan(
    client_id: int,
    service: Annotated[DietPlanService, Depends(get_diet_plan_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return await service.get_active_diet_plan(db, client_id, current_user.user_id)


@router.post(
    "/clients/{client_id}/diet-plans",
    response_model=DietPlanResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create client diet plan",
    responses={400: {"model": ErrorResponse}, **ERRORS},
)
async def create_client_diet_plan(
    client_id: int,
    data: DietPlanRequest,
    service: Annotated[DietPlanService, Depends(get_diet_plan_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return await service.create_diet_plan(db, data, current_user.user_id, client_id=client_id)


@router.post(
    "/clients/{client_id}/diet-plans/generate",
    response_model=GeneratedDietPlan,
    summary="Suggest a diet plan",
    description="Calculates a plan from the client profile. Nothing is saved.",
    responses=ERRORS,
)
async def generate_diet_plan(
    client_id: int,
    service: Annotated[DietPlanService, Depends(get_diet_plan_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return await service.generate_diet_plan(db, client_id, current_user.user_id)


@router.get(
    "/diet-plans/{diet_plan_id}",
    response_model=DietPlanResponse,
    summary="Get diet plan",
    responses=ERRORS,
)
async def get_diet_plan(
    diet_plan_id: int,
    service: Annotated[DietPlanService, Depends(get_diet_plan_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return await service.get_diet_plan(db, diet_plan_id, current_user.user_id)


@router.put(
    "/diet-plans/{diet_plan_id}",
    response_model=DietPlanResponse,
    summary="Update diet plan",
    responses=ERRORS,
)
async def update_diet_plan(
    diet_plan_id: int,
    data: DietPlanUpdateRequest,
    service: Annotated[DietPlanService, Depends(get_diet_plan_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return await service.update_diet_plan(db, diet_plan_id, data, current_user.user_id)


@router.delete(
    "/diet-plans/{diet_plan_id}",
    response_model=MessageResponse,
    summary="Delete diet plan",
    responses=ERRORS,
)
async def delete_diet_plan(
    diet_plan_id: int,
    service: Annotated[DietPlanService, Depends(get_diet_plan_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    await service.delete_diet_plan(db, diet_plan_id, current_user.user_id)
    return MessageResponse(message="Diyet planı başarıyla silindi")
