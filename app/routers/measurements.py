# routers/measurements.py
from typing import Annotated, List

from fastapi import Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_session
from app.models.user import User
from app.schemas import ErrorResponse
from app.schemas.measurement import (MeasurementRequest, MeasurementResponse,
                                     MeasurementUpdateRequest)
from app.services.measurement import MeasurementService
from app.utils.dependencies import get_current_user, get_measurement_service
from app.utils.router import get_router

# nested under /clients/{client_id} and standalone under /measurements
router = get_router("", tag="measurements")

ERRORS = {403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}


@router.get(
    "/clients/{client_id}/measurements",
    response_model=List[MeasurementResponse],
    summary="List client measurements",
    responses=ERRORS,
)
async def get_client_measurements(
    client_id: int,
    service: Annotated[MeasurementService, Depends(get_measurement_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Newest measurement date first."""
    return await service.get_measurements(db, client_id, current_user.user_id)


@router.get(
    "/clients/{client_id}/measurements/latest",
    response_model=MeasurementResponse,
    summary="Latest client measurement",
    responses=ERRORS,
)
async def get_latest_measurement(
    client_id: int,
    service: Annotated[MeasurementService, Depends(get_measurement_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return await service.get_latest_measurement(db, client_id, current_user.user_id)


@router.post(
    "/clients/{client_id}/measurements",
    response_model=MeasurementResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add measurement",
    responses={400: {"model": ErrorResponse}, **ERRORS},
)
async def create_measurement(
    client_id: int,
    data: MeasurementRequest,
    service: Annotated[MeasurementService, Depends(get_measurement_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """
    - **date**: defaults to now
    - **weight**, **height**: kg / cm
    - circumferences (**neck** ... **calf**): cm
    """
    return await service.create_measurement(db, client_id, data, current_user.user_id)


@router.get(
    "/measurements/{measurement_id}",
    response_model=MeasurementResponse,
    summary="Get measurement",
    responses=ERRORS,
)
async def get_measurement(
    measurement_id: int,
    service: Annotated[MeasurementService, Depends(get_measurement_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return await service.get_measurement(db, measurement_id, current_user.user_id)


@router.put(
    "/measurements/{measurement_id}",
    response_model=MeasurementResponse,
    summary="Update measurement",
    responses=ERRORS,
)
async def update_measurement(
    measurement_id: int,
    data: MeasurementUpdateRequest,
    service: Annotated[MeasurementService, Depends(get_measurement_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return await service.update_measurement(db, measurement_id, data, current_user.user_id)


@router.delete(
    "/measurements/{measurement_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete measurement",
    responses=ERRORS,
)
async def delete_measurement(
    measurement_id: int,
    service: Annotated[MeasurementService, Depends(get_measurement_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    await service.delete_measurement(db, measurement_id, current_user.user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
