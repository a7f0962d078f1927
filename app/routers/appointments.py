# routers/appointments.py
from typing import Annotated, List

from fastapi import Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_session
from app.models.user import User
from app.schemas import ErrorResponse
from app.schemas.appointment import (AppointmentRequest, AppointmentResponse,
                                     AppointmentUpdateRequest)
from app.services.appointment import AppointmentService
from app.utils.dependencies import get_appointment_service, get_current_user
from app.utils.router import get_router

router = get_router("", tag="appointments")

ERRORS = {403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}


@router.get("/appointments", response_model=List[AppointmentResponse], summary="List appointments")
async def get_appointments(
    service: Annotated[AppointmentService, Depends(get_appointment_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Ascending by date."""
    return await service.get_appointments(db, current_user.user_id)


@router.get("/appointments/today", response_model=List[AppointmentResponse], summary="Today's appointments")
async def get_today_appointments(
    service: Annotated[AppointmentService, Depends(get_appointment_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return await service.get_today_appointments(db, current_user.user_id)


@router.get(
    "/appointments/upcoming",
    response_model=List[AppointmentResponse],
    summary="Upcoming scheduled appointments",
)
async def get_upcoming_appointments(
    service: Annotated[AppointmentService, Depends(get_appointment_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return await service.get_upcoming_appointments(db, current_user.user_id)


@router.get(
    "/clients/{client_id}/appointments",
    response_model=List[AppointmentResponse],
    summary="List client appointments",
    responses=ERRORS,
)
async def get_client_appointments(
    client_id: int,
    service: Annotated[AppointmentService, Depends(get_appointment_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return await service.get_client_appointments(db, client_id, current_user.user_id)


@router.post(
    "/appointments",
    response_model=AppointmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create appointment",
    responses={400: {"model": ErrorResponse}, **ERRORS},
)
async def create_appointment(
    data: AppointmentRequest,
    service: Annotated[AppointmentService, Depends(get_appointment_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    """
    - **client_id**: one of your clients
    - **duration**: minutes, at least 5
    - **type**: online | in-person
    """
    return await service.create_appointment(db, data, current_user.user_id)


@router.get(
    "/appointments/{appointment_id}",
    response_model=AppointmentResponse,
    summary="Get appointment",
    responses=ERRORS,
)
async def get_appointment(
    appointment_id: int,
    service: Annotated[AppointmentService, Depends(get_appointment_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return await service.get_appointment(db, appointment_id, current_user.user_id)


@router.put(
    "/appointments/{appointment_id}",
    response_model=AppointmentResponse,
    summary="Update appointment",
    responses=ERRORS,
)
async def update_appointment(
    appointment_id: int,
    data: AppointmentUpdateRequest,
    service: Annotated[AppointmentService, Depends(get_appointment_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    return await service.update_appointment(db, appointment_id, data, current_user.user_id)


@router.delete(
    "/appointments/{appointment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete appointment",
    responses=ERRORS,
)
async def delete_appointment(
    appointment_id: int,
    service: Annotated[AppointmentService, Depends(get_appointment_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
):
    await service.delete_appointment(db, appointment_id, current_user.user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
