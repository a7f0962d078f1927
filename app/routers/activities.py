# routers/activities.py
from typing import Annotated, Optional

from fastapi import Body, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_session
from app.models.user import User
from app.schemas import ErrorResponse
from app.schemas.activity import (ActivityDeleteRequest,
                                  ActivityDeleteResponse,
                                  ActivityPageResponse)
from app.services.activity import ActivityService
from app.utils.dependencies import get_activity_service, get_current_user
from app.utils.router import get_router

router = get_router("activities")


@router.get("", response_model=ActivityPageResponse, summary="Activity feed")
async def get_activities(
    service: Annotated[ActivityService, Depends(get_activity_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
    search: Optional[str] = None,
    type: Optional[str] = None,
):
    """
    - **search**: case-insensitive match in the description
    - **type**: client | measurement | diet_plan | appointment | telegram | all
    """
    return await service.get_activities(
        db, current_user.user_id, page=page, limit=limit, type=type, search=search
    )


@router.delete(
    "",
    response_model=ActivityDeleteResponse,
    summary="Delete activities",
    responses={400: {"model": ActivityDeleteResponse}, 401: {"model": ErrorResponse}},
)
async def delete_activities(
    service: Annotated[ActivityService, Depends(get_activity_service)],
    db: Annotated[AsyncSession, Depends(get_session)],
    current_user: Annotated[User, Depends(get_current_user)],
    request: Annotated[Optional[ActivityDeleteRequest], Body()] = None,
):
    """
    **delete_all** removes every activity matching **type**/**search**;
    otherwise only the activities listed in **ids** are removed.
    """
    try:
        return await service.delete_activities(
            db, current_user.user_id, request or ActivityDeleteRequest()
        )
    except HTTPException as e:
        if e.status_code != 400:
            raise
        return JSONResponse(status_code=400, content={"success": False, "message": e.detail})
