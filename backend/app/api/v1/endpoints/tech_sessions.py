"""
Tech Session API
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.core.database import get_db
from app.models.user import User
from app.models.tech_session import SessionCategory, SessionStatus
from app.modules.auth.dependencies import get_current_user, get_current_faculty
from app.schemas.tech_session import (
    TechSessionCreate,
    TechSessionUpdate,
    TechSessionResponse,
    RegistrationResponse,
)
from app.services.tech_session_service import get_tech_session_service

router = APIRouter(prefix="/tech-sessions", tags=["Tech Sessions"])


@router.post("", response_model=TechSessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(
    data: TechSessionCreate,
    current_user: User = Depends(get_current_faculty),
    db: AsyncSession = Depends(get_db)
):
    service = get_tech_session_service(db)
    return await service.create_session(current_user, data.model_dump())


@router.get("", response_model=List[TechSessionResponse])
async def list_sessions(
    session_status: Optional[SessionStatus] = None,
    category: Optional[SessionCategory] = None,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = get_tech_session_service(db)
    return await service.list_sessions(status=session_status, category=category)


@router.get("/{session_id}", response_model=TechSessionResponse)
async def get_session(
    session_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = get_tech_session_service(db)
    return await service.get_session(session_id)


@router.put("/{session_id}", response_model=TechSessionResponse)
async def update_session(
    session_id: str,
    data: TechSessionUpdate,
    current_user: User = Depends(get_current_faculty),
    db: AsyncSession = Depends(get_db)
):
    service = get_tech_session_service(db)
    return await service.update_session(current_user, session_id, data.model_dump(exclude_unset=True))


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    session_id: str,
    current_user: User = Depends(get_current_faculty),
    db: AsyncSession = Depends(get_db)
):
    service = get_tech_session_service(db)
    await service.delete_session(current_user, session_id)


@router.post("/{session_id}/register", response_model=RegistrationResponse, status_code=status.HTTP_201_CREATED)
async def register_for_session(
    session_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = get_tech_session_service(db)
    return await service.register(current_user, session_id)


@router.delete("/{session_id}/register", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_registration(
    session_id: str,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    service = get_tech_session_service(db)
    await service.cancel_registration(current_user, session_id)


@router.get("/{session_id}/registrations", response_model=List[RegistrationResponse])
async def list_registrations(
    session_id: str,
    current_user: User = Depends(get_current_faculty),
    db: AsyncSession = Depends(get_db)
):
    service = get_tech_session_service(db)
    return await service.list_registrations(current_user, session_id)
