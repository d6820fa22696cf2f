# qa_service/routers/users.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_session
from ..schemas import EmptyEnvelope, Envelope, ListEnvelope, UserCreate, UserResponse, UserUpdate
from ..services import users as users_service
from .params import ResourceId

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=ListEnvelope[UserResponse])
async def list_users(session: AsyncSession = Depends(get_session)):
    users = await users_service.list_users(session)
    return {"success": True, "count": len(users), "data": users}


@router.get("/{user_id}", response_model=Envelope[UserResponse])
async def get_user(user_id: ResourceId, session: AsyncSession = Depends(get_session)):
    user = await users_service.get_user_or_404(session, user_id)
    return {"success": True, "data": user}


@router.post("", response_model=Envelope[UserResponse], status_code=status.HTTP_201_CREATED)
async def create_user(payload: UserCreate, session: AsyncSession = Depends(get_session)):
    user = await users_service.add_user(session, payload)
    return {"success": True, "data": user}


@router.put("/{user_id}", response_model=Envelope[UserResponse])
async def update_user(user_id: ResourceId, payload: UserUpdate, session: AsyncSession = Depends(get_session)):
    user = await users_service.update_user(session, user_id, payload)
    return {"success": True, "data": user}


@router.delete("/{user_id}", response_model=EmptyEnvelope)
async def delete_user(user_id: ResourceId, session: AsyncSession = Depends(get_session)):
    await users_service.delete_user(session, user_id)
    return EmptyEnvelope()
