# qa_service/routers/categories.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..auth import get_current_user
from ..database import get_session
from ..models import User
from ..schemas import CategoryCreate, CategoryResponse, Envelope, ListEnvelope
from ..services import categories as categories_service

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=ListEnvelope[CategoryResponse])
async def list_categories(session: AsyncSession = Depends(get_session)):
    categories = await categories_service.list_categories(session)
    return {"success": True, "count": len(categories), "data": categories}


@router.get("/{key}", response_model=Envelope[CategoryResponse])
async def get_category(key: str, session: AsyncSession = Depends(get_session)):
    """Fetch a category by numeric id or slug."""
    category = await categories_service.get_category(session, key)
    return {"success": True, "data": category}


@router.post("", response_model=Envelope[CategoryResponse], status_code=status.HTTP_201_CREATED)
async def create_category(
    payload: CategoryCreate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session),
):
    category = await categories_service.create_category(session, payload)
    return {"success": True, "data": category}
