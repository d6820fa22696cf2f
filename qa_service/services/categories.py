# qa_service/services/categories.py

from typing import List

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import NotFoundError, ValidationError
from ..logging_config import get_logger
from ..models import MAX_ID, Category, make_category, slugify
from ..schemas import CategoryCreate

logger = get_logger(__name__)


async def list_categories(session: AsyncSession) -> List[Category]:
    result = await session.execute(select(Category).order_by(Category.name.asc()))
    return list(result.scalars().all())


async def get_category(session: AsyncSession, key: str) -> Category:
    """Look a category up by numeric id or by slug."""
    if key.isdigit():
        category = await session.get(Category, int(key)) if int(key) <= MAX_ID else None
    else:
        result = await session.execute(select(Category).where(Category.slug == key.lower()))
        category = result.scalar_one_or_none()
    if category is None:
        raise NotFoundError("Category not found")
    return category


async def create_category(session: AsyncSession, data: CategoryCreate) -> Category:
    slug = slugify(data.name)
    clash = await session.execute(
        select(Category.id).where(or_(Category.name == data.name, Category.slug == slug))
    )
    if clash.first() is not None:
        raise ValidationError("Category already exists")

    category = make_category(data.name, data.description, color=data.color, icon=data.icon)
    session.add(category)
    await session.commit()
    logger.info("Created category %r (slug=%s)", category.name, category.slug)
    return category
