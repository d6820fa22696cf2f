# qa_service/services/items.py

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import NotFoundError
from ..models import Item, User
from ..schemas import ItemCreate, ItemUpdate


async def list_items(session: AsyncSession) -> List[Item]:
    result = await session.execute(select(Item).order_by(Item.id.asc()))
    return list(result.scalars().all())


async def get_item(session: AsyncSession, item_id: int) -> Item:
    item = await session.get(Item, item_id)
    if item is None:
        raise NotFoundError("Item not found")
    return item


async def _resolve_user(session: AsyncSession, user_id: Optional[int]) -> Optional[User]:
    if user_id is None:
        return None
    user = await session.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


async def create_item(session: AsyncSession, data: ItemCreate) -> Item:
    item = Item(
        title=data.title,
        description=data.description,
        category=data.category,
        price=data.price,
        user=await _resolve_user(session, data.user),
    )
    session.add(item)
    await session.commit()
    return item


async def update_item(session: AsyncSession, item_id: int, data: ItemUpdate) -> Item:
    item = await get_item(session, item_id)
    changes = data.model_dump(exclude_unset=True)
    if "user" in changes:
        item.user = await _resolve_user(session, changes.pop("user"))
    for field, value in changes.items():
        if field == "title" and value is None:
            continue
        setattr(item, field, value)
    await session.commit()
    return item


async def delete_item(session: AsyncSession, item_id: int) -> None:
    item = await get_item(session, item_id)
    await session.delete(item)
    await session.commit()
