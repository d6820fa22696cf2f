# qa_service/routers/items.py

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_session
from ..schemas import EmptyEnvelope, Envelope, ItemCreate, ItemResponse, ItemUpdate, ListEnvelope
from ..services import items as items_service
from .params import ResourceId

router = APIRouter(prefix="/items", tags=["items"])


@router.get("", response_model=ListEnvelope[ItemResponse])
async def list_items(session: AsyncSession = Depends(get_session)):
    items = await items_service.list_items(session)
    return {"success": True, "count": len(items), "data": items}


@router.get("/{item_id}", response_model=Envelope[ItemResponse])
async def get_item(item_id: ResourceId, session: AsyncSession = Depends(get_session)):
    item = await items_service.get_item(session, item_id)
    return {"success": True, "data": item}


@router.post("", response_model=Envelope[ItemResponse], status_code=status.HTTP_201_CREATED)
async def create_item(payload: ItemCreate, session: AsyncSession = Depends(get_session)):
    item = await items_service.create_item(session, payload)
    return {"success": True, "data": item}


@router.put("/{item_id}", response_model=Envelope[ItemResponse])
async def update_item(item_id: ResourceId, payload: ItemUpdate, session: AsyncSession = Depends(get_session)):
    item = await items_service.update_item(session, item_id, payload)
    return {"success": True, "data": item}


@router.delete("/{item_id}", response_model=EmptyEnvelope)
async def delete_item(item_id: ResourceId, session: AsyncSession = Depends(get_session)):
    await items_service.delete_item(session, item_id)
    return EmptyEnvelope()
