from typing import Sequence

from fastapi import APIRouter, Depends, status

from items_api.api.deps import get_pool
from items_api.crud.crud_item import crud_item
from items_api.db.pool import ConnectionPool
from items_api.schemas.item import DeleteResult, Item, ItemCreate, ItemUpdate

router = APIRouter()


@router.get("", response_model=list[Item])
async def read_items(pool: ConnectionPool = Depends(get_pool)) -> Sequence[Item]:
    """Retrieve all items, newest first."""
    return await crud_item.list(pool)


@router.post("", response_model=Item, status_code=status.HTTP_201_CREATED)
async def create_item(*, pool: ConnectionPool = Depends(get_pool), item_in: ItemCreate) -> Item:
    """Create new item."""
    return await crud_item.create(pool, obj_in=item_in)


@router.put("/{item_id}", response_model=Item)
async def update_item(
    *,
    pool: ConnectionPool = Depends(get_pool),
    item_id: int,
    item_in: ItemUpdate,
) -> Item:
    """Replace an item's name and description."""
    return await crud_item.update(pool, item_id=item_id, obj_in=item_in)


@router.delete("/{item_id}", response_model=DeleteResult)
async def delete_item(*, pool: ConnectionPool = Depends(get_pool), item_id: int) -> DeleteResult:
    """Delete an item."""
    await crud_item.remove(pool, item_id=item_id)
    return DeleteResult(success=True)
