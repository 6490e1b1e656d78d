from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from items_api.core.errors import NotFoundError, StorageError
from items_api.db.pool import ConnectionPool
from items_api.models.item import items_table
from items_api.schemas.item import Item, ItemCreate, ItemUpdate


LOG = logging.getLogger(__name__)

_columns = (items_table.c.id, items_table.c.name, items_table.c.description)

# OSError covers driver-level socket failures not wrapped by SQLAlchemy
_STORAGE_ERRORS = (SQLAlchemyError, OSError)


class CRUDItem:
    """CRUD helper for the items table.

    Each call borrows one pooled connection and issues a single statement.
    Driver and pool failures surface as StorageError.
    """

    async def list(self, pool: ConnectionPool) -> Sequence[Item]:
        stmt = select(*_columns).order_by(items_table.c.id.desc())
        try:
            async with pool.connect() as conn:
                res = await conn.execute(stmt)
                rows = res.mappings().all()
        except _STORAGE_ERRORS as exc:
            LOG.exception("list items failed err=%s", exc)
            raise StorageError() from exc
        return [Item.model_validate(dict(row)) for row in rows]

    async def create(self, pool: ConnectionPool, *, obj_in: ItemCreate) -> Item:
        stmt = insert(items_table).values(name=obj_in.name, description=obj_in.description).returning(*_columns)
        try:
            async with pool.connect() as conn:
                res = await conn.execute(stmt)
                row = res.mappings().one()
        except _STORAGE_ERRORS as exc:
            LOG.exception("create item failed err=%s", exc)
            raise StorageError() from exc
        LOG.info("item created id=%s", row["id"])
        return Item.model_validate(dict(row))

    async def update(self, pool: ConnectionPool, *, item_id: int, obj_in: ItemUpdate) -> Item:
        stmt = (
            update(items_table)
            .where(items_table.c.id == item_id)
            .values(name=obj_in.name, description=obj_in.description)
            .returning(*_columns)
        )
        try:
            async with pool.connect() as conn:
                res = await conn.execute(stmt)
                # RETURNING yields one row per affected row; none means no match
                row = res.mappings().first()
        except _STORAGE_ERRORS as exc:
            LOG.exception("update item failed id=%s err=%s", item_id, exc)
            raise StorageError() from exc
        if row is None:
            raise NotFoundError("Item not found")
        LOG.info("item updated id=%s", item_id)
        return Item.model_validate(dict(row))

    async def remove(self, pool: ConnectionPool, *, item_id: int) -> None:
        stmt = delete(items_table).where(items_table.c.id == item_id)
        try:
            async with pool.connect() as conn:
                res = await conn.execute(stmt)
                affected = res.rowcount
        except _STORAGE_ERRORS as exc:
            LOG.exception("delete item failed id=%s err=%s", item_id, exc)
            raise StorageError() from exc
        if affected == 0:
            raise NotFoundError("Item not found")
        LOG.info("item deleted id=%s", item_id)


crud_item = CRUDItem()
