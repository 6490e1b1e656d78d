from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from items_api.db.base import Base


class Item(Base):
    """SQLAlchemy model for an item.

    The table is owned by the database; this mapping only describes its columns
    so statements can be built with bound parameters.
    """

    __tablename__ = "items"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(Text(), nullable=False)
    description: Mapped[str | None] = mapped_column(Text())


items_table = Item.__table__
