from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for table definitions."""
