"""
Declarative base shared by every ORM model.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    # Models use plain ``attr: T = Column(...)`` annotations, not Mapped[T]
    __allow_unmapped__ = True
