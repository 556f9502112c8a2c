"""
db/models/age_class.py

Fixed age-class reference table (ages 0 to 5).
"""

from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base

# Names match the age-class column headers of the municipal CSV export.
AGE_CLASS_NAMES: tuple[str, ...] = (
    "０歳児",
    "１歳児",
    "２歳児",
    "３歳児",
    "４歳児",
    "５歳児",
)


class AgeClassRecord(Base):
    __tablename__ = "age_classes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
