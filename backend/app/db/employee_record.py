"""ORM mapping for the employees table."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.models.employee import DEFAULT_DATE_OF_BIRTH


class EmployeeRecord(Base):
    __tablename__ = "employees"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    date_of_birth: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=DEFAULT_DATE_OF_BIRTH,
    )
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # Bumped by SQLAlchemy on every UPDATE; a stale row count raises StaleDataError
    row_version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    __mapper_args__ = {"version_id_col": row_version}

    def __repr__(self) -> str:
        return f"<EmployeeRecord id={self.id} version={self.row_version}>"
