"""Relational employee store backed by an async SQLAlchemy engine."""

from __future__ import annotations

import logging

from sqlalchemy import delete, func, select, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm.exc import StaleDataError

from app.core.config import Settings
from app.db.base import Base
from app.db.employee_record import EmployeeRecord
from app.models.employee import Employee, EmployeeForm
from app.services.property_helper import copy_properties

logger = logging.getLogger(__name__)

# Never copied from a submitted form onto a row
_STORE_OWNED = ("id", "row_version")


class EmployeeNotFoundError(Exception):
    def __init__(self, employee_id: int) -> None:
        super().__init__(f"Employee {employee_id} not found")
        self.employee_id = employee_id


class EmployeeConflictError(Exception):
    def __init__(self, employee_id: int, message: str | None = None) -> None:
        super().__init__(message or f"Employee {employee_id} was modified by another request")
        self.employee_id = employee_id


class EmployeeService:
    def __init__(self) -> None:
        self.engine: AsyncEngine | None = None
        self.session_factory: async_sessionmaker[AsyncSession] | None = None
        self.initialized: bool = False

    async def initialize(self, settings: Settings) -> None:
        if self.initialized:
            return

        self.engine = create_async_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
        self.session_factory = async_sessionmaker(self.engine, expire_on_commit=False)

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        self.initialized = True
        logger.info("EmployeeService initialized (url=%s)", self.engine.url.render_as_string(hide_password=True))

    async def close(self) -> None:
        if self.engine:
            await self.engine.dispose()
            self.engine = None
            self.session_factory = None
            self.initialized = False

    def _session(self) -> AsyncSession:
        if not self.session_factory:
            raise RuntimeError("EmployeeService is not initialized")
        return self.session_factory()

    async def list_employees(self) -> list[Employee]:
        async with self._session() as session:
            result = await session.scalars(select(EmployeeRecord).order_by(EmployeeRecord.id))
            return [Employee.model_validate(row) for row in result]

    async def get_employee(self, employee_id: int) -> Employee | None:
        async with self._session() as session:
            row = await session.get(EmployeeRecord, employee_id)
            return Employee.model_validate(row) if row else None

    async def get_employee_form(self, employee_id: int) -> EmployeeForm | None:
        async with self._session() as session:
            row = await session.get(EmployeeRecord, employee_id)
            return EmployeeForm.model_validate(row) if row else None

    async def employee_exists(self, employee_id: int) -> bool:
        async with self._session() as session:
            count = await session.scalar(
                select(func.count()).select_from(EmployeeRecord).where(EmployeeRecord.id == employee_id)
            )
            return bool(count)

    async def create_employee(self, employee: Employee) -> Employee:
        row = EmployeeRecord()
        copy_properties(employee, row, exclude=_STORE_OWNED)

        async with self._session() as session:
            session.add(row)
            await session.commit()

        logger.info("Created employee %s", row.id, extra={"employee_id": row.id})
        return Employee.model_validate(row)

    async def update_employee(self, employee_id: int, form: EmployeeForm) -> Employee:
        async with self._session() as session:
            row = await session.get(EmployeeRecord, employee_id)
            if row is None:
                raise EmployeeNotFoundError(employee_id)

            if form.row_version is not None and form.row_version != row.row_version:
                logger.warning(
                    "Stale edit of employee %s (submitted version %s, stored %s)",
                    employee_id,
                    form.row_version,
                    row.row_version,
                    extra={"employee_id": employee_id},
                )
                raise EmployeeConflictError(employee_id)

            copy_properties(form, row, exclude=_STORE_OWNED)
            try:
                await session.commit()
            except StaleDataError as e:
                await session.rollback()
                logger.warning("Concurrent write on employee %s: %s", employee_id, e)
                raise EmployeeConflictError(employee_id) from e

        logger.info("Updated employee %s", employee_id, extra={"employee_id": employee_id})
        return Employee.model_validate(row)

    async def delete_employee(self, employee_id: int) -> bool:
        async with self._session() as session:
            result = await session.execute(delete(EmployeeRecord).where(EmployeeRecord.id == employee_id))
            await session.commit()

        deleted = bool(result.rowcount)
        if deleted:
            logger.info("Deleted employee %s", employee_id, extra={"employee_id": employee_id})
        return deleted

    async def check_connection(self) -> bool:
        if not self.engine:
            return False
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception:
            logger.exception("Database connection check failed")
            return False


employee_service = EmployeeService()
