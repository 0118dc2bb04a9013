"""
CourseDesk Backend — Record Service Base
==========================================

What:  The CRUD workflow shared by every record type: list, get, create,
       update (partial merge) and delete.
Why:   Courses and students differ only in model, ordering, unique field and
       a few defaults. One implementation keeps the two route sets identical
       in behavior.
How:   Subclasses set the class attributes below and may override
       `_build()` to fill defaults before insert.

Error Handling Strategy:
    IntegrityError on write        → ConflictError (unique field taken)
    missing id on get / update     → NotFoundError
    any other SQLAlchemyError      → DatabaseError (details logged, not returned)

Every write commits before the method returns, so a response is only built
for a change that is already durable. A failed commit surfaces as an error
on the same request.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from coursedesk.exceptions import ConflictError, DatabaseError, NotFoundError
from coursedesk.models.columns import utcnow

logger = logging.getLogger(__name__)

ResponseT = TypeVar("ResponseT", bound=BaseModel)


def parse_record_id(record_id: str) -> Optional[uuid.UUID]:
    """UUID for a path id, or None when it cannot name any record."""
    try:
        return uuid.UUID(str(record_id))
    except ValueError:
        return None


class RecordService(ABC, Generic[ResponseT]):
    """
    Generic CRUD operations over one ORM model.

    Class attributes (set by subclasses):
        model:            SQLAlchemy model class
        response_schema:  Pydantic model returned to routes
        resource:         Human name used in error messages ("course")
        unique_field:     Attribute guarded by a unique index
    """

    model: ClassVar[Type[Any]]
    response_schema: ClassVar[Type[BaseModel]]
    resource: ClassVar[str]
    unique_field: ClassVar[str]

    @abstractmethod
    def _ordering(self):
        """ORDER BY clauses for list()."""

    def _build(self, data: BaseModel) -> Any:
        return self.model(**data.model_dump())

    def _to_response(self, record: Any) -> ResponseT:
        return self.response_schema.model_validate(record)

    async def list(self, db: AsyncSession) -> List[ResponseT]:
        try:
            result = await db.execute(select(self.model).order_by(*self._ordering()))
            records = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing %ss: %s", self.resource, e, exc_info=True)
            raise DatabaseError(
                message=f"Could not retrieve {self.resource}s. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return [self._to_response(record) for record in records]

    async def get(self, db: AsyncSession, record_id: str) -> ResponseT:
        record = await self._load(db, record_id)
        return self._to_response(record)

    async def create(self, db: AsyncSession, data: BaseModel) -> ResponseT:
        record = self._build(data)
        db.add(record)
        await self._save(db, getattr(record, self.unique_field))
        logger.info("Created %s %s", self.resource, record.id)
        return self._to_response(record)

    async def update(self, db: AsyncSession, record_id: str, data: BaseModel) -> ResponseT:
        """
        Merge the fields present in `data` into the stored record.

        Fields the client did not send keep their stored values.
        """
        record = await self._load(db, record_id)
        changes = data.model_dump(exclude_unset=True)
        for field, value in changes.items():
            setattr(record, field, value)
        record.updated_at = utcnow()

        await self._save(db, changes.get(self.unique_field))
        logger.info("Updated %s %s (%s)", self.resource, record.id, ", ".join(changes) or "no fields")
        return self._to_response(record)

    async def delete(self, db: AsyncSession, record_id: str) -> None:
        """
        Delete by id. A missing or malformed id is not an error.
        """
        uid = parse_record_id(record_id)
        if uid is None:
            return
        try:
            result = await db.execute(delete(self.model).where(self.model.id == uid))
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error deleting %s %s: %s", self.resource, uid, e)
            raise DatabaseError(
                message=f"Could not delete the {self.resource}. Please try again.",
                context={"resource_id": str(uid)},
            )
        if result.rowcount:
            logger.info("Deleted %s %s", self.resource, uid)
        else:
            logger.debug("Delete of %s %s matched nothing", self.resource, uid)

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _load(self, db: AsyncSession, record_id: str) -> Any:
        uid = parse_record_id(record_id)
        if uid is None:
            raise NotFoundError(resource=self.resource, resource_id=str(record_id))
        try:
            record = await db.get(self.model, uid)
        except SQLAlchemyError as e:
            logger.error("Database error fetching %s %s: %s", self.resource, uid, e)
            raise DatabaseError(
                message=f"Could not retrieve the {self.resource}. Please try again.",
                context={"resource_id": str(uid)},
            )
        if record is None:
            raise NotFoundError(resource=self.resource, resource_id=str(record_id))
        return record

    async def _save(self, db: AsyncSession, unique_value: Any) -> None:
        try:
            await db.flush()
            await db.commit()
        except IntegrityError as e:
            logger.warning(
                "Unique constraint violated for %s %s=%r: %s",
                self.resource, self.unique_field, unique_value, e.orig,
            )
            raise ConflictError(
                resource=self.resource,
                field=self.unique_field,
                value=unique_value,
            )
        except SQLAlchemyError as e:
            logger.error("Database error writing %s: %s", self.resource, e, exc_info=True)
            raise DatabaseError(
                message=f"Could not save the {self.resource}. Please try again.",
                context={"error_type": type(e).__name__},
            )
