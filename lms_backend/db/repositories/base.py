import datetime
from typing import Any, ClassVar, Generic, Optional, Sequence, TypeVar

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from lms_backend.db.models.database import Base
from lms_backend.libs.field_mask import resolve_columns

ModelT = TypeVar("ModelT", bound=Base)

AUDIT_UPDATE_COLUMNS = ("updated_at", "updated_by")


class AuditedRepository(Generic[ModelT]):
    """Row mover for one soft-deletable table.

    Bound either to the request session or, through ``with_transaction``, to a
    transaction owned by the service. Never begins, commits or rolls back.
    """

    model: ClassVar[type]
    field_mask_columns: ClassVar[tuple[str, ...]]
    mutable_columns: ClassVar[tuple[str, ...]]

    def __init__(self, db: AsyncSession):
        self.db = db

    def with_transaction(self, tx: AsyncSession):
        return type(self)(tx)

    def _live(self, entity_id: str):
        return (self.model.id == entity_id, self.model.deleted_at.is_(None))

    async def create_new(self, entity: ModelT) -> None:
        self.db.add(entity)
        await self.db.flush()

    async def get_by_id(self, entity_id: str) -> Optional[ModelT]:
        stmt = (
            select(self.model)
            .where(*self._live(entity_id))
            .execution_options(populate_existing=True)
        )
        return await self.db.scalar(stmt)

    async def get_by_id_field_mask(
        self, entity_id: str, paths: Optional[Sequence[str]] = None
    ) -> Optional[dict[str, Any]]:
        """Only the resolved columns are present in the returned mapping."""
        columns = resolve_columns(paths, self.field_mask_columns)
        table = self.model.__table__
        stmt = select(*(table.c[name] for name in columns)).where(
            *self._live(entity_id)
        )
        row = (await self.db.execute(stmt)).mappings().first()
        return dict(row) if row is not None else None

    async def update(self, entity: ModelT) -> None:
        values = {
            name: getattr(entity, name)
            for name in (*self.mutable_columns, *AUDIT_UPDATE_COLUMNS)
        }
        await self.db.execute(
            update(self.model).where(self.model.id == entity.id).values(**values)
        )

    async def delete(
        self, entity_id: str, deleted_at: datetime.datetime, deleted_by: str
    ) -> None:
        await self.db.execute(
            update(self.model)
            .where(self.model.id == entity_id)
            .values(deleted_at=deleted_at, deleted_by=deleted_by)
        )
