"""Dining table persistence service."""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from dining.db.models import DiningTableRecord
from dining.services.ordering.errors import TableAlreadyExistsError
from dining.services.persistence.base import TableStore
from dining.services.persistence.orders import as_utc
from dining.services.tables.models import DiningTable


class SqlTableStore(TableStore):
    """Dining table store backed by SQLAlchemy."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_table(self, number: int) -> Optional[DiningTable]:
        record = await self.db.get(DiningTableRecord, number)
        return self._to_domain(record) if record else None

    async def list_tables(self) -> List[DiningTable]:
        result = await self.db.execute(
            select(DiningTableRecord).order_by(DiningTableRecord.number)
        )
        return [self._to_domain(record) for record in result.scalars().all()]

    async def add_table(self, table: DiningTable) -> DiningTable:
        if await self.db.get(DiningTableRecord, table.number) is not None:
            raise TableAlreadyExistsError(table.number)
        self.db.add(DiningTableRecord(number=table.number, created=as_utc(table.created)))
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise TableAlreadyExistsError(table.number)
        return table

    @staticmethod
    def _to_domain(record: DiningTableRecord) -> DiningTable:
        return DiningTable(number=record.number, created=as_utc(record.created))
