"""Table order persistence service."""
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy import desc, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.attributes import flag_modified
from sqlalchemy.orm.exc import StaleDataError

from dining.db.models import OrderingLineRecord, TableOrderRecord
from dining.services.ordering.errors import ConcurrentModificationError, TableAlreadyTakenError
from dining.services.ordering.models import ItemReference, OrderingLine, TableOrder
from dining.services.persistence.base import TableOrderStore

logger = logging.getLogger(__name__)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Return ``value`` as an aware UTC datetime (naive values are taken as UTC)."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class SqlTableOrderStore(TableOrderStore):
    """Table order store backed by SQLAlchemy."""

    def __init__(self, db: AsyncSession):
        self.db = db
        # Version of each order as it was when this store loaded it
        self._loaded_versions: Dict[UUID, int] = {}

    async def _get_record(self, order_id: UUID) -> Optional[TableOrderRecord]:
        result = await self.db.execute(
            select(TableOrderRecord)
            .where(TableOrderRecord.id == str(order_id))
            .options(selectinload(TableOrderRecord.lines))
        )
        return result.scalar_one_or_none()

    async def find_by_id(self, order_id: UUID) -> Optional[TableOrder]:
        record = await self._get_record(order_id)
        return self._load(record) if record else None

    async def find_open_order_for_table(self, table_number: int) -> Optional[TableOrder]:
        result = await self.db.execute(
            select(TableOrderRecord)
            .where(
                TableOrderRecord.table_number == table_number,
                TableOrderRecord.billed.is_(None),
            )
            .options(selectinload(TableOrderRecord.lines))
        )
        record = result.scalars().first()
        return self._load(record) if record else None

    async def list_orders(self) -> List[TableOrder]:
        result = await self.db.execute(
            select(TableOrderRecord)
            .options(selectinload(TableOrderRecord.lines))
            .order_by(desc(TableOrderRecord.opened))
        )
        return [self._load(record) for record in result.scalars().all()]

    async def save(self, order: TableOrder) -> TableOrder:
        record = await self._get_record(order.id)
        if record is None:
            record = TableOrderRecord(id=str(order.id), table_number=order.table_number)
            self.db.add(record)
        else:
            expected_version = self._loaded_versions.get(order.id)
            if expected_version is not None and record.version != expected_version:
                logger.warning(f"[TABLE ORDERS] Order {order.id} changed since it was loaded")
                raise ConcurrentModificationError(order.id)
            # Always issue an UPDATE so the version check runs even when
            # only lines changed
            flag_modified(record, "customers_count")

        record.customers_count = order.customers_count
        record.opened = as_utc(order.opened)
        record.billed = as_utc(order.billed)
        self._sync_lines(record, order)

        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.warning(f"[TABLE ORDERS] Open order already exists for table {order.table_number}")
            raise TableAlreadyTakenError(order.table_number)
        except StaleDataError:
            await self.db.rollback()
            logger.warning(f"[TABLE ORDERS] Concurrent modification of order {order.id}")
            raise ConcurrentModificationError(order.id)
        self._loaded_versions[order.id] = record.version
        return order

    def _load(self, record: TableOrderRecord) -> TableOrder:
        order = self._to_domain(record)
        self._loaded_versions[order.id] = record.version
        return order

    @staticmethod
    def _sync_lines(record: TableOrderRecord, order: TableOrder) -> None:
        # Lines are never removed from an order, only appended or updated
        existing = {line.position: line for line in record.lines}
        for position, line in enumerate(order.lines):
            line_record = existing.get(position)
            if line_record is None:
                line_record = OrderingLineRecord(position=position)
                record.lines.append(line_record)
            line_record.item_id = line.item.id
            line_record.item_short_name = line.item.short_name
            line_record.how_many = line.how_many
            line_record.sent_for_preparation = line.sent_for_preparation

    @staticmethod
    def _to_domain(record: TableOrderRecord) -> TableOrder:
        return TableOrder(
            id=UUID(record.id),
            table_number=record.table_number,
            customers_count=record.customers_count,
            opened=as_utc(record.opened),
            billed=as_utc(record.billed),
            lines=[
                OrderingLine(
                    item=ItemReference(id=line.item_id, short_name=line.item_short_name),
                    how_many=line.how_many,
                    sent_for_preparation=line.sent_for_preparation,
                )
                for line in record.lines
            ],
        )
