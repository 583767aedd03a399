"""Dining table service."""
import logging
from typing import List

from dining.services.ordering.errors import TableNotFoundError
from dining.services.ordering.models import MAX_COUNT, Clock, require_count, utc_now
from dining.services.persistence.base import TableOrderStore, TableStore
from dining.services.tables.models import DiningTable, TableStatus

logger = logging.getLogger(__name__)


class TableService:
    """Service for registering tables and reporting whether they are taken."""

    def __init__(
        self,
        table_store: TableStore,
        order_store: TableOrderStore,
        clock: Clock = utc_now,
    ):
        self.table_store = table_store
        self.order_store = order_store
        self.clock = clock

    async def create_table(self, number: int) -> TableStatus:
        """
        Register a new table.

        Raises:
            ValidationError: If number is not a positive integer in range.
            TableAlreadyExistsError: If the table is already registered.
        """
        require_count("table number", number)
        table = await self.table_store.add_table(DiningTable(number=number, created=self.clock()))
        logger.info(f"[TABLES] Created table {number}")
        return await self._status(table)

    async def get_table(self, number: int) -> TableStatus:
        """Return a table and its open order.

        Raises:
            TableNotFoundError: If the table does not exist.
        """
        if not 0 < number <= MAX_COUNT:
            raise TableNotFoundError(number)
        table = await self.table_store.get_table(number)
        if table is None:
            raise TableNotFoundError(number)
        return await self._status(table)

    async def list_tables(self) -> List[TableStatus]:
        tables = await self.table_store.list_tables()
        return [await self._status(table) for table in tables]

    async def _status(self, table: DiningTable) -> TableStatus:
        open_order = await self.order_store.find_open_order_for_table(table.number)
        return TableStatus(
            number=table.number,
            taken=open_order is not None,
            table_order_id=open_order.id if open_order else None,
        )
