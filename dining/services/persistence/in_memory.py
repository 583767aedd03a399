"""In-memory stores.

Orders and tables are copied in and out so callers never share state with
the store until they save.
"""
from typing import Dict, List, Optional
from uuid import UUID

from dining.services.ordering.errors import TableAlreadyExistsError, TableAlreadyTakenError
from dining.services.ordering.models import TableOrder
from dining.services.persistence.base import TableOrderStore, TableStore
from dining.services.tables.models import DiningTable


class InMemoryTableOrderStore(TableOrderStore):
    """Table order store backed by a dict."""

    def __init__(self):
        self._orders: Dict[UUID, TableOrder] = {}

    async def find_by_id(self, order_id: UUID) -> Optional[TableOrder]:
        order = self._orders.get(order_id)
        return order.model_copy(deep=True) if order else None

    async def find_open_order_for_table(self, table_number: int) -> Optional[TableOrder]:
        for order in self._orders.values():
            if order.table_number == table_number and not order.is_billed:
                return order.model_copy(deep=True)
        return None

    async def list_orders(self) -> List[TableOrder]:
        orders = sorted(self._orders.values(), key=lambda o: o.opened, reverse=True)
        return [order.model_copy(deep=True) for order in orders]

    async def save(self, order: TableOrder) -> TableOrder:
        if order.id not in self._orders and not order.is_billed:
            open_order = await self.find_open_order_for_table(order.table_number)
            if open_order is not None:
                raise TableAlreadyTakenError(order.table_number, open_order.id)
        self._orders[order.id] = order.model_copy(deep=True)
        return order


class InMemoryTableStore(TableStore):
    """Dining table store backed by a dict."""

    def __init__(self):
        self._tables: Dict[int, DiningTable] = {}

    async def get_table(self, number: int) -> Optional[DiningTable]:
        table = self._tables.get(number)
        return table.model_copy() if table else None

    async def list_tables(self) -> List[DiningTable]:
        return [self._tables[number].model_copy() for number in sorted(self._tables)]

    async def add_table(self, table: DiningTable) -> DiningTable:
        if table.number in self._tables:
            raise TableAlreadyExistsError(table.number)
        self._tables[table.number] = table.model_copy()
        return table
