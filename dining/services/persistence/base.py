"""Store interfaces for tables and table orders.

Stores return domain models and must be swappable: the services only ever
see these interfaces.
"""
from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from dining.services.ordering.models import TableOrder
from dining.services.tables.models import DiningTable


class TableOrderStore(ABC):
    """Interface for table order persistence."""

    @abstractmethod
    async def find_by_id(self, order_id: UUID) -> Optional[TableOrder]:
        """Return an order by ID, or None if not found."""
        pass

    @abstractmethod
    async def find_open_order_for_table(self, table_number: int) -> Optional[TableOrder]:
        """Return the unbilled order of a table, or None."""
        pass

    @abstractmethod
    async def list_orders(self) -> List[TableOrder]:
        """Return all orders, most recently opened first."""
        pass

    @abstractmethod
    async def save(self, order: TableOrder) -> TableOrder:
        """Insert or update an order with all of its lines.

        Raises:
            TableAlreadyTakenError: If saving a new open order would give its
                table a second open order.
            ConcurrentModificationError: If the order changed since it was read.
        """
        pass


class TableStore(ABC):
    """Interface for dining table persistence."""

    @abstractmethod
    async def get_table(self, number: int) -> Optional[DiningTable]:
        """Return a table by number, or None if not found."""
        pass

    @abstractmethod
    async def list_tables(self) -> List[DiningTable]:
        """Return all tables ordered by number."""
        pass

    @abstractmethod
    async def add_table(self, table: DiningTable) -> DiningTable:
        """Persist a new table.

        Raises:
            TableAlreadyExistsError: If a table with this number exists.
        """
        pass
