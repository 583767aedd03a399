"""Table order service.

Orchestrates the ordering operations against the stores. The state machine
in ``models`` never sees a store; this service loads an order, applies one
transition and saves it back.
"""
import asyncio
import logging
from typing import List, Optional
from uuid import UUID, uuid4
from weakref import WeakValueDictionary

from dining.services.menu.repository import MenuRepository
from dining.services.ordering.errors import (
    OrderNotFoundError,
    TableAlreadyTakenError,
    TableUnavailableError,
)
from dining.services.ordering.models import (
    Clock,
    IdGenerator,
    ItemReference,
    TableOrder,
    utc_now,
)
from dining.services.persistence.base import TableOrderStore, TableStore

logger = logging.getLogger(__name__)

# Module-level locks (shared across requests of this process), one per
# order id or table number. Entries disappear once no coroutine holds them.
_locks: "WeakValueDictionary[str, asyncio.Lock]" = WeakValueDictionary()


def _lock_for(key: str) -> asyncio.Lock:
    lock = _locks.get(key)
    if lock is None:
        lock = asyncio.Lock()
        _locks[key] = lock
    return lock


class TableOrderService:
    """Service for the table order lifecycle."""

    def __init__(
        self,
        order_store: TableOrderStore,
        table_store: TableStore,
        menu_repository: Optional[MenuRepository] = None,
        clock: Clock = utc_now,
        id_generator: IdGenerator = uuid4,
    ):
        self.order_store = order_store
        self.table_store = table_store
        self.menu_repository = menu_repository
        self.clock = clock
        self.id_generator = id_generator

    async def start_ordering(self, table_number: int, customers_count: int) -> TableOrder:
        """
        Open an order for a table.

        Raises:
            ValidationError: If customers_count is not a positive integer.
            TableUnavailableError: If the table does not exist.
            TableAlreadyTakenError: If the table already has an open order.
        """
        order = TableOrder.start(
            table_number,
            customers_count,
            clock=self.clock,
            id_generator=self.id_generator,
        )
        async with _lock_for(f"table:{table_number}"):
            if await self.table_store.get_table(table_number) is None:
                raise TableUnavailableError(table_number)
            open_order = await self.order_store.find_open_order_for_table(table_number)
            if open_order is not None:
                raise TableAlreadyTakenError(table_number, open_order.id)
            await self.order_store.save(order)
        logger.info(
            f"[TABLE ORDERS] Started order {order.id} for table {table_number} "
            f"({customers_count} customers)"
        )
        return order

    async def get_order(self, order_id: UUID) -> TableOrder:
        """Return an order by ID.

        Raises:
            OrderNotFoundError: If the order does not exist.
        """
        order = await self.order_store.find_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    async def list_orders(self) -> List[TableOrder]:
        """Return all orders, most recent first."""
        return await self.order_store.list_orders()

    async def add_item(
        self,
        order_id: UUID,
        short_name: str,
        how_many: int,
        item_id: Optional[str] = None,
    ) -> TableOrder:
        """
        Add an item to an open order.

        Raises:
            OrderNotFoundError: If the order does not exist.
            OrderAlreadyBilledError: If the order is billed.
            ValidationError: If how_many is not a positive integer.
        """
        item = await self._resolve_item(short_name, item_id)
        async with _lock_for(f"order:{order_id}"):
            order = await self.get_order(order_id)
            order.add_item(item, how_many)
            await self.order_store.save(order)
        logger.info(f"[TABLE ORDERS] Added {how_many} x {item.short_name} to order {order_id}")
        return order

    async def send_for_preparation(self, order_id: UUID) -> int:
        """
        Send every item not yet sent to the kitchen.

        Returns:
            Number of individual items newly sent for preparation.
        """
        async with _lock_for(f"order:{order_id}"):
            order = await self.get_order(order_id)
            items_sent = order.send_for_preparation()
            if items_sent:
                await self.order_store.save(order)
        logger.info(f"[TABLE ORDERS] Sent {items_sent} items of order {order_id} for preparation")
        return items_sent

    async def bill(self, order_id: UUID) -> TableOrder:
        """
        Bill an order. Billing twice is rejected.

        Raises:
            OrderNotFoundError: If the order does not exist.
            OrderAlreadyBilledError: If the order is already billed.
        """
        async with _lock_for(f"order:{order_id}"):
            order = await self.get_order(order_id)
            order.bill(clock=self.clock)
            await self.order_store.save(order)
        logger.info(f"[TABLE ORDERS] Billed order {order_id} at {order.billed.isoformat()}")
        return order

    async def _resolve_item(self, short_name: str, item_id: Optional[str]) -> ItemReference:
        if self.menu_repository is None:
            return ItemReference(id=item_id, short_name=short_name)
        return await self.menu_repository.resolve_reference(short_name, item_id)
