"""Unit tests for TableOrderService and TableService over in-memory stores."""
import asyncio
from uuid import uuid4

import pytest

from dining.services.ordering.errors import (
    OrderAlreadyBilledError,
    OrderNotFoundError,
    TableAlreadyExistsError,
    TableAlreadyTakenError,
    TableNotFoundError,
    TableUnavailableError,
    ValidationError,
)
from dining.services.ordering.models import MAX_COUNT
from dining.services.ordering.service import TableOrderService


@pytest.fixture
async def table_one(table_service):
    return await table_service.create_table(1)


class TestTableService:
    """Test table registration."""

    @pytest.mark.asyncio
    async def test_create_table(self, table_service):
        table = await table_service.create_table(7)

        assert table.number == 7
        assert table.taken is False
        assert table.table_order_id is None

    @pytest.mark.asyncio
    async def test_create_duplicate_table(self, table_service, table_one):
        with pytest.raises(TableAlreadyExistsError):
            await table_service.create_table(1)

    @pytest.mark.asyncio
    async def test_create_table_rejects_invalid_number(self, table_service):
        with pytest.raises(ValidationError):
            await table_service.create_table(0)

    @pytest.mark.asyncio
    async def test_get_unknown_table(self, table_service):
        with pytest.raises(TableNotFoundError):
            await table_service.get_table(42)

    @pytest.mark.asyncio
    async def test_table_number_above_limit(self, table_service):
        with pytest.raises(ValidationError):
            await table_service.create_table(MAX_COUNT + 1)
        with pytest.raises(TableNotFoundError):
            await table_service.get_table(2**62)

    @pytest.mark.asyncio
    async def test_table_taken_while_order_open(self, table_service, order_service, table_one):
        order = await order_service.start_ordering(1, 4)

        table = await table_service.get_table(1)
        assert table.taken is True
        assert table.table_order_id == order.id

        await order_service.bill(order.id)
        table = await table_service.get_table(1)
        assert table.taken is False

    @pytest.mark.asyncio
    async def test_list_tables_sorted(self, table_service):
        await table_service.create_table(3)
        await table_service.create_table(1)

        tables = await table_service.list_tables()
        assert [table.number for table in tables] == [1, 3]


class TestStartOrdering:
    """Test opening orders through the service."""

    @pytest.mark.asyncio
    async def test_start_ordering(self, order_service, order_store, table_one, clock):
        order = await order_service.start_ordering(1, 4)

        assert order.table_number == 1
        assert order.customers_count == 4
        assert order.opened == clock()
        assert order.billed is None
        assert await order_store.find_by_id(order.id) == order

    @pytest.mark.asyncio
    async def test_second_open_order_conflicts(self, order_service, table_one):
        first = await order_service.start_ordering(1, 4)

        with pytest.raises(TableAlreadyTakenError) as exc_info:
            await order_service.start_ordering(1, 2)
        assert exc_info.value.order_id == first.id

    @pytest.mark.asyncio
    async def test_unknown_table_conflicts(self, order_service):
        with pytest.raises(TableUnavailableError):
            await order_service.start_ordering(99, 2)

    @pytest.mark.asyncio
    async def test_invalid_customers_count_rejected_first(self, order_service):
        with pytest.raises(ValidationError):
            await order_service.start_ordering(99, 0)

    @pytest.mark.asyncio
    async def test_table_reusable_after_billing(self, order_service, table_one):
        first = await order_service.start_ordering(1, 4)
        await order_service.bill(first.id)

        second = await order_service.start_ordering(1, 2)
        assert second.id != first.id

    @pytest.mark.asyncio
    async def test_concurrent_starts_open_one_order(self, order_service, order_store, table_one):
        results = await asyncio.gather(
            order_service.start_ordering(1, 4),
            order_service.start_ordering(1, 3),
            return_exceptions=True,
        )

        errors = [r for r in results if isinstance(r, Exception)]
        assert len(errors) == 1
        assert isinstance(errors[0], TableAlreadyTakenError)
        assert len(await order_store.list_orders()) == 1


class TestOrderLifecycle:
    """Test add item, preparation and billing through the service."""

    @pytest.mark.asyncio
    async def test_unknown_order(self, order_service):
        missing = uuid4()
        with pytest.raises(OrderNotFoundError):
            await order_service.get_order(missing)
        with pytest.raises(OrderNotFoundError):
            await order_service.add_item(missing, "pizza", 1)
        with pytest.raises(OrderNotFoundError):
            await order_service.send_for_preparation(missing)
        with pytest.raises(OrderNotFoundError):
            await order_service.bill(missing)

    @pytest.mark.asyncio
    async def test_add_item_is_persisted(self, order_service, order_store, table_one):
        order = await order_service.start_ordering(1, 4)
        await order_service.add_item(order.id, "pizza", 2)
        await order_service.add_item(order.id, "pizza", 3)

        stored = await order_store.find_by_id(order.id)
        assert len(stored.lines) == 1
        assert stored.lines[0].how_many == 5

    @pytest.mark.asyncio
    async def test_failed_add_leaves_store_unchanged(self, order_service, order_store, table_one):
        order = await order_service.start_ordering(1, 4)
        await order_service.add_item(order.id, "pizza", 2)

        with pytest.raises(ValidationError):
            await order_service.add_item(order.id, "pizza", 0)

        stored = await order_store.find_by_id(order.id)
        assert stored.lines[0].how_many == 2

    @pytest.mark.asyncio
    async def test_merge_past_limit_leaves_store_unchanged(self, order_service, order_store, table_one):
        order = await order_service.start_ordering(1, 4)
        await order_service.add_item(order.id, "pizza", MAX_COUNT)

        with pytest.raises(ValidationError):
            await order_service.add_item(order.id, "pizza", MAX_COUNT)

        stored = await order_store.find_by_id(order.id)
        assert stored.lines[0].how_many == MAX_COUNT

    @pytest.mark.asyncio
    async def test_send_for_preparation_counts_items(self, order_service, order_store, table_one):
        order = await order_service.start_ordering(1, 4)
        await order_service.add_item(order.id, "pizza", 2)
        await order_service.add_item(order.id, "coke", 3)

        assert await order_service.send_for_preparation(order.id) == 5
        assert await order_service.send_for_preparation(order.id) == 0

        stored = await order_store.find_by_id(order.id)
        assert all(line.sent_for_preparation for line in stored.lines)

    @pytest.mark.asyncio
    async def test_bill_exactly_once(self, order_service, table_one, clock):
        order = await order_service.start_ordering(1, 4)
        clock.advance(minutes=45)

        billed = await order_service.bill(order.id)
        assert billed.billed == clock()

        clock.advance(minutes=1)
        with pytest.raises(OrderAlreadyBilledError):
            await order_service.bill(order.id)
        assert (await order_service.get_order(order.id)).billed == billed.billed

    @pytest.mark.asyncio
    async def test_billed_order_is_frozen(self, order_service, table_one):
        order = await order_service.start_ordering(1, 4)
        await order_service.add_item(order.id, "pizza", 2)
        await order_service.bill(order.id)

        with pytest.raises(OrderAlreadyBilledError):
            await order_service.add_item(order.id, "lasagna", 1)
        with pytest.raises(OrderAlreadyBilledError):
            await order_service.send_for_preparation(order.id)

        stored = await order_service.get_order(order.id)
        assert len(stored.lines) == 1
        assert stored.lines[0].sent_for_preparation is False

    @pytest.mark.asyncio
    async def test_concurrent_bills_only_one_wins(self, order_service, table_one):
        order = await order_service.start_ordering(1, 4)

        results = await asyncio.gather(
            order_service.bill(order.id),
            order_service.bill(order.id),
            return_exceptions=True,
        )

        errors = [r for r in results if isinstance(r, Exception)]
        assert len(errors) == 1
        assert isinstance(errors[0], OrderAlreadyBilledError)

    @pytest.mark.asyncio
    async def test_list_orders_most_recent_first(self, order_service, table_service, clock):
        await table_service.create_table(1)
        await table_service.create_table(2)
        first = await order_service.start_ordering(1, 2)
        clock.advance(minutes=10)
        second = await order_service.start_ordering(2, 3)

        orders = await order_service.list_orders()
        assert [o.id for o in orders] == [second.id, first.id]


class TestItemResolution:
    """Test item references resolved through the menu."""

    @pytest.fixture
    def menu_order_service(self, order_store, table_store, test_menu_repository, clock):
        return TableOrderService(
            order_store=order_store,
            table_store=table_store,
            menu_repository=test_menu_repository,
            clock=clock,
        )

    @pytest.mark.asyncio
    async def test_name_and_id_land_on_same_line(self, menu_order_service, table_one):
        order = await menu_order_service.start_ordering(1, 2)
        await menu_order_service.add_item(order.id, "Pizza", 1)
        order = await menu_order_service.add_item(order.id, "margherita", 2, item_id="pizza-001")

        assert len(order.lines) == 1
        assert order.lines[0].item.id == "pizza-001"
        assert order.lines[0].item.short_name == "pizza"
        assert order.lines[0].how_many == 3

    @pytest.mark.asyncio
    async def test_unknown_item_kept_as_given(self, menu_order_service, table_one):
        order = await menu_order_service.start_ordering(1, 2)
        order = await menu_order_service.add_item(order.id, "risotto", 1)

        assert order.lines[0].item.id is None
        assert order.lines[0].item.short_name == "risotto"
