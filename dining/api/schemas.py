"""Request and response models of the dining API.

JSON field names are camelCase; Python attributes stay snake_case.
"""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from dining.services.ordering.models import TableOrder
from dining.services.tables.models import TableStatus


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TableCreationRequest(CamelModel):
    """Body of POST /tables."""
    table_id: int


class StartOrderingRequest(CamelModel):
    """Body of POST /tableOrders."""
    table_id: int
    customers_count: int


class ItemRequest(CamelModel):
    """Body of POST /tableOrders/{order_id}. The id is optional."""
    id: Optional[str] = None
    short_name: str = Field(min_length=1)
    how_many: int


class TableResponse(CamelModel):
    """Table response model."""
    number: int
    taken: bool
    table_order_id: Optional[UUID] = None

    @classmethod
    def from_domain(cls, table: TableStatus) -> "TableResponse":
        return cls(number=table.number, taken=table.taken, table_order_id=table.table_order_id)


class ItemResponse(CamelModel):
    id: Optional[str] = None
    short_name: str


class OrderingLineResponse(CamelModel):
    """Ordering line response model."""
    item: ItemResponse
    how_many: int
    sent_for_preparation: bool


class TableOrderResponse(CamelModel):
    """Table order response model."""
    id: UUID
    table_number: int
    customers_count: int
    opened: datetime
    billed: Optional[datetime] = None
    lines: List[OrderingLineResponse] = []

    @classmethod
    def from_domain(cls, order: TableOrder) -> "TableOrderResponse":
        return cls(
            id=order.id,
            table_number=order.table_number,
            customers_count=order.customers_count,
            opened=order.opened,
            billed=order.billed,
            lines=[
                OrderingLineResponse(
                    item=ItemResponse(id=line.item.id, short_name=line.item.short_name),
                    how_many=line.how_many,
                    sent_for_preparation=line.sent_for_preparation,
                )
                for line in order.lines
            ],
        )


class PreparationResponse(CamelModel):
    """Result of sending an order's items for preparation."""
    how_many_items_sent_for_preparation: int
