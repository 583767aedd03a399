"""Table order API endpoints."""
import logging
from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends

from dining.api.errors import to_http_exception
from dining.api.schemas import (
    ItemRequest,
    PreparationResponse,
    StartOrderingRequest,
    TableOrderResponse,
)
from dining.core.dependencies import get_table_order_service
from dining.services.ordering.errors import DomainError
from dining.services.ordering.service import TableOrderService

router = APIRouter()
logger = logging.getLogger(__name__)

BASE_URI = "/tableOrders"


@router.post(BASE_URI, response_model=TableOrderResponse, status_code=201)
async def start_ordering(
    body: StartOrderingRequest,
    service: TableOrderService = Depends(get_table_order_service),
):
    """Open an order for a table."""
    logger.info(
        f"[TABLE ORDERS] Start request - table: {body.table_id}, customers: {body.customers_count}"
    )
    try:
        order = await service.start_ordering(body.table_id, body.customers_count)
    except DomainError as e:
        logger.info(f"[TABLE ORDERS] Start rejected - table: {body.table_id}, {e}")
        raise to_http_exception(e)
    return TableOrderResponse.from_domain(order)


@router.get(BASE_URI, response_model=List[TableOrderResponse])
async def list_orders(service: TableOrderService = Depends(get_table_order_service)):
    """List all table orders, most recent first."""
    orders = await service.list_orders()
    logger.debug(f"[TABLE ORDERS] Listing {len(orders)} orders")
    return [TableOrderResponse.from_domain(order) for order in orders]


@router.get(BASE_URI + "/{order_id}", response_model=TableOrderResponse)
async def get_order(
    order_id: UUID,
    service: TableOrderService = Depends(get_table_order_service),
):
    """Get one table order."""
    try:
        order = await service.get_order(order_id)
    except DomainError as e:
        raise to_http_exception(e)
    return TableOrderResponse.from_domain(order)


@router.post(BASE_URI + "/{order_id}", response_model=TableOrderResponse, status_code=201)
async def add_item(
    order_id: UUID,
    body: ItemRequest,
    service: TableOrderService = Depends(get_table_order_service),
):
    """Add an item to a table order."""
    logger.info(
        f"[TABLE ORDERS] Add item request - order: {order_id}, item: {body.short_name}, "
        f"how many: {body.how_many}"
    )
    try:
        order = await service.add_item(order_id, body.short_name, body.how_many, item_id=body.id)
    except DomainError as e:
        logger.info(f"[TABLE ORDERS] Add item rejected - order: {order_id}, {e}")
        raise to_http_exception(e)
    return TableOrderResponse.from_domain(order)


@router.post(BASE_URI + "/{order_id}/prepare", response_model=PreparationResponse)
async def send_for_preparation(
    order_id: UUID,
    service: TableOrderService = Depends(get_table_order_service),
):
    """Send the items not yet sent to the kitchen."""
    try:
        items_sent = await service.send_for_preparation(order_id)
    except DomainError as e:
        logger.info(f"[TABLE ORDERS] Prepare rejected - order: {order_id}, {e}")
        raise to_http_exception(e)
    return PreparationResponse(how_many_items_sent_for_preparation=items_sent)


@router.post(BASE_URI + "/{order_id}/bill", response_model=TableOrderResponse)
async def bill(
    order_id: UUID,
    service: TableOrderService = Depends(get_table_order_service),
):
    """Bill a table order."""
    try:
        order = await service.bill(order_id)
    except DomainError as e:
        logger.info(f"[TABLE ORDERS] Bill rejected - order: {order_id}, {e}")
        raise to_http_exception(e)
    return TableOrderResponse.from_domain(order)
