"""Dining table API endpoints."""
import logging
from typing import List
from fastapi import APIRouter, Depends

from dining.api.errors import to_http_exception
from dining.api.schemas import TableCreationRequest, TableResponse
from dining.core.dependencies import get_table_service
from dining.services.ordering.errors import DomainError
from dining.services.tables.service import TableService

router = APIRouter()
logger = logging.getLogger(__name__)

BASE_URI = "/tables"


@router.post(BASE_URI, response_model=TableResponse, status_code=201)
async def create_table(
    body: TableCreationRequest,
    service: TableService = Depends(get_table_service),
):
    """Register a new table."""
    logger.info(f"[TABLES] Create request - table: {body.table_id}")
    try:
        table = await service.create_table(body.table_id)
    except DomainError as e:
        logger.info(f"[TABLES] Create rejected - table: {body.table_id}, {e}")
        raise to_http_exception(e)
    return TableResponse.from_domain(table)


@router.get(BASE_URI, response_model=List[TableResponse])
async def list_tables(service: TableService = Depends(get_table_service)):
    """List all tables with their occupancy."""
    tables = await service.list_tables()
    logger.debug(f"[TABLES] Listing {len(tables)} tables")
    return [TableResponse.from_domain(table) for table in tables]


@router.get(BASE_URI + "/{table_number}", response_model=TableResponse)
async def get_table(
    table_number: int,
    service: TableService = Depends(get_table_service),
):
    """Get one table."""
    try:
        table = await service.get_table(table_number)
    except DomainError as e:
        raise to_http_exception(e)
    return TableResponse.from_domain(table)
