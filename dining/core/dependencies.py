"""FastAPI dependencies."""
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dining.core.config import settings
from dining.db.database import get_db
from dining.services.menu.in_memory_menu import InMemoryMenuProvider
from dining.services.menu.repository import MenuRepository
from dining.services.ordering.service import TableOrderService
from dining.services.persistence.orders import SqlTableOrderStore
from dining.services.persistence.tables import SqlTableStore
from dining.services.tables.service import TableService


@lru_cache
def get_menu_repository() -> MenuRepository:
    """Get menu repository instance (the menu is loaded once per process)."""
    return MenuRepository(provider=InMemoryMenuProvider(menu_file=settings.menu_file))


def get_table_order_service(
    db: AsyncSession = Depends(get_db),
    menu_repository: MenuRepository = Depends(get_menu_repository),
) -> TableOrderService:
    """Get table order service bound to the request's session."""
    return TableOrderService(
        order_store=SqlTableOrderStore(db),
        table_store=SqlTableStore(db),
        menu_repository=menu_repository,
    )


def get_table_service(db: AsyncSession = Depends(get_db)) -> TableService:
    """Get table service bound to the request's session."""
    return TableService(table_store=SqlTableStore(db), order_store=SqlTableOrderStore(db))
