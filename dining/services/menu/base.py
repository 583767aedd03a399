"""Menu provider interface."""
from abc import ABC, abstractmethod
from typing import List, Optional
from pydantic import BaseModel


class MenuItem(BaseModel):
    """Menu item model."""

    id: str
    short_name: str


class Menu(BaseModel):
    """Menu model."""

    items: List[MenuItem]


class MenuProvider(ABC):
    """Abstract base class for read-only menu providers."""

    @abstractmethod
    async def get_item_by_id(self, item_id: str) -> Optional[MenuItem]:
        """Get a menu item by identifier."""
        pass

    @abstractmethod
    async def get_item_by_short_name(self, short_name: str) -> Optional[MenuItem]:
        """Get a menu item by short name, case-insensitively."""
        pass
