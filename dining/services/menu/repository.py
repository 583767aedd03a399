"""Menu repository."""
import logging
from typing import Optional
from dining.services.menu.base import MenuItem, MenuProvider
from dining.services.ordering.models import ItemReference

logger = logging.getLogger(__name__)


class MenuRepository:
    """Repository for menu lookups."""

    def __init__(self, provider: MenuProvider):
        self.provider = provider

    async def find_item(self, short_name: str, item_id: Optional[str] = None) -> Optional[MenuItem]:
        """Find a menu item by identifier first, then by short name."""
        if item_id is not None:
            item = await self.provider.get_item_by_id(item_id)
            if item is not None:
                return item
        return await self.provider.get_item_by_short_name(short_name)

    async def resolve_reference(self, short_name: str, item_id: Optional[str] = None) -> ItemReference:
        """
        Build the item reference for an ordered item.

        Known items take the menu's identifier and short name, so the same
        dish ordered by name or by id lands on the same ordering line.
        Unknown items are referenced as given.
        """
        item = await self.find_item(short_name, item_id)
        if item is None:
            logger.debug(f"[MENU] '{short_name}' not on the menu, keeping reference as given")
            return ItemReference(id=item_id, short_name=short_name)
        return ItemReference(id=item.id, short_name=item.short_name)
