"""In-memory menu provider."""
import logging
import yaml
from pathlib import Path
from typing import Optional
from dining.services.menu.base import Menu, MenuItem, MenuProvider

logger = logging.getLogger(__name__)


class InMemoryMenuProvider(MenuProvider):
    """In-memory menu provider using YAML configuration."""

    def __init__(self, menu_file: Optional[str] = None):
        """Initialize with optional menu file path."""
        if menu_file is None:
            menu_file = Path(__file__).parent / "data" / "menu.yaml"
        self.menu_file = Path(menu_file)
        self._menu: Optional[Menu] = None

    async def _load_menu(self) -> Menu:
        """Load menu from YAML file."""
        if self._menu is None:
            if not self.menu_file.exists():
                logger.warning(f"[MENU] Menu file {self.menu_file} not found, using an empty menu")
                self._menu = Menu(items=[])
            else:
                with open(self.menu_file, "r") as f:
                    data = yaml.safe_load(f) or {}
                self._menu = Menu(items=[MenuItem(**item) for item in data.get("items", [])])
                logger.info(f"[MENU] Loaded {len(self._menu.items)} items from {self.menu_file}")
        return self._menu

    async def get_item_by_id(self, item_id: str) -> Optional[MenuItem]:
        """Get a menu item by identifier."""
        menu = await self._load_menu()
        for item in menu.items:
            if item.id == item_id:
                return item
        return None

    async def get_item_by_short_name(self, short_name: str) -> Optional[MenuItem]:
        """Get a menu item by short name."""
        menu = await self._load_menu()
        short_name_lower = short_name.lower().strip()
        for item in menu.items:
            if item.short_name.lower() == short_name_lower:
                return item
        return None
