"""Table order models.

A table order is either open (``billed is None``) or billed. Billing is the
only transition and it is irreversible: once billed, no item can be added
and nothing more can be sent to the kitchen.
"""
from datetime import datetime, timezone
from typing import Callable, List, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, field_validator

from dining.services.ordering.errors import OrderAlreadyBilledError, ValidationError

Clock = Callable[[], datetime]
IdGenerator = Callable[[], UUID]


def utc_now() -> datetime:
    """Default clock: current time in UTC."""
    return datetime.now(timezone.utc)


# Counts are stored as 32-bit SQL integers
MAX_COUNT = 2_147_483_647


def require_count(name: str, value: int) -> None:
    """Raise ValidationError unless ``value`` is an integer in 1..MAX_COUNT."""
    # bool is an int subclass, reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValidationError(f"{name} must be a positive integer")
    if value > MAX_COUNT:
        raise ValidationError(f"{name} must not exceed {MAX_COUNT}")


class ItemReference(BaseModel):
    """Immutable reference to a menu item.

    Two references are equal when their identifiers are equal, or, when no
    identifier is set, when their short names are equal.
    """

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    short_name: str

    @property
    def key(self) -> str:
        return self.id if self.id is not None else self.short_name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ItemReference):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)


class OrderingLine(BaseModel):
    """One entry of a table order."""

    item: ItemReference
    how_many: int
    sent_for_preparation: bool = False

    @field_validator("how_many")
    @classmethod
    def _positive_quantity(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("how_many must be positive")
        return value

    def increase(self, by: int) -> None:
        self.how_many += by

    def mark_sent_for_preparation(self) -> None:
        self.sent_for_preparation = True


class TableOrder(BaseModel):
    """Order taken at a table, from opening to billing."""

    id: UUID
    table_number: int
    customers_count: int
    opened: datetime
    billed: Optional[datetime] = None
    lines: List[OrderingLine] = []

    @classmethod
    def start(
        cls,
        table_number: int,
        customers_count: int,
        clock: Clock = utc_now,
        id_generator: IdGenerator = uuid4,
    ) -> "TableOrder":
        """Open a new order for a table."""
        require_count("table_number", table_number)
        require_count("customers_count", customers_count)
        return cls(
            id=id_generator(),
            table_number=table_number,
            customers_count=customers_count,
            opened=clock(),
        )

    @property
    def is_billed(self) -> bool:
        return self.billed is not None

    def _ensure_open(self) -> None:
        if self.is_billed:
            raise OrderAlreadyBilledError(self.id)

    def find_line(self, item: ItemReference) -> Optional[OrderingLine]:
        for line in self.lines:
            if line.item == item:
                return line
        return None

    def add_item(self, item: ItemReference, how_many: int) -> "TableOrder":
        """Add ``how_many`` of ``item``, merging with an existing line.

        A merged line keeps its preparation flag as it was.
        """
        self._ensure_open()
        require_count("how_many", how_many)
        line = self.find_line(item)
        if line is None:
            self.lines.append(OrderingLine(item=item, how_many=how_many))
        else:
            require_count("how_many", line.how_many + how_many)
            line.increase(how_many)
        return self

    def send_for_preparation(self) -> int:
        """Mark unsent lines as sent and return how many items that covers."""
        self._ensure_open()
        items_sent = 0
        for line in self.lines:
            if not line.sent_for_preparation:
                line.mark_sent_for_preparation()
                items_sent += line.how_many
        return items_sent

    def bill(self, clock: Clock = utc_now) -> "TableOrder":
        """Close the order. An order can be billed only once."""
        self._ensure_open()
        self.billed = clock()
        return self
