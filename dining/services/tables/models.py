"""Dining table models."""
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class DiningTable(BaseModel):
    """A physical table of the restaurant."""

    number: int
    created: datetime


class TableStatus(BaseModel):
    """A table together with its current open order, if any."""

    number: int
    taken: bool = False
    table_order_id: Optional[UUID] = None
