"""Domain error codes for table ordering."""
from enum import Enum
from typing import Optional
from uuid import UUID


class ErrorCode(str, Enum):
    """Domain error codes."""

    INVALID_INPUT = "INVALID_INPUT"
    ORDER_ALREADY_BILLED = "ORDER_ALREADY_BILLED"
    ORDER_NOT_FOUND = "ORDER_NOT_FOUND"
    TABLE_NOT_FOUND = "TABLE_NOT_FOUND"
    TABLE_ALREADY_EXISTS = "TABLE_ALREADY_EXISTS"
    TABLE_ALREADY_TAKEN = "TABLE_ALREADY_TAKEN"
    TABLE_UNAVAILABLE = "TABLE_UNAVAILABLE"
    CONCURRENT_MODIFICATION = "CONCURRENT_MODIFICATION"

    def __str__(self) -> str:
        return self.value


class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ValidationError(DomainError):
    """Raised for malformed input, before any state change."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.INVALID_INPUT, message=message)


class IllegalStateError(DomainError):
    """Raised when an operation is not legal in the order's current state."""


class OrderAlreadyBilledError(IllegalStateError):
    """Raised when a billed order is modified or billed again."""

    def __init__(self, order_id: UUID) -> None:
        super().__init__(
            code=ErrorCode.ORDER_ALREADY_BILLED,
            message="Order already billed",
        )
        self.order_id = order_id


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class OrderNotFoundError(NotFoundError):
    def __init__(self, order_id: UUID) -> None:
        super().__init__(code=ErrorCode.ORDER_NOT_FOUND, message="Order not found")
        self.order_id = order_id


class TableNotFoundError(NotFoundError):
    def __init__(self, table_number: int) -> None:
        super().__init__(code=ErrorCode.TABLE_NOT_FOUND, message="Table not found")
        self.table_number = table_number


class ConflictError(DomainError):
    """Raised when a request collides with existing state."""


class TableAlreadyExistsError(ConflictError):
    def __init__(self, table_number: int) -> None:
        super().__init__(
            code=ErrorCode.TABLE_ALREADY_EXISTS,
            message=f"Table {table_number} already exists",
        )
        self.table_number = table_number


class TableAlreadyTakenError(ConflictError):
    """Raised when a table already has an open order."""

    def __init__(self, table_number: int, order_id: Optional[UUID] = None) -> None:
        super().__init__(
            code=ErrorCode.TABLE_ALREADY_TAKEN,
            message=f"Table {table_number} already has an open order",
        )
        self.table_number = table_number
        self.order_id = order_id


class TableUnavailableError(ConflictError):
    """Raised when ordering is started for a table that does not exist."""

    def __init__(self, table_number: int) -> None:
        super().__init__(
            code=ErrorCode.TABLE_UNAVAILABLE,
            message=f"Table {table_number} does not exist",
        )
        self.table_number = table_number


class ConcurrentModificationError(ConflictError):
    """Raised when another writer saved the order first."""

    def __init__(self, order_id: UUID) -> None:
        super().__init__(
            code=ErrorCode.CONCURRENT_MODIFICATION,
            message="Order was modified concurrently, reload and retry",
        )
        self.order_id = order_id
