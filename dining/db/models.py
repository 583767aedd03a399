"""Database models."""
from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    text,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class DiningTableRecord(Base):
    """Dining table model."""

    __tablename__ = "dining_tables"

    number = Column(Integer, primary_key=True, autoincrement=False)
    created = Column(DateTime(timezone=True), nullable=False)

    # Relationships
    orders = relationship("TableOrderRecord", back_populates="table")


class TableOrderRecord(Base):
    """Table order model."""

    __tablename__ = "table_orders"
    __table_args__ = (
        # At most one unbilled order per table
        Index(
            "uq_table_orders_open_table",
            "table_number",
            unique=True,
            sqlite_where=text("billed IS NULL"),
            postgresql_where=text("billed IS NULL"),
        ),
    )

    id = Column(String(36), primary_key=True)
    table_number = Column(Integer, ForeignKey("dining_tables.number"), nullable=False, index=True)
    customers_count = Column(Integer, nullable=False)
    opened = Column(DateTime(timezone=True), nullable=False)
    billed = Column(DateTime(timezone=True), nullable=True)
    version = Column(Integer, nullable=False)

    # Relationships
    table = relationship("DiningTableRecord", back_populates="orders")
    lines = relationship(
        "OrderingLineRecord",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderingLineRecord.position",
    )

    __mapper_args__ = {"version_id_col": version}


class OrderingLineRecord(Base):
    """Ordering line model."""

    __tablename__ = "ordering_lines"
    __table_args__ = (UniqueConstraint("order_id", "position"),)

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(String(36), ForeignKey("table_orders.id"), nullable=False)
    position = Column(Integer, nullable=False)
    item_id = Column(String, nullable=True)
    item_short_name = Column(String, nullable=False)
    how_many = Column(Integer, nullable=False)
    sent_for_preparation = Column(Boolean, default=False, nullable=False)

    # Relationships
    order = relationship("TableOrderRecord", back_populates="lines")
