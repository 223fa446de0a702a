"""Counter tables backing human-readable order and receipt numbers.

Each issued number is one inserted row; the database assigns the id, so
numbering never depends on application state. ``sqlite_autoincrement``
keeps SQLite from reusing ids of deleted rows.
"""

from sqlalchemy import Column, Integer
from .base import Base


SEQUENCE_START = 1000


class OrderNumberSeq(Base):
    __tablename__ = "order_number_seq"
    __table_args__ = {"sqlite_autoincrement": True}

    prefix = "ORD"

    id = Column(Integer, primary_key=True, autoincrement=True)


class ReceiptNumberSeq(Base):
    __tablename__ = "receipt_number_seq"
    __table_args__ = {"sqlite_autoincrement": True}

    prefix = "RCP"

    id = Column(Integer, primary_key=True, autoincrement=True)
