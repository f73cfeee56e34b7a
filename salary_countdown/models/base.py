"""Base declarative class and shared column types for SQLAlchemy models."""
from __future__ import annotations

from sqlalchemy import DateTime, Double
from sqlalchemy.dialects import mysql
from sqlalchemy.orm import DeclarativeBase

# MySQL drops fractional seconds from DATETIME unless fsp is given.
Timestamp = DateTime(timezone=True).with_variant(mysql.DATETIME(fsp=6), "mysql", "mariadb")

# Settings values are stored as entered; only settled amounts are rounded.
Quantity = Double(asdecimal=False).with_variant(
    mysql.DOUBLE(asdecimal=False), "mysql", "mariadb"
)


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""

    pass
