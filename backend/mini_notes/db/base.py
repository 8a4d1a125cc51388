"""SQLAlchemy Declarative Base — metadata shared by every Mini Notes table.

Invariants:
    - Constraint names follow NAMING_CONVENTION, so a unique violation reported
      by the driver names its column (uq_users_email, uq_users_username)
    - Alembic migrations use the same names
"""

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)
