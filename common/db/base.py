from sqlalchemy import BigInteger, MetaData
from sqlalchemy.orm import declarative_base
from sqlalchemy.types import TypeDecorator, Integer

# Deterministic constraint names so unique violations are easy to spot in logs
metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_name)s",
        "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

Base = declarative_base(metadata=metadata)


class BigIntegerType(TypeDecorator):
    """A type that maps to BigInteger on PostgreSQL/MySQL and Integer on SQLite.

    SQLite only autoincrements INTEGER PRIMARY KEY columns, so identities
    must stay plain Integer there.
    """

    impl = Integer
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name in ("postgresql", "mysql"):
            return dialect.type_descriptor(BigInteger())
        else:
            return dialect.type_descriptor(Integer())
