"""Generic key-value record backing every logical table of the item store."""

from sqlalchemy import JSON, Column, DateTime, Index, Integer, String, func

from src.database import Base


class StoreRecord(Base):
    """One item addressed by (table, partition key, sort key).

    The full item, key attributes included, lives in ``attributes``.
    ``ttl_expiration`` mirrors the table's TTL attribute so the sweep can
    find expired rows without reading the JSON body.
    """

    __tablename__ = "store_records"
    __table_args__ = (Index("ix_store_records_table_ttl", "table_name", "ttl_expiration"),)

    table_name = Column(String(64), primary_key=True)
    partition_key = Column(String(255), primary_key=True)
    sort_key = Column(String(512), primary_key=True)
    attributes = Column(JSON, nullable=False)
    ttl_expiration = Column(Integer, nullable=True)  # Unix seconds

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
