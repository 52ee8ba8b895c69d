"""Ledger entry model"""
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, JSON, String

from app.database import Base


class LedgerEntryRow(Base):
    """LedgerEntryRow model - append-only recommendation events"""

    __tablename__ = "ledger_entries"

    id = Column(Integer, primary_key=True, index=True)  # 1-based, assigned by the store
    hash = Column(String(80), nullable=False, index=True)
    timestamp = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
    recommendations = Column(JSON, nullable=False)
    previous_hash = Column(String(80), nullable=False)
