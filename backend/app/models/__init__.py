"""Database models"""
from app.models.ledger_entry import LedgerEntryRow

__all__ = ["LedgerEntryRow"]
