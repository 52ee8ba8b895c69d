"""Ledger schemas"""
from datetime import datetime
from typing import List, Optional

from pydantic import Field, model_validator

from app.schemas.base import CamelModel


class LedgerData(CamelModel):
    recommendations: List[str]


class LedgerEntryResponse(CamelModel):
    """Schema for a ledger entry as served by GET /api/blockchain-logs"""

    id: int
    hash: str
    timestamp: datetime
    data: LedgerData
    previous_hash: str

    @model_validator(mode="before")
    @classmethod
    def nest_recommendations(cls, data):
        """Wrap a stored entry's crop names into the ``data`` object"""
        # FastAPI hands dataclass entries over as plain dicts
        if isinstance(data, dict):
            if "recommendations" in data and "data" not in data:
                data = dict(data)
                data["data"] = {"recommendations": list(data.pop("recommendations"))}
            return data
        if hasattr(data, "recommendations") and hasattr(data, "previous_hash"):
            return {
                "id": data.id,
                "hash": data.hash,
                "timestamp": data.timestamp,
                "data": {"recommendations": list(data.recommendations)},
                "previous_hash": data.previous_hash,
            }
        return data


class ChainVerifyResponse(CamelModel):
    """Response from GET /api/blockchain-logs/verify"""

    valid: bool = Field(..., description="True if every link in the ledger holds")
    total_entries: int = Field(..., description="Number of entries checked")
    broken_at: Optional[int] = Field(
        None,
        description="id of the first entry that breaks the chain - null when valid=true",
    )
    hash_mode: str = Field(..., description="pseudo or sha256")
    content_verified: bool = Field(
        ...,
        description="True when hashes were recomputed from entry contents (sha256 mode only)",
    )
