"""Recommendation ledger endpoints"""
from typing import List

from fastapi import APIRouter, Depends, Request

from app.api.deps import get_ledger_store
from app.config import settings
from app.middleware.rate_limit import rate_limit
from app.schemas.ledger import ChainVerifyResponse, LedgerEntryResponse
from app.utils import chain as chain_utils
from app.utils.logger import logger

router = APIRouter(prefix="/api/blockchain-logs", tags=["ledger"])


@router.get("", response_model=List[LedgerEntryResponse])
@rate_limit("ledger")
def read_recent_entries(request: Request, ledger=Depends(get_ledger_store)):
    """
    Return the most recent ledger entries, oldest first.

    The window is ``LEDGER_READ_WINDOW`` entries (10 by default). An empty
    ledger returns an empty list.
    """
    return ledger.read_recent(settings.LEDGER_READ_WINDOW)


@router.get("/verify", response_model=ChainVerifyResponse)
@rate_limit("ledger")
def verify_ledger(request: Request, ledger=Depends(get_ledger_store)):
    """
    Walk the whole ledger and check every link.

    ``previousHash`` linkage is always checked. Hashes are recomputed from
    entry contents only when the ledger runs with ``LEDGER_HASH_MODE=sha256``;
    pseudo-hashes carry no content, so ``contentVerified`` is false then.
    """
    check = chain_utils.verify_chain(ledger.entries(), ledger.hasher)

    if not check.valid:
        logger.warning(
            f"Ledger chain broken at entry {check.broken_at}",
            extra={"entry_id": check.broken_at},
        )

    return ChainVerifyResponse(
        valid=check.valid,
        total_entries=check.total_entries,
        broken_at=check.broken_at,
        hash_mode=ledger.hasher.name,
        content_verified=check.content_verified,
    )
