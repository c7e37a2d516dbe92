"""Address routes - per-address activity and downloadable statements."""

import time
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from app.api.deps import Pagination, get_db
from app.api.routes.explorer import page_response
from app.core.exceptions import InvalidInputError, StoreUnavailableError
from app.core.logging import get_logger
from app.schemas.api import EventOut, EvmTransactionOut, PageResponse, TokenTransferOut
from app.services.explorer_service import ExplorerService
from app.services.statement_service import StatementService

router = APIRouter(prefix="/addresses", tags=["addresses"])
log = get_logger("address_routes")


@router.get("/{address}/native-transfers", response_model=PageResponse)
def get_native_transfers(address: str, pagination: Pagination = Depends(), db: Session = Depends(get_db)):
    """
    Get native value-moving events for an address.

    Covers assets (Transferred, Issued, Burned), balances (Transfer,
    Reserved, Unreserved) and nft Transfer events.
    """
    start = time.perf_counter()
    rows = ExplorerService(db).get_native_transfers(address, page=pagination.page, limit=pagination.limit)
    return page_response(start, pagination, EventOut, rows)


@router.get("/{address}/token-transfers", response_model=PageResponse)
def get_token_transfers(address: str, pagination: Pagination = Depends(), db: Session = Depends(get_db)):
    """Get EVM Transfer logs sent from or to an address, one entry per log."""
    start = time.perf_counter()
    rows = ExplorerService(db).get_token_transfers(address, page=pagination.page, limit=pagination.limit)
    return page_response(start, pagination, TokenTransferOut, rows)


@router.get("/{address}/transactions", response_model=PageResponse)
def get_transactions(address: str, pagination: Pagination = Depends(), db: Session = Depends(get_db)):
    """Get EVM transactions sent from or to an address."""
    start = time.perf_counter()
    rows = ExplorerService(db).get_transactions_for_address(address, page=pagination.page, limit=pagination.limit)
    return page_response(start, pagination, EvmTransactionOut, rows)


@router.get("/{address}/report", response_class=PlainTextResponse)
def generate_report(
    address: str,
    from_date: Optional[str] = Query(None, alias="from", description="Start date (ISO-8601)"),
    to_date: Optional[str] = Query(None, alias="to", description="End date (ISO-8601), inclusive of the whole day"),
    db: Session = Depends(get_db),
):
    """
    Generate an activity statement for an address.

    Returns CSV text with one line per value movement: native events first,
    then EVM token transfers.
    """
    try:
        report = StatementService.from_session(db).generate_report(address, from_date, to_date)
    except InvalidInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except StoreUnavailableError as exc:
        log.error(f"Report failed for {address}: {exc}")
        raise HTTPException(status_code=503, detail="Statement backend unavailable")

    return PlainTextResponse(report, media_type="text/csv")
