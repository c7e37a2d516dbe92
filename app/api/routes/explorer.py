"""Explorer routes - blocks, events, extrinsics, tokens and EVM transactions."""

import time
import uuid
from typing import Any, Iterable, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.api.deps import Pagination, get_db
from app.schemas.api import (
    BlockOut,
    ChainSummary,
    EventOut,
    EvmTransactionOut,
    ExtrinsicOut,
    PageResponse,
    TokenOut,
)
from app.services.explorer_service import ExplorerService, ExtrinsicNotFound

router = APIRouter(tags=["explorer"])


def page_response(started: float, pagination: Pagination, schema: type[BaseModel], rows: Iterable[Any]) -> PageResponse:
    """Wrap query results with request metadata (request_id, latency)."""
    return PageResponse(
        request_id=str(uuid.uuid4()),
        api_latency_ms=int((time.perf_counter() - started) * 1000),
        page=pagination.page,
        limit=pagination.limit,
        data=[schema.model_validate(row).model_dump(mode="json") for row in rows],
    )


# -----------------------------------------------------------------------------
# Blocks
# -----------------------------------------------------------------------------


@router.get("/blocks", response_model=PageResponse)
def get_blocks(pagination: Pagination = Depends(), db: Session = Depends(get_db)):
    """Get blocks, newest first."""
    start = time.perf_counter()
    rows = ExplorerService(db).get_blocks(page=pagination.page, limit=pagination.limit)
    return page_response(start, pagination, BlockOut, rows)


@router.get("/blocks/{number}", response_model=BlockOut)
def get_block(number: int, db: Session = Depends(get_db)):
    block = ExplorerService(db).get_block(number)
    if not block:
        raise HTTPException(status_code=404, detail=f"Block {number} not found")
    return BlockOut.model_validate(block)


# -----------------------------------------------------------------------------
# Events & Extrinsics
# -----------------------------------------------------------------------------


@router.get("/events", response_model=PageResponse)
def get_events(
    extrinsic_id: Optional[str] = Query(None, description="Filter by extrinsic id (canonical or retro format)"),
    pagination: Pagination = Depends(),
    db: Session = Depends(get_db),
):
    """
    Get events ordered by block, newest first.

    A retro extrinsic id (e.g. 0004543210-000002-a1b2c) is resolved to the
    canonical extrinsic id first; an unknown retro id yields 404.
    """
    start = time.perf_counter()
    try:
        rows = ExplorerService(db).get_events(
            extrinsic_id=extrinsic_id,
            page=pagination.page,
            limit=pagination.limit,
        )
    except ExtrinsicNotFound:
        raise HTTPException(status_code=404, detail=f"Extrinsic '{extrinsic_id}' not found")
    return page_response(start, pagination, EventOut, rows)


@router.get("/events/{event_id}", response_model=EventOut)
def get_event(event_id: str, db: Session = Depends(get_db)):
    event = ExplorerService(db).get_event(event_id)
    if not event:
        raise HTTPException(status_code=404, detail=f"Event '{event_id}' not found")
    return EventOut.model_validate(event)


@router.get("/extrinsics/{extrinsic_id}", response_model=ExtrinsicOut)
def get_extrinsic(extrinsic_id: str, db: Session = Depends(get_db)):
    """Get an extrinsic (by canonical or retro id) with all of its events."""
    result = ExplorerService(db).get_extrinsic(extrinsic_id)
    if not result:
        raise HTTPException(status_code=404, detail=f"Extrinsic '{extrinsic_id}' not found")

    extrinsic, events = result
    out = ExtrinsicOut.model_validate(extrinsic)
    out.events = [EventOut.model_validate(e) for e in events]
    return out


# -----------------------------------------------------------------------------
# Tokens
# -----------------------------------------------------------------------------


@router.get("/tokens", response_model=PageResponse)
def get_tokens(
    type: Optional[Literal["ERC20", "ERC721", "ERC1155"]] = Query(None, description="Filter by token standard"),
    pagination: Pagination = Depends(),
    db: Session = Depends(get_db),
):
    start = time.perf_counter()
    rows = ExplorerService(db).get_tokens(token_type=type, page=pagination.page, limit=pagination.limit)
    return page_response(start, pagination, TokenOut, rows)


@router.get("/tokens/{contract_address}", response_model=TokenOut)
def get_token(contract_address: str, db: Session = Depends(get_db)):
    token = ExplorerService(db).get_token(contract_address)
    if not token:
        raise HTTPException(status_code=404, detail=f"Token '{contract_address}' not found")
    return TokenOut.model_validate(token)


# -----------------------------------------------------------------------------
# EVM Transactions
# -----------------------------------------------------------------------------


@router.get("/transactions/{tx_hash}", response_model=EvmTransactionOut)
def get_transaction(tx_hash: str, db: Session = Depends(get_db)):
    """Get an EVM transaction with its decoded logs."""
    tx = ExplorerService(db).get_transaction(tx_hash)
    if not tx:
        raise HTTPException(status_code=404, detail=f"Transaction '{tx_hash}' not found")
    return EvmTransactionOut.model_validate(tx)


@router.get("/summary", response_model=ChainSummary)
def get_chain_summary(db: Session = Depends(get_db)):
    return ChainSummary(**ExplorerService(db).get_chain_summary())
