from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel


class BlockOut(BaseModel):
    number: int
    hash: str
    parent_hash: Optional[str] = None
    timestamp: int
    extrinsics_count: int
    events_count: int
    spec_version: Optional[int] = None

    class Config:
        from_attributes = True


class EventOut(BaseModel):
    event_id: str
    extrinsic_id: Optional[str] = None
    block_number: int
    timestamp: int
    section: str
    method: str
    args: dict

    class Config:
        from_attributes = True


class ExtrinsicOut(BaseModel):
    extrinsic_id: str
    retro_extrinsic_id: Optional[str] = None
    block: int
    timestamp: int
    section: str
    method: str
    signer: Optional[str] = None
    is_signed: bool
    success: bool
    args: dict
    events: list[EventOut] = []

    class Config:
        from_attributes = True


class TokenOut(BaseModel):
    contract_address: str
    asset_id: Optional[int] = None
    collection_id: Optional[int] = None
    name: str
    symbol: Optional[str] = None
    decimals: Optional[int] = None
    type: str
    total_supply: Optional[Decimal] = None

    class Config:
        from_attributes = True


class EvmTransactionEventOut(BaseModel):
    log_index: int
    event_name: str
    from_address: Optional[str] = None
    to_address: Optional[str] = None
    contract_address: Optional[str] = None
    token_type: Optional[str] = None
    name: Optional[str] = None
    symbol: Optional[str] = None
    amount: Optional[str] = None
    formatted_amount: Optional[str] = None
    token_id: Optional[str] = None

    class Config:
        from_attributes = True


class EvmTransactionOut(BaseModel):
    hash: str
    block_number: int
    timestamp: int
    from_address: str
    to_address: Optional[str] = None
    value: str
    status: str
    events: list[EvmTransactionEventOut] = []

    class Config:
        from_attributes = True


class TokenTransferOut(BaseModel):
    """A Transfer log merged with its parent transaction."""

    hash: str
    block_number: int
    timestamp: int
    log_index: int
    from_address: Optional[str] = None
    to_address: Optional[str] = None
    contract_address: Optional[str] = None
    token_type: Optional[str] = None
    name: Optional[str] = None
    symbol: Optional[str] = None
    amount: Optional[str] = None
    formatted_amount: Optional[str] = None
    token_id: Optional[str] = None


class PageResponse(BaseModel):
    request_id: str
    api_latency_ms: int
    page: int
    limit: int
    data: list[Any]


class ChainSummary(BaseModel):
    latest_block: Optional[int] = None
    signed_extrinsics: int
    evm_transactions: int
    tokens: int


class HealthResponse(BaseModel):
    database: str
    latest_block: Optional[int] = None
