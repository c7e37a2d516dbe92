"""Value types flowing through the address statement pipeline."""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


class Direction(str, Enum):
    IN = "in"
    OUT = "out"
    UNKNOWN = ""


class TransferKind(str, Enum):
    TRANSFER = "transfer"
    ISSUANCE = "issuance"
    BURN = "burn"
    RESERVE = "reserve"
    UNRESERVE = "unreserve"
    NFT_TRANSFER = "nft_transfer"


class RawEvent(BaseModel):
    """A native-chain event as read from the event store."""

    section: str
    method: str
    args: Dict[str, Any] = Field(default_factory=dict)
    timestamp: int  # seconds since epoch
    extrinsic_id: Optional[str] = None
    event_id: Optional[str] = None
    block_number: Optional[int] = None

    class Config:
        frozen = True


class EvmTransfer(BaseModel):
    """A ``Transfer`` log merged with its parent EVM transaction fields."""

    hash: str
    timestamp: int  # milliseconds since epoch
    event_name: str = "Transfer"
    from_address: Optional[str] = None
    to_address: Optional[str] = None
    token_type: Optional[str] = None
    name: Optional[str] = None
    formatted_amount: Optional[str] = None
    token_id: Optional[str] = None

    class Config:
        frozen = True


class TokenMetadata(BaseModel):
    name: str
    decimals: Optional[int] = None

    class Config:
        frozen = True


class ClassifiedTransfer(BaseModel):
    """Normalized fields extracted from one recognized native event."""

    kind: TransferKind
    from_address: str
    to_address: str
    direction: Direction
    asset_id: Optional[int]
    is_collection: bool = False
    raw_amount: Any = None
    serial_numbers: Optional[list] = None

    class Config:
        frozen = True


class LedgerRow(BaseModel):
    date: str
    tx_ref: str
    direction: Direction
    amount: str
    currency: str
    from_address: str
    to_address: str

    class Config:
        frozen = True

    def as_record(self) -> list[str]:
        return [
            self.date,
            self.tx_ref,
            self.direction.value,
            self.amount,
            self.currency,
            self.from_address,
            self.to_address,
        ]
