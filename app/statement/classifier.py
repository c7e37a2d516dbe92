"""Event classification for native-chain value movements.

Every event shape the statement understands is declared once in
``TRANSFER_SHAPES``. The same table drives both the event-store query
(``address_filters``) and per-event field extraction (``classify``), so the
set of events fetched and the set of events understood cannot drift apart.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from app.core.exceptions import MalformedEventError
from app.schemas.statement import (
    ZERO_ADDRESS,
    ClassifiedTransfer,
    Direction,
    RawEvent,
    TransferKind,
)

# Asset reference sources
NATIVE_ASSET = "native"


@dataclass(frozen=True)
class EventShape:
    kind: TransferKind
    from_field: Optional[str]
    to_field: Optional[str]
    amount_field: str
    asset_field: str  # args key, or NATIVE_ASSET for the chain's fee asset
    is_collection: bool = False
    extra_match_fields: Tuple[str, ...] = ()

    @property
    def match_fields(self) -> Tuple[str, ...]:
        fields = tuple(f for f in (self.from_field, self.to_field) if f)
        return fields + self.extra_match_fields


TRANSFER_SHAPES: Dict[Tuple[str, str], EventShape] = {
    ("assets", "Transferred"): EventShape(TransferKind.TRANSFER, "from", "to", "amount", "assetId"),
    ("assets", "Issued"): EventShape(
        TransferKind.ISSUANCE, None, "owner", "totalSupply", "assetId", extra_match_fields=("source",)
    ),
    ("assets", "Burned"): EventShape(TransferKind.BURN, "owner", None, "balance", "assetId"),
    ("balances", "Transfer"): EventShape(TransferKind.TRANSFER, "from", "to", "amount", NATIVE_ASSET),
    ("balances", "Reserved"): EventShape(TransferKind.RESERVE, "who", None, "amount", NATIVE_ASSET),
    ("balances", "Unreserved"): EventShape(TransferKind.UNRESERVE, None, "who", "amount", NATIVE_ASSET),
    ("nft", "Transfer"): EventShape(
        TransferKind.NFT_TRANSFER, "previousOwner", "newOwner", "serialNumbers", "collectionId", is_collection=True
    ),
}


def address_filters() -> List[Tuple[str, str, str]]:
    """(section, method, args field) triples an address must match in the event store."""
    return [
        (section, method, field)
        for (section, method), shape in TRANSFER_SHAPES.items()
        for field in shape.match_fields
    ]


def same_address(left: Optional[str], right: Optional[str]) -> bool:
    if not left or not right:
        return False
    return left.lower() == right.lower()


def infer_direction(address: str, from_address: str, to_address: str) -> Direction:
    if same_address(address, from_address):
        return Direction.OUT
    if same_address(address, to_address):
        return Direction.IN
    return Direction.UNKNOWN


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _side(args: Dict[str, Any], field: Optional[str]) -> str:
    if not field:
        return ZERO_ADDRESS
    value = args.get(field)
    if not value:
        return ZERO_ADDRESS
    if not isinstance(value, str):
        raise MalformedEventError(field, value)
    return value


def classify(event: RawEvent, address: str, native_asset_id: int = 1) -> Optional[ClassifiedTransfer]:
    """Classify a native event relative to ``address``.

    Returns None for (section, method) pairs outside the transfer taxonomy.
    Raises MalformedEventError when a recognized event has a non-string
    counterparty or non-list serial numbers.
    """
    shape = TRANSFER_SHAPES.get((event.section, event.method))
    if shape is None:
        return None

    args = event.args or {}
    from_address = _side(args, shape.from_field)
    to_address = _side(args, shape.to_field)

    if shape.asset_field == NATIVE_ASSET:
        asset_id: Optional[int] = native_asset_id
    else:
        asset_id = _as_int(args.get(shape.asset_field))

    serial_numbers = None
    raw_amount = None
    if shape.kind is TransferKind.NFT_TRANSFER:
        serials = args.get(shape.amount_field) or []
        if not isinstance(serials, (list, tuple)):
            raise MalformedEventError(shape.amount_field, serials)
        serial_numbers = list(serials)
    else:
        raw_amount = args.get(shape.amount_field)

    return ClassifiedTransfer(
        kind=shape.kind,
        from_address=from_address,
        to_address=to_address,
        direction=infer_direction(address, from_address, to_address),
        asset_id=asset_id,
        is_collection=shape.is_collection,
        raw_amount=raw_amount,
        serial_numbers=serial_numbers,
    )


def format_serial_numbers(serial_numbers: Optional[list]) -> str:
    return "TokenIds: " + "|".join(str(serial) for serial in serial_numbers or [])
