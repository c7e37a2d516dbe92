"""Ledger builders for native events and EVM transfers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import List, Optional, Protocol, Sequence, Tuple

from app.core.exceptions import LedgerRowError, MetadataNotFoundError
from app.core.logging import get_logger
from app.schemas.statement import (
    ClassifiedTransfer,
    Direction,
    EvmTransfer,
    LedgerRow,
    RawEvent,
    TransferKind,
)
from app.statement.amounts import format_units
from app.statement.classifier import address_filters, classify, format_serial_numbers, same_address
from app.statement.metadata import TokenMetadataResolver

log = get_logger("statement.ledger")

ERC20 = "ERC20"


class EventSource(Protocol):
    def find(self, filters: Sequence[Tuple[str, str, str]], address: str, start_ts: int, end_ts: int) -> List[RawEvent]:
        ...


class EvmTransferSource(Protocol):
    def find_transfers(self, address: str, start_ms: int, end_ms: int) -> List[EvmTransfer]:
        ...


def iso_timestamp(epoch_ms: int) -> str:
    """Millisecond epoch -> ``2024-01-31T12:00:00.000Z``."""
    moment = datetime(1970, 1, 1, tzinfo=timezone.utc) + timedelta(milliseconds=epoch_ms)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class NativeLedgerBuilder:
    """Turns native extrinsic events into ledger rows."""

    def __init__(self, event_store: EventSource, resolver: TokenMetadataResolver, native_asset_id: int = 1):
        self.event_store = event_store
        self.resolver = resolver
        self.native_asset_id = native_asset_id
        self.dropped = 0

    def build(self, address: str, start_ts: int, end_ts: int) -> List[LedgerRow]:
        events = self.event_store.find(address_filters(), address, start_ts, end_ts)
        rows: List[LedgerRow] = []

        for event in events:
            try:
                transfer = classify(event, address, self.native_asset_id)
                if transfer is None:
                    continue
                rows.append(self._to_row(event, transfer))
            except LedgerRowError as exc:
                self.dropped += 1
                log.debug(f"Dropping {event.section}.{event.method} ({event.event_id or event.extrinsic_id}): {exc}")

        log.info(f"Native ledger for {address}: events={len(events)} rows={len(rows)} dropped={self.dropped}")
        return rows

    def _to_row(self, event: RawEvent, transfer: ClassifiedTransfer) -> LedgerRow:
        token = None
        if transfer.asset_id is not None:
            token = self.resolver.resolve(transfer.asset_id, transfer.is_collection)
        if token is None:
            raise MetadataNotFoundError(transfer.asset_id, transfer.is_collection)

        if transfer.kind is TransferKind.NFT_TRANSFER:
            amount = format_serial_numbers(transfer.serial_numbers)
        else:
            if token.decimals is None:
                raise MetadataNotFoundError(transfer.asset_id, transfer.is_collection)
            amount = format_units(transfer.raw_amount, token.decimals)

        return LedgerRow(
            date=iso_timestamp(event.timestamp * 1000),
            tx_ref=event.extrinsic_id or "-",
            direction=transfer.direction,
            amount=amount,
            currency=token.name,
            from_address=transfer.from_address,
            to_address=transfer.to_address,
        )


class EvmLedgerBuilder:
    """Turns flattened EVM ``Transfer`` logs into ledger rows."""

    def __init__(self, evm_store: EvmTransferSource):
        self.evm_store = evm_store

    def build(self, address: str, start_ms: int, end_ms: int) -> List[LedgerRow]:
        transfers = self.evm_store.find_transfers(address, start_ms, end_ms)
        rows = [self._to_row(address, transfer) for transfer in transfers]
        log.info(f"EVM ledger for {address}: rows={len(rows)}")
        return rows

    @staticmethod
    def _to_row(address: str, transfer: EvmTransfer) -> LedgerRow:
        direction = Direction.OUT if same_address(transfer.from_address, address) else Direction.IN
        amount: Optional[str] = transfer.formatted_amount if transfer.token_type == ERC20 else transfer.token_id
        return LedgerRow(
            date=iso_timestamp(transfer.timestamp),
            tx_ref=transfer.hash,
            direction=direction,
            amount=amount or "",
            currency=transfer.name or "",
            from_address=transfer.from_address or "",
            to_address=transfer.to_address or "",
        )
