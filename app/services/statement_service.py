"""Statement Service - address activity statements over a date range."""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import date, datetime, time as dt_time, timedelta, timezone
from typing import Optional, Union

from sqlalchemy.orm import Session
from web3 import Web3

from app.core.config import settings
from app.core.exceptions import InvalidInputError
from app.core.logging import get_logger
from app.services.stores import EventStore, EvmTransactionStore, TokenStore
from app.statement.assembler import assemble
from app.statement.ledger import EventSource, EvmLedgerBuilder, EvmTransferSource, NativeLedgerBuilder
from app.statement.metadata import TokenLookup, TokenMetadataResolver

log = get_logger("statement_service")

DateInput = Union[str, date, datetime]

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class ReportWindow:
    """Inclusive report window.

    ``end`` is the last millisecond of the ``to`` day and bounds native events.
    ``until`` is ``to`` exactly as given and bounds EVM transactions.
    """

    start: datetime
    end: datetime
    until: datetime

    @property
    def start_ms(self) -> int:
        return (self.start - EPOCH) // timedelta(milliseconds=1)

    @property
    def end_ms(self) -> int:
        return (self.end - EPOCH) // timedelta(milliseconds=1)

    @property
    def until_ms(self) -> int:
        return (self.until - EPOCH) // timedelta(milliseconds=1)

    @property
    def start_ts(self) -> int:
        return self.start_ms // 1000

    @property
    def end_ts(self) -> int:
        return self.end_ms // 1000


def normalize_address(address: Optional[str]) -> str:
    """Checksum an EVM address, rejecting anything that is not 20 hex bytes."""
    if not address or not Web3.is_address(address):
        raise InvalidInputError("address", f"{address!r} is not a valid address")
    return Web3.to_checksum_address(address)


def parse_date(value: Optional[DateInput], field: str) -> datetime:
    """Parse an ISO-8601 string, date or datetime. Naive values are taken as UTC."""
    if value is None or value == "":
        raise InvalidInputError(field, "date is required")

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, dt_time.min)
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError as exc:
            raise InvalidInputError(field, f"{value!r} is not an ISO-8601 date") from exc
    else:
        raise InvalidInputError(field, f"unsupported date type {type(value).__name__}")

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def build_window(from_date: Optional[DateInput], to_date: Optional[DateInput]) -> ReportWindow:
    start = parse_date(from_date, "from")
    to = parse_date(to_date, "to")
    if start > to:
        raise InvalidInputError("from", "from date cannot be after to date")

    end = datetime.combine(to.date(), dt_time.max, tzinfo=timezone.utc).replace(microsecond=999000)
    return ReportWindow(start=start, end=end, until=to)


class StatementService:
    """Generates address statements from native events and EVM transfers.

    Stores are injected so the pipeline can run against any backend; the
    metadata cache is created per ``generate_report`` call and never shared.
    """

    def __init__(
        self,
        event_store: EventSource,
        evm_store: EvmTransferSource,
        token_store: TokenLookup,
        native_asset_id: Optional[int] = None,
    ):
        self.event_store = event_store
        self.evm_store = evm_store
        self.token_store = token_store
        self.native_asset_id = settings.NATIVE_ASSET_ID if native_asset_id is None else native_asset_id

    @classmethod
    def from_session(cls, db: Session) -> "StatementService":
        return cls(EventStore(db), EvmTransactionStore(db), TokenStore(db))

    def generate_report(
        self,
        address: Optional[str],
        from_date: Optional[DateInput],
        to_date: Optional[DateInput],
    ) -> str:
        """Return the statement text for ``address`` over ``[from_date, end of to_date]``.

        Raises InvalidInputError before touching any store, and lets
        StoreUnavailableError propagate unchanged.
        """
        checksummed = normalize_address(address)
        window = build_window(from_date, to_date)

        started = time.perf_counter()
        resolver = TokenMetadataResolver(self.token_store)

        native_builder = NativeLedgerBuilder(self.event_store, resolver, self.native_asset_id)
        native_rows = native_builder.build(checksummed, window.start_ts, window.end_ts)

        evm_rows = EvmLedgerBuilder(self.evm_store).build(checksummed, window.start_ms, window.until_ms)

        report = assemble(native_rows, evm_rows)

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        log.info(
            f"Report for {checksummed} [{window.start.isoformat()} .. {window.end.isoformat()}] | "
            f"native={len(native_rows)} evm={len(evm_rows)} dropped={native_builder.dropped} "
            f"token_queries={resolver.queries} cached_tokens={resolver.cached} elapsed_ms={elapsed_ms}"
        )
        return report
