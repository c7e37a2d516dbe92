"""SQLAlchemy-backed query interfaces consumed by the statement pipeline.

Every store method translates driver failures into ``StoreUnavailableError``;
callers never see raw ``SQLAlchemyError``.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from sqlalchemy import and_, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import StoreUnavailableError
from app.core.logging import get_logger
from app.models.event import Event
from app.models.evm import EvmTransaction, EvmTransactionEvent
from app.models.token import Token
from app.schemas.statement import EvmTransfer, RawEvent, TokenMetadata

log = get_logger("stores")

TRANSFER_EVENT = "Transfer"


def arg_equals_address(field: str, address: str):
    """Case-insensitive match of ``events.args[field]`` against an address."""
    return func.lower(Event.args[field].as_string()) == address.lower()


class EventStore:
    """Native extrinsic events."""

    def __init__(self, db: Session):
        self.db = db

    def find(
        self,
        filters: Sequence[Tuple[str, str, str]],
        address: str,
        start_ts: int,
        end_ts: int,
    ) -> List[RawEvent]:
        """Events in ``[start_ts, end_ts]`` matching any (section, method, args field == address) filter."""
        if not filters:
            return []

        clauses = [
            and_(Event.section == section, Event.method == method, arg_equals_address(field, address))
            for section, method, field in filters
        ]
        stmt = (
            select(Event)
            .where(Event.timestamp >= start_ts, Event.timestamp <= end_ts)
            .where(or_(*clauses))
            .order_by(Event.timestamp.desc(), Event.block_number.desc(), Event.event_id.asc())
        )

        try:
            events = self.db.execute(stmt).scalars().all()
        except SQLAlchemyError as exc:
            log.error(f"Event store query failed: {exc}")
            raise StoreUnavailableError("event", str(exc)) from exc

        return [
            RawEvent(
                section=event.section,
                method=event.method,
                args=event.args or {},
                timestamp=event.timestamp,
                extrinsic_id=event.extrinsic_id,
                event_id=event.event_id,
                block_number=event.block_number,
            )
            for event in events
        ]


class EvmTransactionStore:
    """EVM transactions, flattened to one record per matching log."""

    def __init__(self, db: Session):
        self.db = db

    def find_transfers(self, address: str, start_ms: int, end_ms: int) -> List[EvmTransfer]:
        lowered = address.lower()
        stmt = (
            select(EvmTransactionEvent, EvmTransaction.timestamp)
            .join(EvmTransaction, EvmTransaction.hash == EvmTransactionEvent.transaction_hash)
            .where(EvmTransaction.timestamp >= start_ms, EvmTransaction.timestamp <= end_ms)
            .where(EvmTransactionEvent.event_name == TRANSFER_EVENT)
            .where(
                or_(
                    func.lower(EvmTransactionEvent.from_address) == lowered,
                    func.lower(EvmTransactionEvent.to_address) == lowered,
                )
            )
            .order_by(EvmTransaction.timestamp.desc(), EvmTransactionEvent.log_index.asc())
        )

        try:
            results = self.db.execute(stmt).all()
        except SQLAlchemyError as exc:
            log.error(f"EVM transaction store query failed: {exc}")
            raise StoreUnavailableError("evm_transaction", str(exc)) from exc

        return [
            EvmTransfer(
                hash=sub_event.transaction_hash,
                timestamp=timestamp,
                event_name=sub_event.event_name,
                from_address=sub_event.from_address,
                to_address=sub_event.to_address,
                token_type=sub_event.token_type,
                name=sub_event.name,
                formatted_amount=sub_event.formatted_amount,
                token_id=sub_event.token_id,
            )
            for sub_event, timestamp in results
        ]


class TokenStore:
    """Token metadata keyed by asset id or collection id."""

    def __init__(self, db: Session):
        self.db = db

    def find_one(self, asset_id: int, is_collection: bool = False) -> Optional[TokenMetadata]:
        column = Token.collection_id if is_collection else Token.asset_id
        stmt = select(Token).where(column == asset_id).limit(1)

        try:
            token = self.db.execute(stmt).scalar_one_or_none()
        except SQLAlchemyError as exc:
            log.error(f"Token store query failed: {exc}")
            raise StoreUnavailableError("token", str(exc)) from exc

        if token is None:
            return None
        return TokenMetadata(name=token.name, decimals=token.decimals)
