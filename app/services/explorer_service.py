"""Explorer Service - read-only queries over the indexed chain data."""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import and_, func, or_, select
from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.models.block import Block
from app.models.event import Event
from app.models.evm import EvmTransaction, EvmTransactionEvent
from app.models.extrinsic import Extrinsic
from app.models.token import Token
from app.services.stores import TRANSFER_EVENT, arg_equals_address
from app.statement.classifier import address_filters

log = get_logger("explorer_service")

# e.g. "0004543210-000002-a1b2c"
RETRO_EXTRINSIC_ID = re.compile(r"^\d{10}-\d{6}-[0-9a-f]{5}$")


def page_offset(page: int, limit: int) -> int:
    return (max(page, 1) - 1) * limit


class ExtrinsicNotFound(LookupError):
    """Raised when a retro extrinsic id does not resolve to an extrinsic."""


class ExplorerService:
    """Handles all explorer query operations - reads from DB only, no writes."""

    def __init__(self, db: Session):
        self.db = db

    # -------------------------------------------------------------------------
    # Blocks
    # -------------------------------------------------------------------------
    def get_blocks(self, page: int = 1, limit: int = 25) -> List[Block]:
        stmt = select(Block).order_by(Block.number.desc()).limit(limit).offset(page_offset(page, limit))
        return list(self.db.execute(stmt).scalars().all())

    def get_block(self, number: int) -> Optional[Block]:
        return self.db.get(Block, number)

    def get_latest_block(self) -> Optional[Block]:
        stmt = select(Block).order_by(Block.number.desc()).limit(1)
        return self.db.execute(stmt).scalar_one_or_none()

    # -------------------------------------------------------------------------
    # Events & Extrinsics
    # -------------------------------------------------------------------------
    def resolve_extrinsic_id(self, extrinsic_id: str) -> str:
        """Map a retro extrinsic id onto the canonical one; other ids pass through."""
        if not RETRO_EXTRINSIC_ID.match(extrinsic_id):
            return extrinsic_id

        stmt = select(Extrinsic.extrinsic_id).where(Extrinsic.retro_extrinsic_id == extrinsic_id)
        canonical = self.db.execute(stmt).scalar_one_or_none()
        if canonical is None:
            raise ExtrinsicNotFound(extrinsic_id)
        return canonical

    def get_events(
        self,
        extrinsic_id: Optional[str] = None,
        page: int = 1,
        limit: int = 25,
    ) -> List[Event]:
        """Get events, newest block first, optionally scoped to one extrinsic."""
        stmt = select(Event)
        if extrinsic_id:
            stmt = stmt.where(Event.extrinsic_id == self.resolve_extrinsic_id(extrinsic_id))

        stmt = stmt.order_by(Event.block_number.desc(), Event.event_id.asc())
        stmt = stmt.limit(limit).offset(page_offset(page, limit))
        return list(self.db.execute(stmt).scalars().all())

    def get_event(self, event_id: str) -> Optional[Event]:
        return self.db.get(Event, event_id)

    def get_extrinsic(self, extrinsic_id: str) -> Optional[Tuple[Extrinsic, List[Event]]]:
        """Get an extrinsic by canonical or retro id, along with its events."""
        stmt = select(Extrinsic).where(
            or_(Extrinsic.extrinsic_id == extrinsic_id, Extrinsic.retro_extrinsic_id == extrinsic_id)
        )
        extrinsic = self.db.execute(stmt).scalars().first()
        if extrinsic is None:
            return None

        events_stmt = (
            select(Event).where(Event.extrinsic_id == extrinsic.extrinsic_id).order_by(Event.event_id.asc())
        )
        return extrinsic, list(self.db.execute(events_stmt).scalars().all())

    def get_native_transfers(self, address: str, page: int = 1, limit: int = 25) -> List[Event]:
        """Value-moving native events touching ``address``, newest first."""
        clauses = [
            and_(Event.section == section, Event.method == method, arg_equals_address(field, address))
            for section, method, field in address_filters()
        ]
        stmt = (
            select(Event)
            .where(or_(*clauses))
            .order_by(Event.block_number.desc(), Event.event_id.asc())
            .limit(limit)
            .offset(page_offset(page, limit))
        )
        return list(self.db.execute(stmt).scalars().all())

    # -------------------------------------------------------------------------
    # Tokens
    # -------------------------------------------------------------------------
    def get_tokens(self, token_type: Optional[str] = None, page: int = 1, limit: int = 25) -> List[Token]:
        stmt = select(Token)
        if token_type:
            stmt = stmt.where(Token.type == token_type)
        stmt = stmt.order_by(Token.asset_id.asc(), Token.collection_id.asc(), Token.contract_address.asc())
        stmt = stmt.limit(limit).offset(page_offset(page, limit))
        return list(self.db.execute(stmt).scalars().all())

    def get_token(self, contract_address: str) -> Optional[Token]:
        stmt = select(Token).where(func.lower(Token.contract_address) == contract_address.lower())
        return self.db.execute(stmt).scalar_one_or_none()

    # -------------------------------------------------------------------------
    # EVM Transactions
    # -------------------------------------------------------------------------
    def get_transaction(self, tx_hash: str) -> Optional[EvmTransaction]:
        stmt = select(EvmTransaction).where(func.lower(EvmTransaction.hash) == tx_hash.lower())
        return self.db.execute(stmt).scalar_one_or_none()

    def get_transactions_for_address(self, address: str, page: int = 1, limit: int = 25) -> List[EvmTransaction]:
        lowered = address.lower()
        stmt = (
            select(EvmTransaction)
            .where(
                or_(
                    func.lower(EvmTransaction.from_address) == lowered,
                    func.lower(EvmTransaction.to_address) == lowered,
                )
            )
            .order_by(EvmTransaction.block_number.desc())
            .limit(limit)
            .offset(page_offset(page, limit))
        )
        return list(self.db.execute(stmt).scalars().all())

    def get_token_transfers(self, address: str, page: int = 1, limit: int = 25) -> List[Dict[str, Any]]:
        """Transfer logs touching ``address``, merged with their parent transaction fields."""
        lowered = address.lower()
        stmt = (
            select(EvmTransactionEvent, EvmTransaction.block_number, EvmTransaction.timestamp)
            .join(EvmTransaction, EvmTransaction.hash == EvmTransactionEvent.transaction_hash)
            .where(EvmTransactionEvent.event_name == TRANSFER_EVENT)
            .where(
                or_(
                    func.lower(EvmTransactionEvent.from_address) == lowered,
                    func.lower(EvmTransactionEvent.to_address) == lowered,
                )
            )
            .order_by(EvmTransaction.block_number.desc(), EvmTransactionEvent.log_index.asc())
            .limit(limit)
            .offset(page_offset(page, limit))
        )

        return [
            {
                "hash": sub_event.transaction_hash,
                "block_number": block_number,
                "timestamp": timestamp,
                "log_index": sub_event.log_index,
                "from_address": sub_event.from_address,
                "to_address": sub_event.to_address,
                "contract_address": sub_event.contract_address,
                "token_type": sub_event.token_type,
                "name": sub_event.name,
                "symbol": sub_event.symbol,
                "amount": sub_event.amount,
                "formatted_amount": sub_event.formatted_amount,
                "token_id": sub_event.token_id,
            }
            for sub_event, block_number, timestamp in self.db.execute(stmt).all()
        ]

    # -------------------------------------------------------------------------
    # Aggregation
    # -------------------------------------------------------------------------
    def get_chain_summary(self) -> Dict[str, Any]:
        latest = self.get_latest_block()
        return {
            "latest_block": latest.number if latest else None,
            "signed_extrinsics": self.db.execute(
                select(func.count()).select_from(Extrinsic).where(Extrinsic.is_signed.is_(True))
            ).scalar() or 0,
            "evm_transactions": self.db.execute(select(func.count()).select_from(EvmTransaction)).scalar() or 0,
            "tokens": self.db.execute(select(func.count()).select_from(Token)).scalar() or 0,
        }
