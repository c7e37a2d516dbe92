"""Shared test fixtures for the explorer backend."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("RUN_MIGRATIONS", "false")

from typing import Dict, List, Optional, Tuple  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.models import Base, Block, Event, EvmTransaction, EvmTransactionEvent, Extrinsic, Token  # noqa: E402
from app.schemas.statement import EvmTransfer, RawEvent, TokenMetadata  # noqa: E402

ALICE = "0x1111111111111111111111111111111111111111"
BOB = "0x2222222222222222222222222222222222222222"
CAROL = "0x3333333333333333333333333333333333333333"

# 2024-01-15T12:00:00Z
JAN_15_NOON = 1705320000
# 2024-01-31T23:59:59Z, last second of the month
JAN_31_LAST_SECOND = 1706745599


class FakeEventStore:
    """Records every query and returns canned events."""

    def __init__(self, events: Optional[List[RawEvent]] = None):
        self.events = events or []
        self.calls: List[Tuple[str, int, int]] = []

    def find(self, filters, address, start_ts, end_ts):
        self.calls.append((address, start_ts, end_ts))
        return list(self.events)


class FakeEvmStore:
    def __init__(self, transfers: Optional[List[EvmTransfer]] = None):
        self.transfers = transfers or []
        self.calls: List[Tuple[str, int, int]] = []

    def find_transfers(self, address, start_ms, end_ms):
        self.calls.append((address, start_ms, end_ms))
        return list(self.transfers)


class FakeTokenStore:
    def __init__(self, tokens: Optional[Dict[Tuple[int, bool], TokenMetadata]] = None):
        self.tokens = dict(tokens or {})
        self.calls: List[Tuple[int, bool]] = []

    def find_one(self, asset_id, is_collection=False):
        self.calls.append((asset_id, is_collection))
        return self.tokens.get((asset_id, is_collection))


def native_event(section: str, method: str, args: dict, timestamp: int = JAN_15_NOON, extrinsic_id: str = "100-1") -> RawEvent:
    return RawEvent(
        section=section,
        method=method,
        args=args,
        timestamp=timestamp,
        extrinsic_id=extrinsic_id,
        event_id=f"{extrinsic_id}-{section}-{method}",
        block_number=100,
    )


@pytest.fixture
def root_token() -> TokenMetadata:
    return TokenMetadata(name="ROOT", decimals=18)


@pytest.fixture
def token_store(root_token: TokenMetadata) -> FakeTokenStore:
    return FakeTokenStore(
        {
            (1, False): root_token,
            (2, False): TokenMetadata(name="XRP", decimals=6),
            (1, True): TokenMetadata(name="Root Punks"),
        }
    )


# -----------------------------------------------------------------------------
# SQLite-backed store
# -----------------------------------------------------------------------------


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine) -> Session:
    session = sessionmaker(bind=engine, expire_on_commit=False)()
    yield session
    session.close()


@pytest.fixture
def seeded_db(db_session: Session) -> Session:
    """A small chain: two blocks, native transfers, tokens and one EVM transaction."""
    db_session.add_all(
        [
            Block(number=100, hash="0x" + "a" * 64, timestamp=JAN_15_NOON, extrinsics_count=2, events_count=4),
            Block(number=101, hash="0x" + "b" * 64, parent_hash="0x" + "a" * 64, timestamp=JAN_15_NOON + 4),
            Extrinsic(
                extrinsic_id="100-1",
                retro_extrinsic_id="0000000100-000001-abcde",
                block=100,
                timestamp=JAN_15_NOON,
                section="assets",
                method="transfer",
                signer=ALICE,
                is_signed=True,
                args={"id": 2, "target": BOB, "amount": "2500000"},
            ),
            Event(
                event_id="100-1-0",
                extrinsic_id="100-1",
                block_number=100,
                timestamp=JAN_15_NOON,
                section="assets",
                method="Transferred",
                args={"assetId": 2, "from": ALICE, "to": BOB, "amount": "2500000"},
            ),
            Event(
                event_id="100-1-1",
                extrinsic_id="100-1",
                block_number=100,
                timestamp=JAN_15_NOON,
                section="system",
                method="ExtrinsicSuccess",
                args={},
            ),
            Event(
                event_id="101-1-0",
                extrinsic_id="101-1",
                block_number=101,
                timestamp=JAN_15_NOON + 4,
                section="balances",
                method="Transfer",
                args={"from": BOB, "to": ALICE, "amount": "1000000000000000000"},
            ),
            Event(
                event_id="101-1-1",
                extrinsic_id="101-1",
                block_number=101,
                timestamp=JAN_15_NOON + 4,
                section="nft",
                method="Transfer",
                args={"collectionId": 1, "previousOwner": ALICE, "newOwner": CAROL, "serialNumbers": [4, 9]},
            ),
            Token(contract_address="0xCCCCcCCc00000001000000000000000000000000", asset_id=1, name="ROOT", decimals=6, type="ERC20"),
            Token(contract_address="0xCCCCcCCc00000002000000000000000000000000", asset_id=2, name="XRP", decimals=6, type="ERC20"),
            Token(contract_address="0xAAAAAAAA00000001000000000000000000000000", collection_id=1, name="Root Punks", type="ERC721"),
            EvmTransaction(
                hash="0x" + "e" * 64,
                block_number=101,
                timestamp=(JAN_15_NOON + 4) * 1000,
                from_address=ALICE,
                to_address="0xCCCCcCCc00000002000000000000000000000000",
            ),
        ]
    )
    db_session.flush()
    db_session.add_all(
        [
            EvmTransactionEvent(
                transaction_hash="0x" + "e" * 64,
                log_index=0,
                event_name="Approval",
                from_address=ALICE,
                to_address=BOB,
                token_type="ERC20",
                name="XRP",
            ),
            EvmTransactionEvent(
                transaction_hash="0x" + "e" * 64,
                log_index=1,
                event_name="Transfer",
                from_address=ALICE,
                to_address=BOB,
                contract_address="0xCCCCcCCc00000002000000000000000000000000",
                token_type="ERC20",
                name="XRP",
                symbol="XRP",
                amount="1500000",
                formatted_amount="1.5",
            ),
        ]
    )
    db_session.commit()
    return db_session
