"""EVM transactions and their decoded log events."""

from typing import List

from sqlalchemy import BigInteger, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base


class EvmTransaction(Base):
    __tablename__ = "evm_transactions"

    hash: Mapped[str] = mapped_column(String(66), primary_key=True)

    block_number: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)

    # Milliseconds since epoch (unlike native events, which are in seconds)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)

    from_address: Mapped[str] = mapped_column(String(42), nullable=False, index=True)
    to_address: Mapped[str | None] = mapped_column(String(42), nullable=True, index=True)

    value: Mapped[str] = mapped_column(String(80), nullable=False, default="0")
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="success")

    events: Mapped[List["EvmTransactionEvent"]] = relationship(
        back_populates="transaction",
        order_by="EvmTransactionEvent.log_index",
        lazy="selectin",
    )


class EvmTransactionEvent(Base):
    """One decoded log. Token fields are denormalized at indexing time."""

    __tablename__ = "evm_transaction_events"

    transaction_hash: Mapped[str] = mapped_column(
        String(66),
        ForeignKey("evm_transactions.hash", ondelete="CASCADE"),
        primary_key=True,
    )
    log_index: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)

    event_name: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    from_address: Mapped[str | None] = mapped_column(String(42), nullable=True, index=True)
    to_address: Mapped[str | None] = mapped_column(String(42), nullable=True, index=True)

    contract_address: Mapped[str | None] = mapped_column(String(42), nullable=True)
    token_type: Mapped[str | None] = mapped_column(String(16), nullable=True)  # ERC20 | ERC721 | ERC1155

    name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    symbol: Mapped[str | None] = mapped_column(String(50), nullable=True)

    amount: Mapped[str | None] = mapped_column(String(80), nullable=True)
    formatted_amount: Mapped[str | None] = mapped_column(String(100), nullable=True)
    token_id: Mapped[str | None] = mapped_column(String(80), nullable=True)

    transaction: Mapped[EvmTransaction] = relationship(back_populates="events")
