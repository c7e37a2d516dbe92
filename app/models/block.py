"""Native chain blocks as written by the indexer."""

from sqlalchemy import BigInteger, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base


class Block(Base):
    __tablename__ = "blocks"

    number: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)

    hash: Mapped[str] = mapped_column(String(66), nullable=False, unique=True)
    parent_hash: Mapped[str | None] = mapped_column(String(66), nullable=True)

    # Seconds since epoch
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)

    extrinsics_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    events_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    spec_version: Mapped[int | None] = mapped_column(Integer, nullable=True)
