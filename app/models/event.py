"""Events emitted while executing extrinsics.

``args`` holds the decoded event payload whose shape depends on the
(section, method) pair, e.g. ``assets.Transferred`` carries
``assetId``/``from``/``to``/``amount``.
"""

from sqlalchemy import BigInteger, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, JSONType


class Event(Base):
    __tablename__ = "events"

    event_id: Mapped[str] = mapped_column(String(64), primary_key=True)

    extrinsic_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    block_number: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)

    # Seconds since epoch
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)

    section: Mapped[str] = mapped_column(String(64), nullable=False)
    method: Mapped[str] = mapped_column(String(64), nullable=False)

    args: Mapped[dict] = mapped_column(JSONType, nullable=False, default=dict)

    __table_args__ = (Index("ix_events_section_method_timestamp", "section", "method", "timestamp"),)
