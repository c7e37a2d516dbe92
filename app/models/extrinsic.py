"""Native chain extrinsics (signed or inherent transactions)."""

from sqlalchemy import BigInteger, Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, JSONType


class Extrinsic(Base):
    __tablename__ = "extrinsics"

    extrinsic_id: Mapped[str] = mapped_column(String(64), primary_key=True)

    # Human-facing id, e.g. "0004543210-000002-a1b2c"
    retro_extrinsic_id: Mapped[str | None] = mapped_column(String(64), nullable=True, unique=True, index=True)

    block: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)

    section: Mapped[str] = mapped_column(String(64), nullable=False)
    method: Mapped[str] = mapped_column(String(64), nullable=False)

    signer: Mapped[str | None] = mapped_column(String(42), nullable=True, index=True)
    is_signed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    success: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    args: Mapped[dict] = mapped_column(JSONType, nullable=False, default=dict)
