"""Token metadata for fungible assets and NFT collections.

Native assets are addressed by ``asset_id`` and NFT/SFT collections by
``collection_id``. The two are separate namespaces: the same integer can be
both a valid asset id and a valid collection id.
"""

from decimal import Decimal

from sqlalchemy import BigInteger, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base


class Token(Base):
    __tablename__ = "tokens"

    contract_address: Mapped[str] = mapped_column(String(42), primary_key=True)

    asset_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True, index=True)
    collection_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True, index=True)

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    symbol: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Only meaningful for ERC20
    decimals: Mapped[int | None] = mapped_column(Integer, nullable=True)

    type: Mapped[str] = mapped_column(String(16), nullable=False, index=True)  # ERC20 | ERC721 | ERC1155

    total_supply: Mapped[Decimal | None] = mapped_column(Numeric, nullable=True)
