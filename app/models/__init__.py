from app.models.base import Base
from app.models.block import Block
from app.models.event import Event
from app.models.evm import EvmTransaction, EvmTransactionEvent
from app.models.extrinsic import Extrinsic
from app.models.token import Token

__all__ = [
    "Base",
    "Block",
    "Event",
    "EvmTransaction",
    "EvmTransactionEvent",
    "Extrinsic",
    "Token",
]
