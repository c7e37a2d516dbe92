# Address statement pipeline
from app.statement.amounts import format_units
from app.statement.assembler import assemble
from app.statement.classifier import TRANSFER_SHAPES, address_filters, classify
from app.statement.ledger import EvmLedgerBuilder, NativeLedgerBuilder
from app.statement.metadata import TokenMetadataResolver

__all__ = [
    "TRANSFER_SHAPES",
    "address_filters",
    "assemble",
    "classify",
    "EvmLedgerBuilder",
    "format_units",
    "NativeLedgerBuilder",
    "TokenMetadataResolver",
]
