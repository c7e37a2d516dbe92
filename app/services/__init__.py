# Services package
from app.services.explorer_service import ExplorerService
from app.services.statement_service import StatementService
from app.services.stores import EventStore, EvmTransactionStore, TokenStore

__all__ = [
    "ExplorerService",
    "StatementService",
    "EventStore",
    "EvmTransactionStore",
    "TokenStore",
]
