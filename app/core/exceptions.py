"""Custom exceptions for the explorer backend."""

from typing import Any


class ExplorerError(Exception):
    """Base exception for explorer query and report errors."""


class InvalidInputError(ExplorerError):
    """Raised when caller-supplied parameters are malformed or inconsistent."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"Invalid '{field}': {message}")


class LedgerRowError(ExplorerError):
    """Base for per-row failures that drop a ledger row without aborting the report."""


class InvalidAmountError(LedgerRowError):
    """Raised when a raw amount is not a well-formed non-negative integer."""

    def __init__(self, value: Any, message: str = "not a non-negative integer"):
        self.value = value
        super().__init__(f"Invalid amount {value!r}: {message}")


class MalformedEventError(LedgerRowError):
    """Raised when a recognized event carries a field of the wrong shape."""

    def __init__(self, field: str, value: Any):
        self.field = field
        self.value = value
        super().__init__(f"Malformed event field {field!r}: {value!r}")


class MetadataNotFoundError(LedgerRowError):
    """Raised when an asset or collection has no token record."""

    def __init__(self, asset_id: Any, is_collection: bool):
        self.asset_id = asset_id
        self.is_collection = is_collection
        kind = "collection" if is_collection else "asset"
        super().__init__(f"No token metadata for {kind} {asset_id}")


class StoreUnavailableError(ExplorerError):
    """Raised when a backing store query fails."""

    def __init__(self, store: str, message: str):
        self.store = store
        super().__init__(f"{store} store unavailable: {message}")
