"""Serializes ledger rows into statement text."""

from __future__ import annotations

import csv
import io
from typing import Iterable

from app.schemas.statement import LedgerRow

HEADER = ["Date", "Tx Hash", "Type", "Amount", "Currency", "From", "To"]


def assemble(native_rows: Iterable[LedgerRow], evm_rows: Iterable[LedgerRow]) -> str:
    """Header, then native rows, then EVM rows. The two ledgers are not interleaved."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(HEADER)
    for row in native_rows:
        writer.writerow(row.as_record())
    for row in evm_rows:
        writer.writerow(row.as_record())
    return buffer.getvalue()
