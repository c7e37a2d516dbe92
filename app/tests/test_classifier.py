"""Event classifier tests"""

import pytest

from app.core.exceptions import MalformedEventError
from app.schemas.statement import ZERO_ADDRESS, Direction, TransferKind
from app.statement.classifier import TRANSFER_SHAPES, address_filters, classify, format_serial_numbers
from app.tests.conftest import ALICE, BOB, CAROL, native_event


class TestClassify:
    """(section, method) dispatch and field extraction"""

    @pytest.mark.parametrize(
        "section,method",
        [
            ("system", "ExtrinsicSuccess"),
            ("assets", "ApprovedTransfer"),
            ("nft", "Mint"),
            ("sft", "Transfer"),
            ("dex", "Swap"),
            ("balances", "Transferred"),
        ],
    )
    def test_unknown_pairs_are_skipped(self, section, method):
        assert classify(native_event(section, method, {"garbage": object()}), ALICE) is None

    def test_balances_transfer_out(self):
        transfer = classify(native_event("balances", "Transfer", {"from": ALICE, "to": BOB, "amount": "5"}), ALICE)
        assert transfer.direction is Direction.OUT
        assert transfer.asset_id == 1

    def test_balances_transfer_in(self):
        transfer = classify(native_event("balances", "Transfer", {"from": BOB, "to": ALICE, "amount": "5"}), ALICE)
        assert transfer.direction is Direction.IN

    def test_direction_ignores_address_case(self):
        mixed = "0xAbCdEf0000000000000000000000000000000001"
        event = native_event("assets", "Transferred", {"assetId": 2, "from": mixed, "to": BOB, "amount": "5"})
        assert classify(event, mixed.lower()).direction is Direction.OUT

    def test_native_asset_id_is_configurable(self):
        event = native_event("balances", "Reserved", {"who": ALICE, "amount": "5"})
        assert classify(event, ALICE, native_asset_id=7).asset_id == 7

    def test_assets_transferred(self):
        event = native_event("assets", "Transferred", {"assetId": "2", "from": BOB, "to": ALICE, "amount": "99"})
        transfer = classify(event, ALICE)
        assert transfer.kind is TransferKind.TRANSFER
        assert transfer.asset_id == 2
        assert transfer.raw_amount == "99"
        assert (transfer.from_address, transfer.to_address) == (BOB, ALICE)

    def test_issued_credits_owner(self):
        event = native_event("assets", "Issued", {"assetId": 3, "owner": ALICE, "totalSupply": "10"})
        transfer = classify(event, ALICE)
        assert transfer.kind is TransferKind.ISSUANCE
        assert transfer.from_address == ZERO_ADDRESS
        assert transfer.direction is Direction.IN
        assert transfer.raw_amount == "10"

    def test_issued_matched_by_source_has_unknown_direction(self):
        event = native_event("assets", "Issued", {"assetId": 3, "owner": BOB, "source": ALICE, "totalSupply": "10"})
        assert classify(event, ALICE).direction is Direction.UNKNOWN

    def test_burned_debits_owner(self):
        event = native_event("assets", "Burned", {"assetId": 3, "owner": ALICE, "balance": "4"})
        transfer = classify(event, ALICE)
        assert transfer.kind is TransferKind.BURN
        assert transfer.to_address == ZERO_ADDRESS
        assert transfer.direction is Direction.OUT
        assert transfer.raw_amount == "4"

    def test_reserved_is_outbound(self):
        transfer = classify(native_event("balances", "Reserved", {"who": ALICE, "amount": "4"}), ALICE)
        assert transfer.kind is TransferKind.RESERVE
        assert transfer.direction is Direction.OUT

    def test_unreserved_is_inbound(self):
        transfer = classify(native_event("balances", "Unreserved", {"who": ALICE, "amount": "4"}), ALICE)
        assert transfer.kind is TransferKind.UNRESERVE
        assert transfer.from_address == ZERO_ADDRESS
        assert transfer.direction is Direction.IN

    def test_nft_transfer_uses_collection_namespace(self):
        event = native_event(
            "nft",
            "Transfer",
            {"collectionId": 1, "previousOwner": ALICE, "newOwner": CAROL, "serialNumbers": [4, 9]},
        )
        transfer = classify(event, CAROL)
        assert transfer.kind is TransferKind.NFT_TRANSFER
        assert transfer.is_collection is True
        assert transfer.asset_id == 1
        assert transfer.serial_numbers == [4, 9]
        assert transfer.direction is Direction.IN

    def test_non_integral_asset_id(self):
        event = native_event("assets", "Transferred", {"assetId": "abc", "from": ALICE, "to": BOB, "amount": "1"})
        assert classify(event, ALICE).asset_id is None

    @pytest.mark.parametrize("asset_id,expected", [(1.9, None), (2.0, 2), ("3", 3)])
    def test_float_asset_id_is_not_truncated(self, asset_id, expected):
        event = native_event("assets", "Transferred", {"assetId": asset_id, "from": ALICE, "to": BOB, "amount": "1"})
        assert classify(event, ALICE).asset_id == expected

    def test_non_string_counterparty_is_malformed(self):
        event = native_event("assets", "Transferred", {"assetId": 1, "from": {"id": 5}, "to": ALICE, "amount": "1"})
        with pytest.raises(MalformedEventError):
            classify(event, ALICE)

    def test_serial_numbers_must_be_a_list(self):
        event = native_event(
            "nft",
            "Transfer",
            {"collectionId": 1, "previousOwner": ALICE, "newOwner": BOB, "serialNumbers": "12"},
        )
        with pytest.raises(MalformedEventError):
            classify(event, ALICE)


class TestAddressFilters:
    def test_filters_cover_every_shape(self):
        pairs = {(section, method) for section, method, _ in address_filters()}
        assert pairs == set(TRANSFER_SHAPES)

    def test_filters_include_party_fields(self):
        filters = set(address_filters())
        assert ("assets", "Transferred", "from") in filters
        assert ("assets", "Transferred", "to") in filters
        assert ("assets", "Issued", "source") in filters
        assert ("balances", "Reserved", "who") in filters
        assert ("nft", "Transfer", "previousOwner") in filters
        assert ("nft", "Transfer", "newOwner") in filters


def test_serial_numbers_prefix():
    assert format_serial_numbers([1, 2, 3]) == "TokenIds: 1|2|3"
    assert format_serial_numbers(None).startswith("TokenIds: ")
