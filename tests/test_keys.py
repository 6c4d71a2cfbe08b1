"""Tests for metadata key derivation."""

import pytest

from adapters.protocols import Protocol
from config.chains import Chain
from metadata.keys import (
    MetadataKey,
    metadata_file_path,
    metadata_identifier,
    metadata_key,
    pascal_case,
)


class TestPascalCase:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("stable-debt-token", "StableDebtToken"),
            ("stable-debt-token-v2", "StableDebtTokenV2"),
            ("a-token", "AToken"),
            ("supply_market", "SupplyMarket"),
            ("aToken", "AToken"),
            ("USDC", "Usdc"),
            ("pool", "Pool"),
        ],
    )
    def test_words(self, value, expected):
        assert pascal_case(value) == expected


class TestKeyDerivation:
    def test_aave_v2_stable_debt_token(self):
        args = (Protocol.AaveV2, "stable-debt-token", Chain.Ethereum, "stable-debt-token-v2")
        assert (
            metadata_file_path(*args)
            == "adapters/aave-v2/products/stable-debt-token/metadata/ethereum.stable-debt-token-v2.json"
        )
        assert metadata_identifier(*args) == "AaveV2StableDebtTokenEthereumStableDebtTokenV2"

    def test_derivation_is_stable(self):
        args = ("aave-v2", "stable-debt-token", 1, "stable-debt-token-v2")
        paths = {metadata_file_path(*args) for _ in range(5)}
        identifiers = {metadata_identifier(*args) for _ in range(5)}
        assert len(paths) == 1
        assert len(identifiers) == 1

    def test_chain_name_used_in_path(self):
        path = metadata_file_path(Protocol.AaveV2, "a-token", Chain.Polygon, "a-token-v2")
        assert path.endswith("/metadata/matic.a-token-v2.json")
        assert metadata_identifier(Protocol.AaveV2, "a-token", Chain.Polygon, "a-token-v2") == (
            "AaveV2ATokenPolygonATokenV2"
        )

    def test_identifier_only_keeps_letters_and_digits(self):
        assert metadata_identifier(Protocol.AaveV2, "pool!", Chain.Ethereum, "x") == "AaveV2PoolEthereumX"


class TestMetadataKey:
    def test_coerces_raw_values(self):
        key = metadata_key(protocol_id="aave-v2", product_id="a-token", chain_id=137, file_key="a-token-v2")
        assert key.protocol_id is Protocol.AaveV2
        assert key.chain_id is Chain.Polygon
        assert key == MetadataKey(Protocol.AaveV2, "a-token", Chain.Polygon, "a-token-v2")

    def test_hashable_and_usable_as_map_key(self):
        key = metadata_key(protocol_id=Protocol.AaveV2, product_id="a-token", chain_id=Chain.Ethereum, file_key="a-token-v2")
        same = metadata_key(protocol_id="aave-v2", product_id="a-token", chain_id=1, file_key="a-token-v2")
        assert {key: "x"}[same] == "x"

    def test_properties(self):
        key = metadata_key(protocol_id=Protocol.CompoundV2, product_id="supply-market", chain_id=Chain.Ethereum, file_key="supply-market")
        assert key.identifier == "CompoundV2SupplyMarketEthereumSupplyMarket"
        assert key.file_path == "adapters/compound-v2/products/supply-market/metadata/ethereum.supply-market.json"

    def test_unknown_protocol_rejected(self):
        with pytest.raises(ValueError):
            metadata_key(protocol_id="not-a-protocol", product_id="x", chain_id=1, file_key="y")
