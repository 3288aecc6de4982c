# tests/test_assets.py
import pytest

from chainview.explorer.assets import AssetResolver

from conftest import GAS, NEO, UNKNOWN_ASSET, seed_assets


class TestAssetResolver:
    @pytest.fixture
    def resolver(self, store):
        seed_assets(store)
        return AssetResolver(store)

    def test_known_assets_use_aliased_english_name(self, resolver):
        assert resolver.resolve_name(NEO) == "NEO"
        assert resolver.resolve_name(GAS) == "GAS"

    def test_unknown_asset_returns_id(self, resolver):
        assert resolver.resolve_name(UNKNOWN_ASSET) == UNKNOWN_ASSET

    def test_resolve_names_batches_one_query(self, store, mocker):
        seed_assets(store)
        resolver = AssetResolver(store)
        spy = mocker.spy(store, "get_assets_by_ids")

        names = resolver.resolve_names([NEO, GAS, NEO, UNKNOWN_ASSET])

        assert names == {NEO: "NEO", GAS: "GAS", UNKNOWN_ASSET: UNKNOWN_ASSET}
        assert spy.call_count == 1

    def test_display_name_fallbacks(self, store):
        resolver = AssetResolver(store, aliases={})
        assert resolver.display_name([{"lang": "zh-CN", "name": "小蚁股"}, {"lang": "en", "name": "AntShare"}]) == "AntShare"
        assert resolver.display_name([{"lang": "zh-CN", "name": "小蚁币"}]) == "小蚁币"
        assert resolver.display_name([]) is None

    def test_asset_without_names_resolves_to_id(self, store):
        store.insert_asset({"txid": "bare", "type": "Token", "precision": 2, "name": []})
        assert AssetResolver(store).resolve_name("bare") == "bare"

    def test_resolution_is_stable(self, resolver):
        first = resolver.resolve_names([NEO, UNKNOWN_ASSET])
        second = resolver.resolve_names([NEO, UNKNOWN_ASSET])
        assert first == second
