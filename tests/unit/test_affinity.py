"""
test_affinity.py — Unit tests for endpoints/affinity.py

Affinities live in the key-value store; every test runs against a temp store.
"""

import json

import core.storage as storage
from core.config import STORAGE_AFFINITIES
from endpoints.affinity import load_affinities, record_affinity
from endpoints.directory import has_pair


class TestLoadAffinities:
    def test_empty_store(self, isolated_storage, sample_groups):
        assert load_affinities(sample_groups) == {}

    def test_keeps_matching_pairs(self, isolated_storage, sample_groups):
        storage.kv_set(STORAGE_AFFINITIES, {"Polkadot": "wss://polkadot.api.onfinality.me"})
        assert load_affinities(sample_groups) == {"Polkadot": "wss://polkadot.api.onfinality.me"}

    def test_drops_stale_and_foreign_pairs(self, isolated_storage, sample_groups):
        """Unknown networks, unknown urls and urls of another network disappear."""
        storage.kv_set(
            STORAGE_AFFINITIES,
            {
                "Polkadot": "wss://rpc.polkadot.io",
                "Kusama": "wss://kusama-rpc.polkadot.io",
                "Local": "wss://rpc.polkadot.io",
                "Westend": 42,
            },
        )
        assert load_affinities(sample_groups) == {"Polkadot": "wss://rpc.polkadot.io"}

    def test_result_is_sound_subset(self, isolated_storage, sample_groups):
        storage.kv_set(
            STORAGE_AFFINITIES,
            {"Polkadot": "wss://rpc.polkadot.io", "Local": "ws://127.0.0.1:9944", "Gone": "wss://gone"},
        )
        for network, url in load_affinities(sample_groups).items():
            assert has_pair(sample_groups, network, url)

    def test_non_mapping_value_ignored(self, isolated_storage, sample_groups):
        storage.kv_set(STORAGE_AFFINITIES, ["Polkadot", "wss://rpc.polkadot.io"])
        assert load_affinities(sample_groups) == {}

    def test_corrupt_store_file(self, isolated_storage, sample_groups):
        storage.STORE_FILE.write_text("{not json")
        assert load_affinities(sample_groups) == {}

    def test_load_does_not_rewrite_store(self, isolated_storage, sample_groups):
        """Filtering happens in memory; the stored map is left as it was."""
        raw = {"Polkadot": "wss://rpc.polkadot.io", "Gone": "wss://gone"}
        storage.kv_set(STORAGE_AFFINITIES, raw)
        load_affinities(sample_groups)
        assert storage.kv_get(STORAGE_AFFINITIES) == raw


class TestRecordAffinity:
    def test_persists_full_map(self, isolated_storage, sample_groups):
        current = {"Local": "ws://127.0.0.1:9944"}
        updated = record_affinity(current, "Polkadot", "wss://rpc.polkadot.io", sample_groups)

        assert updated == {"Local": "ws://127.0.0.1:9944", "Polkadot": "wss://rpc.polkadot.io"}
        on_disk = json.loads(storage.STORE_FILE.read_text())
        assert on_disk[STORAGE_AFFINITIES] == updated

    def test_overwrites_previous_choice(self, isolated_storage, sample_groups):
        first = record_affinity({}, "Polkadot", "wss://rpc.polkadot.io", sample_groups)
        second = record_affinity(first, "Polkadot", "wss://polkadot.api.onfinality.me", sample_groups)
        assert second == {"Polkadot": "wss://polkadot.api.onfinality.me"}
        assert load_affinities(sample_groups) == second

    def test_does_not_mutate_current(self, isolated_storage, sample_groups):
        current = {}
        record_affinity(current, "Polkadot", "wss://rpc.polkadot.io", sample_groups)
        assert current == {}

    def test_no_validation_on_write(self, isolated_storage, sample_groups):
        """Unknown pairs are written as given and filtered out at the next load."""
        updated = record_affinity({}, "Kusama", "wss://kusama", sample_groups)
        assert updated == {"Kusama": "wss://kusama"}
        assert load_affinities(sample_groups) == {}

    def test_other_store_keys_untouched(self, isolated_storage, sample_groups):
        storage.kv_set("polkadot-app-custom-endpoints", ["wss://mine.example"])
        record_affinity({}, "Polkadot", "wss://rpc.polkadot.io", sample_groups)
        assert storage.kv_get("polkadot-app-custom-endpoints") == ["wss://mine.example"]
