"""Lexicon handle tests: global lifecycle, consistency, concurrent access."""

import json
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from lexicon_index_mcp.core.dataset import DEFAULT_ENTRIES
from lexicon_index_mcp.core.errors import (LexiconNotInitializedError, LockTimeoutError,
                                           StoreInitFailedError)
from lexicon_index_mcp.core.hashing import corpus_fingerprint
from lexicon_index_mcp.core.lexicon import (Lexicon, get_lexicon, init_lexicon, lexicon_exists,
                                            reset_lexicon)


class TestGlobalLexicon:
    def test_get_before_init(self):
        assert not lexicon_exists()
        with pytest.raises(LexiconNotInitializedError):
            get_lexicon()

    def test_init_with_bundled_dataset(self):
        lex = init_lexicon()

        assert lexicon_exists()
        assert get_lexicon() is lex
        assert len(lex.entries()) == len(DEFAULT_ENTRIES)
        assert lex.search("bank") == [
            "An institution for receiving, lending, exchanging, and safeguarding money.",
            "The land beside a body of water, such as a river.",
        ]
        assert lex.search("virtual machine") == [
            "An emulation of a computer system providing the functionality of a physical computer."
        ]

    def test_init_with_explicit_entries(self, small_dataset):
        lex = init_lexicon(entries=small_dataset)
        assert lex.last_report.indexed == 2

    def test_init_from_configured_dataset(self, tmp_path, monkeypatch):
        from lexicon_index_mcp.config import reset_config

        dataset = tmp_path / "glossary.json"
        dataset.write_text(json.dumps([{"term": "Latency", "definition": "delay"}]), encoding="utf-8")
        monkeypatch.setenv("LEXICON_INDEX_DATASET_PATH", str(dataset))
        reset_config()

        lex = init_lexicon()
        assert lex.search("latency") == ["delay"]

    def test_init_fails_on_missing_dataset(self, tmp_path):
        with pytest.raises(StoreInitFailedError):
            init_lexicon(dataset_path=str(tmp_path / "missing.json"))
        assert not lexicon_exists()

    def test_init_fails_on_unusable_batch(self):
        with pytest.raises(StoreInitFailedError):
            init_lexicon(entries="not a batch")

    def test_reset(self):
        init_lexicon()
        reset_lexicon()
        assert not lexicon_exists()


class TestConsistency:
    def test_consistent_after_mixed_writes(self, lexicon):
        lexicon.insert("Bank", "a")
        lexicon.insert("Bank", "b")
        lexicon.remove(1)
        lexicon.load([("River", "r")], replace=False)
        lexicon.rebuild_index()
        assert lexicon.check_consistency() == []

    def test_detects_broken_index(self, lexicon):
        # Corrupt the state behind the gate's back
        lexicon._state.index.add("compiler", 999)
        lexicon._state.index.remove("trace-based", 1)
        problems = lexicon.check_consistency()
        assert any("dead id 999" in p for p in problems)
        assert any("missing from index" in p for p in problems)

    def test_remove_purges_search(self, lexicon):
        entry = lexicon.search_entries("compiler")[0]
        assert lexicon.remove(entry.id) == entry
        assert lexicon.search("compiler") == []
        assert lexicon.get(entry.id) is None

    def test_stats(self, lexicon):
        stats = lexicon.get_stats()
        assert stats["entry_count"] == 2
        assert stats["term_count"] == 2
        assert stats["posting_count"] == 2
        assert stats["next_id"] == 3
        assert stats["gate"]["state"] == "idle"
        assert stats["last_build"]["indexed"] == 2
        assert stats["process_rss_mb"] > 0


class TestConcurrentAccess:
    def test_concurrent_reads_agree(self):
        lex = Lexicon()
        lex.load(DEFAULT_ENTRIES)
        expected = lex.search("bank")

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lambda _: lex.search("bank"), range(200)))

        assert all(r == expected for r in results)

    def test_batch_append_is_never_seen_partially(self):
        lex = Lexicon()
        lex.load([("Seed", "s")])
        batch_size = 40
        stop = threading.Event()
        observed = []

        def reader():
            while not stop.is_set():
                observed.append(len(lex.search("marker")))

        readers = [threading.Thread(target=reader) for _ in range(4)]
        for t in readers:
            t.start()
        try:
            for round_no in range(10):
                lex.load([("Marker", f"{round_no}-{i}") for i in range(batch_size)], replace=False)
        finally:
            stop.set()
            for t in readers:
                t.join(timeout=5.0)

        assert observed
        assert all(count % batch_size == 0 for count in observed)
        assert lex.search("marker")[-1] == f"9-{batch_size - 1}"
        assert lex.check_consistency() == []

    def test_replace_is_seen_whole_or_not_at_all(self):
        lex = Lexicon()
        old = [("Alpha", f"old-{i}") for i in range(30)]
        new = [("Alpha", f"new-{i}") for i in range(30)]
        lex.load(old)
        stop = threading.Event()
        bad = []

        def reader():
            while not stop.is_set():
                defs = lex.search("alpha")
                prefixes = {d.split("-")[0] for d in defs}
                if len(defs) != 30 or len(prefixes) != 1:
                    bad.append(defs)

        readers = [threading.Thread(target=reader) for _ in range(4)]
        for t in readers:
            t.start()
        try:
            for i in range(20):
                lex.load(new if i % 2 == 0 else old)
        finally:
            stop.set()
            for t in readers:
                t.join(timeout=5.0)

        assert bad == []

    def test_last_build_describes_live_corpus_after_racing_loads(self):
        lex = Lexicon()
        batches = [[(f"term{n}-{i}", f"definition {n}") for i in range(20)] for n in range(8)]

        for _ in range(5):
            with ThreadPoolExecutor(max_workers=8) as executor:
                list(executor.map(lex.load, batches))

            live = corpus_fingerprint((e.term, e.definition) for e in lex.entries())
            assert lex.get_stats()["last_build"]["fingerprint"] == live
            assert lex.last_report.fingerprint == live

    def test_write_timeout_surfaces_as_lock_timeout(self, lexicon):
        lexicon.gate.acquire_read()
        try:
            with pytest.raises(LockTimeoutError):
                lexicon.insert("Bank", "x", timeout=0.05)
        finally:
            lexicon.gate.release_read()
        assert lexicon.search("bank") == []
