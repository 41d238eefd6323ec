"""Tests for leaderboard score stores."""

import json

from duel_snake.scores import InMemoryScoreStore, JsonScoreStore


class TestInMemoryScoreStore:
    def test_top_orders_by_score(self):
        store = InMemoryScoreStore()
        store.record("ann", 30)
        store.record("bob", 50)
        store.record("cy", 10)
        assert [e.name for e in store.top()] == ["bob", "ann", "cy"]

    def test_limit(self):
        store = InMemoryScoreStore()
        for i in range(5):
            store.record(f"p{i}", i)
        assert len(store.top(2)) == 2

    def test_ties_keep_earliest_first(self):
        store = InMemoryScoreStore()
        store.record("first", 10)
        store.record("second", 10)
        assert [e.name for e in store.top()] == ["first", "second"]


class TestJsonScoreStore:
    def test_missing_file_is_empty(self, tmp_path):
        store = JsonScoreStore(tmp_path / "scores.json")
        assert store.top() == []

    def test_record_persists(self, tmp_path):
        path = tmp_path / "nested" / "scores.json"
        JsonScoreStore(path).record("ann", 40)
        JsonScoreStore(path).record("bob", 60)

        reloaded = JsonScoreStore(path)
        top = reloaded.top()
        assert [(e.name, e.score) for e in top] == [("bob", 60), ("ann", 40)]

        raw = json.loads(path.read_text())
        assert len(raw["entries"]) == 2

    def test_no_temp_files_left(self, tmp_path):
        store = JsonScoreStore(tmp_path / "scores.json")
        store.record("ann", 1)
        assert [p.name for p in tmp_path.iterdir()] == ["scores.json"]
