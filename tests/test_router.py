"""Tests for resolving the URL key to a dataset."""

import logging

import pytest

from router import MemoryHistory, Navigator, resolve_key


class TestResolveKey:
    @pytest.mark.parametrize("raw,key", [
        ("#movies", "movies"),
        ("movies", "movies"),
        ("#videogames", "videogames"),
        ("kickstarter", "kickstarter"),
        (" #movies ", "movies"),
    ])
    def test_known_keys(self, raw, key, registry):
        res = resolve_key(raw, registry)
        assert res.dataset.key == key
        assert not res.corrected

    @pytest.mark.parametrize("raw", [None, "", "#", "#books", "Movies", "#movies/extra"])
    def test_unknown_falls_back_to_kickstarter(self, raw, registry):
        res = resolve_key(raw, registry)
        assert res.dataset.key == "kickstarter"
        assert res.corrected


class TestNavigator:
    def test_known_key_leaves_history_alone(self, registry):
        h = MemoryHistory("movies")
        ds = Navigator(registry, h).navigate()
        assert ds.title == "Movie Sales"
        assert h.entries == ["movies"]

    def test_unknown_key_is_replaced_not_pushed(self, registry):
        h = MemoryHistory("#nope")
        ds = Navigator(registry, h).navigate()
        assert ds.key == "kickstarter"
        assert h.entries == ["kickstarter"]
        assert h.fragment == "#kickstarter"

    def test_empty_fragment(self, registry):
        h = MemoryHistory(None)
        assert Navigator(registry, h).navigate().key == "kickstarter"
        assert h.fragment == "#kickstarter"
        assert len(h.entries) == 1

    def test_back_forward_navigation(self, registry):
        h = MemoryHistory("videogames")
        nav = Navigator(registry, h)
        assert nav.navigate().key == "videogames"
        h.push("movies")
        assert nav.navigate().key == "movies"
        h.entries.pop()
        assert nav.navigate().key == "videogames"

    def test_correction_is_logged(self, registry, caplog):
        with caplog.at_level(logging.INFO, logger="treemap.router"):
            Navigator(registry, MemoryHistory("bogus")).navigate()
        assert "bogus" in caplog.text

    def test_second_navigation_after_correction_is_stable(self, registry):
        h = MemoryHistory("bogus")
        nav = Navigator(registry, h)
        nav.navigate()
        nav.navigate()
        assert h.entries == ["kickstarter"]
