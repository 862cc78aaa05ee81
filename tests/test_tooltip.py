"""Tests for the hover tooltip state machine."""

from types import SimpleNamespace

from datasets import DEFAULT_REGISTRY
from formatters import CURRENCY, DECIMAL
from tooltip import HIDDEN, SHOWN, STYLES, Tooltip, raw_value, tooltip_html


def _tile(name="Avatar", category="Action", value=1000000.0):
    return SimpleNamespace(name=name, category=category, value=value)


class TestTooltipText:
    def test_movies_value_is_currency(self):
        text = tooltip_html("Avatar", "Action", 1000000, DEFAULT_REGISTRY["movies"].formatter)
        assert text == "Name: Avatar<br>Category: Action<br>Value: $1,000,000"

    def test_videogames_value_is_plain_decimal(self):
        text = tooltip_html("Tetris", "GB", 1000000, DEFAULT_REGISTRY["videogames"].formatter)
        assert "Value: 1,000,000" in text
        assert "$" not in text

    def test_markup_in_names_is_escaped(self):
        text = tooltip_html("<b>x</b>", "A&B", 1, DECIMAL)
        assert "&lt;b&gt;x&lt;/b&gt;" in text
        assert "A&amp;B" in text


class TestTooltipStates:
    def test_starts_hidden(self):
        tt = Tooltip(CURRENCY)
        assert tt.state == HIDDEN
        assert tt.opacity == 0
        assert not tt.visible

    def test_pointer_move_shows(self):
        tt = Tooltip(CURRENCY)
        tt.on_pointer_move(_tile(), 100, 200)
        assert tt.state == SHOWN
        assert tt.opacity == 0.9
        assert tt.display == "inline-block"
        assert "Name: Avatar" in tt.content
        assert "Category: Action" in tt.content
        assert "Value: $1,000,000" in tt.content
        assert (tt.left, tt.top) == (110, 130)
        assert tt.data_value == "1000000"

    def test_pointer_out_always_hides(self):
        tt = Tooltip(DECIMAL)
        tt.on_pointer_move(_tile(value=12.5), 0, 0)
        tt.on_pointer_out()
        assert tt.state == HIDDEN
        assert tt.opacity == 0
        assert tt.display == "none"
        tt.on_pointer_out()
        assert tt.opacity == 0

    def test_moving_between_tiles_updates_text(self):
        tt = Tooltip(DECIMAL)
        tt.on_pointer_move(_tile("A", "x", 1), 0, 0)
        tt.on_pointer_move(_tile("B", "y", 2), 5, 5)
        assert "Name: B" in tt.content
        assert tt.data_value == "2"

    def test_reset(self):
        tt = Tooltip(DECIMAL)
        tt.on_pointer_move(_tile(), 0, 0)
        tt.reset()
        assert tt.content == ""
        assert tt.data_value is None
        assert not tt.visible


def test_raw_value():
    assert raw_value(760505847.0) == "760505847"
    assert raw_value(82.53) == "82.53"


class TestBrowserScript:
    def test_carries_offset_and_state_styles(self):
        js = Tooltip(DECIMAL).script()
        assert '"offset": [10, -70]' in js
        assert '"shown": {"opacity": "0.9", "display": "inline-block"}' in js
        assert '"hidden": {"opacity": "0", "display": "none"}' in js
        assert "getElementById('{plot_id}')" in js
        assert "plotly_hover" in js and "plotly_unhover" in js

    def test_custom_offset(self):
        assert '"offset": [0, 0]' in Tooltip(DECIMAL, offset=(0, 0)).script()

    def test_styles_match_python_states(self):
        tt = Tooltip(DECIMAL)
        tt.on_pointer_move(_tile(), 0, 0)
        assert str(tt.opacity) == STYLES[SHOWN]["opacity"]
        assert tt.display == STYLES[SHOWN]["display"]
        tt.on_pointer_out()
        assert tt.display == STYLES[HIDDEN]["display"]


def test_plain_text():
    tt = Tooltip(CURRENCY)
    tt.on_pointer_move(_tile(name="A&B"), 0, 0)
    assert tt.text() == "Name: A&B\nCategory: Action\nValue: $1,000,000"
