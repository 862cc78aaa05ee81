"""Tests for the dataset nav buttons."""

from common_header import nav_items
from scene import nav_links


def test_only_active_dataset_is_primary(registry):
    items = nav_items(nav_links(registry, "movies"))
    assert [k for k, _, _ in items] == ["videogames", "movies", "kickstarter"]
    assert [kind for _, _, kind in items].count("primary") == 1
    assert ("movies", "Movie Sales", "primary") in items
    assert ("videogames", "Video Game Sales", "secondary") in items


def test_no_active_button_before_first_render(registry):
    assert all(kind == "secondary" for _, _, kind in nav_items(nav_links(registry, "")))
