"""Tests for ehex.core.grid — generic pixel grid, bounds and resize."""

import pytest
from ehex.core.grid import (
    INDEX_KIND,
    MAX_HEIGHT,
    MAX_WIDTH,
    RGBA_KIND,
    PixelGrid,
    new_index_grid,
    new_rgba_grid,
)


class TestCreate:
    def test_v2_default_fill_is_zero(self):
        grid = new_index_grid(4, 3)
        assert (grid.width, grid.height) == (4, 3)
        assert all(v == 0 for row in grid.rows() for v in row)

    def test_v1_default_fill_is_opaque_black(self):
        grid = new_rgba_grid(2, 2)
        assert grid.get(1, 1) == (0, 0, 0, 255)

    def test_v2_clamps_to_limit(self):
        grid = new_index_grid(500, 100)
        assert (grid.width, grid.height) == (MAX_WIDTH, MAX_HEIGHT)

    def test_v1_not_clamped_at_construction(self):
        grid = new_rgba_grid(200, 40)
        assert (grid.width, grid.height) == (200, 40)

    def test_zero_size_rejected(self):
        with pytest.raises(ValueError):
            new_index_grid(0, 5)


class TestBoundsSafety:
    @pytest.mark.parametrize('x,y', [(-1, 0), (0, -1), (4, 0), (0, 3), (100, 100)])
    def test_get_outside_returns_default(self, x, y):
        grid = new_index_grid(4, 3)
        grid.set(0, 0, 9)
        assert grid.get(x, y) == INDEX_KIND.default

    def test_v1_get_outside_returns_default(self):
        grid = new_rgba_grid(2, 2)
        assert grid.get(-1, 5) == RGBA_KIND.default

    @pytest.mark.parametrize('x,y', [(-1, 0), (0, -1), (4, 0), (0, 3)])
    def test_set_outside_is_noop(self, x, y):
        grid = new_index_grid(4, 3)
        before = grid.copy()
        grid.set(x, y, 7)
        assert grid == before

    def test_set_checked_raises_outside(self):
        grid = new_index_grid(4, 3)
        with pytest.raises(IndexError):
            grid.set_checked(4, 0, 1)

    def test_set_checked_inside(self):
        grid = new_index_grid(4, 3)
        grid.set_checked(3, 2, 15)
        assert grid.get(3, 2) == 15


class TestValueValidation:
    @pytest.mark.parametrize('value', [16, -1, True, '3', 2.0])
    def test_bad_index_rejected(self, value):
        grid = new_index_grid(2, 2)
        with pytest.raises(ValueError):
            grid.set(0, 0, value)

    @pytest.mark.parametrize('value', [(0, 0, 0), (256, 0, 0, 0), [0, 0, 0, 0], (0, 0, 0, -1)])
    def test_bad_rgba_rejected(self, value):
        grid = new_rgba_grid(2, 2)
        with pytest.raises(ValueError):
            grid.set(0, 0, value)

    def test_from_rows_rejects_ragged(self):
        with pytest.raises(ValueError):
            PixelGrid.from_rows(INDEX_KIND, [[0, 1], [2]])


class TestResize:
    def test_overlap_preserved_rest_default(self):
        grid = new_index_grid(4, 3)
        for y in range(3):
            for x in range(4):
                grid.set(x, y, (x * 3 + y) % 16)
        bigger = grid.resize(6, 5)
        assert (bigger.width, bigger.height) == (6, 5)
        for y in range(5):
            for x in range(6):
                expected = grid.get(x, y) if x < 4 and y < 3 else 0
                assert bigger.get(x, y) == expected

    def test_shrink_discards(self):
        grid = new_index_grid(4, 3)
        grid.set(3, 2, 5)
        smaller = grid.resize(2, 2)
        assert (smaller.width, smaller.height) == (2, 2)
        restored = smaller.resize(4, 3)
        assert restored.get(3, 2) == 0

    def test_resize_clamps_both_formats(self):
        assert new_rgba_grid(20, 10).resize(400, 90).width == MAX_WIDTH
        assert new_index_grid(20, 10).resize(400, 90).height == MAX_HEIGHT

    def test_resize_returns_new_grid(self):
        grid = new_index_grid(4, 3)
        resized = grid.resize(2, 2)
        assert resized is not grid
        assert (grid.width, grid.height) == (4, 3)

    def test_v1_grow_then_shrink_scenario(self):
        grid = new_rgba_grid(20, 10)
        grid = grid.resize(150, 25)
        assert (grid.width, grid.height) == (150, 25)
        grid = grid.resize(5, 5)
        assert grid == new_rgba_grid(5, 5)


class TestEquality:
    def test_kinds_differ(self):
        assert new_index_grid(1, 1) != new_rgba_grid(1, 1)

    def test_same_content(self):
        a = new_index_grid(3, 3)
        b = new_index_grid(3, 3)
        a.set(1, 1, 4)
        b.set(1, 1, 4)
        assert a == b
