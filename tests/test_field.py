import numpy as np
import pytest

from turingpatterns.engine.field import FieldStore, FieldStatistics
from turingpatterns.errors import InvalidDimensionsError


def test_buffers_have_grid_shape(store):
    assert store.shape == (4, 6)
    assert store.read().shape == (4, 6, 2)
    assert store.write().shape == (4, 6, 2)
    assert store.cell_count == 24


def test_read_view_is_read_only(store):
    view = store.read()
    with pytest.raises(ValueError):
        view[0, 0, 0] = 1.0


def test_read_and_write_are_distinct_buffers(store):
    assert not np.shares_memory(store.read(), store.write())


def test_swap_exchanges_roles(store):
    store.write()[...] = 7.0
    assert store.read_index == 0
    store.swap()
    assert store.read_index == 1
    assert np.all(store.read() == 7.0)
    assert np.all(store.write() == 0.0)


def test_active_is_the_readable_buffer(store):
    store.active()[1, 2] = (0.3, 0.4)
    assert store.read()[1, 2].tolist() == [0.3, 0.4]


@pytest.mark.parametrize("n, dim, expected", [(-1, 5, 4), (0, 5, 0), (4, 5, 4), (5, 5, 0), (6, 5, 1)])
def test_wrap(n, dim, expected):
    assert FieldStore.wrap(n, dim) == expected


def test_index_is_row_major_and_wraps(store):
    assert store.index(0, 0) == 0
    assert store.index(5, 0) == 5
    assert store.index(0, 1) == 6
    assert store.index(2, 3) == 3 * 6 + 2
    assert store.index(-1, 0) == 5
    assert store.index(0, -1) == 3 * 6
    assert store.index(6, 4) == 0


def test_cell_reads_through_flat_index(store):
    store.active()[3, 5] = (0.25, 0.75)
    assert store.cell(5, 3) == (0.25, 0.75)
    assert store.cell(-1, -1) == (0.25, 0.75)


def test_resize_discards_old_values(store):
    store.active()[...] = 1.0
    store.swap()
    store.resize(3, 7)
    assert store.shape == (7, 3)
    assert store.read_index == 0
    assert np.all(store.read() == 0.0)
    assert np.all(store.write() == 0.0)


@pytest.mark.parametrize("width, height", [(0, 5), (5, 0), (-2, 3)])
def test_non_positive_dimensions_are_rejected(width, height):
    with pytest.raises(InvalidDimensionsError):
        FieldStore(width, height)


def test_failed_resize_leaves_store_unchanged(store):
    store.active()[...] = 0.5
    with pytest.raises(InvalidDimensionsError):
        store.resize(0, 10)
    assert store.shape == (4, 6)
    assert np.all(store.read() == 0.5)


def test_statistics_per_channel():
    field = np.zeros((2, 2, 2))
    field[..., 0] = [[0.0, 1.0], [0.5, 0.5]]
    field[..., 1] = 0.25
    stats = FieldStatistics.from_field(field)
    assert stats.u_min == 0.0
    assert stats.u_max == 1.0
    assert stats.u_mean == pytest.approx(0.5)
    assert stats.v_min == stats.v_max == stats.v_mean == 0.25
