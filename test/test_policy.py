# test/test_policy.py
import numpy as np
import pytest

from h5scope.core.policy import ColumnSelect, Interleave, FlattenPolicy, FIRST_COLUMN
from h5scope.core.exceptions import InvalidPolicy


BLOCK = np.array([[1, 2, 3], [4, 5, 6]], dtype=np.uint16)


def test_first_column_default():
    assert FIRST_COLUMN == ColumnSelect(0)
    np.testing.assert_array_equal(FIRST_COLUMN.flatten(BLOCK), [1, 4])


def test_column_select_other_column():
    np.testing.assert_array_equal(ColumnSelect(2).flatten(BLOCK), [3, 6])


def test_column_select_out_of_range():
    with pytest.raises(InvalidPolicy):
        ColumnSelect(3).flatten(BLOCK)


@pytest.mark.parametrize("bad", [-1, 1.0, True, "0"])
def test_column_select_rejects_bad_column(bad):
    with pytest.raises(InvalidPolicy):
        ColumnSelect(bad)


def test_interleave_row_major():
    np.testing.assert_array_equal(Interleave().flatten(BLOCK), [1, 2, 3, 4, 5, 6])


def test_policies_require_2d():
    with pytest.raises(InvalidPolicy):
        ColumnSelect(0).flatten(np.arange(3))
    with pytest.raises(InvalidPolicy):
        Interleave().flatten(np.zeros((2, 2, 2)))


def test_policies_satisfy_protocol():
    assert isinstance(ColumnSelect(), FlattenPolicy)
    assert isinstance(Interleave(), FlattenPolicy)
