import numpy as np
import pytest

from opcrash.core import INT, STRING, TypeRef
from opcrash.errors import InvalidArgumentError
from opcrash.expr import ArrayCreateAndInit, Literal


def _ints(*values):
    return [Literal.of_int(value) for value in values]


def test_one_dimensional_int_array() -> None:
    array = ArrayCreateAndInit.of(INT, 1, _ints(0, 1, 2))
    assert array.render() == "new int[]{0, 1, 2}"
    value = array.evaluate()
    assert value.dtype == np.int32
    assert tuple(value) == (0, 1, 2)
    assert array.leaf_type == INT
    assert array.dimensionality == 1


def test_two_dimensional_int_array() -> None:
    row = ArrayCreateAndInit.of(INT, 1, _ints(0, 1, 2))
    matrix = ArrayCreateAndInit.of(INT, 2, [row, row])
    assert matrix.render() == "new int[][]{new int[]{0, 1, 2}, new int[]{0, 1, 2}}"
    value = matrix.evaluate()
    assert value.dtype == np.dtype(object)
    assert [list(inner) for inner in value] == [[0, 1, 2], [0, 1, 2]]


def test_string_array_with_null() -> None:
    array = ArrayCreateAndInit.of(
        STRING,
        1,
        [Literal.null(STRING), Literal.of_string(""), Literal.of_string("hallo")],
    )
    assert array.render() == 'new String[]{(String)null, "", "hallo"}'
    assert list(array.evaluate()) == [None, "", "hallo"]


def test_jagged_rows_keep_their_lengths() -> None:
    row = ArrayCreateAndInit.of(INT, 1, _ints(4, 5, 6))
    empty = ArrayCreateAndInit.of(INT, 1)
    matrix = ArrayCreateAndInit.of(INT, 2, [row, empty])
    assert matrix.render() == "new int[][]{new int[]{4, 5, 6}, new int[]{}}"
    assert [len(inner) for inner in matrix.evaluate()] == [3, 0]


def test_reference_leaf_is_qualified_by_context() -> None:
    loadee = TypeRef.parse("client.sub.Loadee")
    array = ArrayCreateAndInit.of(loadee, 1, [Literal.null(loadee)])
    assert array.render(TypeRef.parse("client.Util")) == "new client.sub.Loadee[]{(client.sub.Loadee)null}"
    assert array.render(loadee) == "new Loadee[]{(Loadee)null}"


def test_with_components_keeps_type() -> None:
    array = ArrayCreateAndInit.of(INT, 1)
    filled = array.with_components(_ints(9))
    assert filled.array_type == array.array_type
    assert filled.render() == "new int[]{9}"


@pytest.mark.parametrize("dimensionality", [0, -2])
def test_non_positive_dimensionality_is_rejected(dimensionality: int) -> None:
    with pytest.raises(InvalidArgumentError):
        ArrayCreateAndInit.of(INT, dimensionality)


def test_invalid_array_construction() -> None:
    with pytest.raises(InvalidArgumentError):
        ArrayCreateAndInit.of(None, 1)
    with pytest.raises(InvalidArgumentError):
        ArrayCreateAndInit(INT)
    with pytest.raises(InvalidArgumentError):
        ArrayCreateAndInit(None)
    with pytest.raises(InvalidArgumentError):
        ArrayCreateAndInit.of(INT, 2, _ints(1))
    with pytest.raises(InvalidArgumentError):
        ArrayCreateAndInit.of(INT, 1, [Literal.of_string("x")])
