import numpy as np
import pytest

from opcrash.core import INT, STRING, TypeRef
from opcrash.errors import InvalidArgumentError


def test_parse_nested_and_array_names() -> None:
    inner = TypeRef.parse("client.sub.Loadee$Inner")
    assert inner.name == "Inner"
    assert inner.namespace == "client.sub"
    assert inner.outer == TypeRef.parse("client.sub.Loadee")
    assert inner.qualified_name == "client.sub.Loadee.Inner"
    assert inner.binary_name == "client.sub.Loadee$Inner"

    matrix = TypeRef.parse("int[][]")
    assert matrix.is_array
    assert matrix.decompose() == (INT, 2)
    assert matrix.qualified_name == "int[][]"


def test_java_lang_names_resolve_without_namespace() -> None:
    assert TypeRef.parse("String") == STRING
    assert STRING.source_name(None) == "String"


def test_source_name_depends_on_context() -> None:
    loadee = TypeRef.parse("client.sub.Loadee")
    other = TypeRef.parse("client.Util")
    inner = TypeRef.parse("client.sub.Loadee$Inner")
    assert loadee.source_name(loadee) == "Loadee"
    assert loadee.source_name(other) == "client.sub.Loadee"
    assert loadee.source_name(None) == "client.sub.Loadee"
    assert inner.source_name(loadee) == "Loadee.Inner"
    assert loadee.array_of(2).source_name(other) == "client.sub.Loadee[][]"
    assert TypeRef.parse("InDefaultPackage").source_name(other) == "InDefaultPackage"


def test_staticness_is_not_part_of_identity() -> None:
    parsed = TypeRef.parse("client.sub.Loadee$Inner")
    declared = parsed.with_static(False)
    assert parsed == declared
    assert declared.is_inner
    assert not parsed.is_inner


def test_dtypes() -> None:
    assert INT.dtype == np.dtype(np.int32)
    assert TypeRef.parse("long").dtype == np.dtype(np.int64)
    assert TypeRef.parse("boolean").dtype == np.dtype(bool)
    assert STRING.dtype == np.dtype(object)


@pytest.mark.parametrize("text", ["", "void[]", "client.9bad", "a.b$"])
def test_parse_rejects_invalid_names(text: str) -> None:
    with pytest.raises(InvalidArgumentError):
        TypeRef.parse(text)


def test_array_of_rejects_non_positive_dimensions() -> None:
    with pytest.raises(InvalidArgumentError):
        INT.array_of(0)
