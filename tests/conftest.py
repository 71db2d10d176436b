from pathlib import Path

import pytest

from opcrash import bootstrap
from opcrash.core import TypeRef
from opcrash.introspect import load_catalog
from opcrash.values import ValueLibrary

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture(scope="session", autouse=True)
def setup_opcrash() -> None:
    """Bootstrap plugins once for the entire test session."""

    bootstrap()


@pytest.fixture
def catalog_path() -> Path:
    return DATA_DIR / "loadee.yaml"


@pytest.fixture
def catalog(catalog_path):
    return load_catalog(catalog_path)


@pytest.fixture
def builtin_values() -> ValueLibrary:
    return ValueLibrary.with_builtins()


@pytest.fixture
def loadee(catalog) -> TypeRef:
    return catalog.resolve("client.sub.Loadee")


@pytest.fixture
def inner(catalog) -> TypeRef:
    return catalog.resolve("client.sub.Loadee$Inner")

