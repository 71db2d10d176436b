"""Type introspection: the protocol and the YAML catalogue implementation."""
from .base import TypeIntrospector
from .catalog import CATALOG_SCHEMA, CatalogIntrospector, TypeDeclaration, build_catalog, load_catalog

__all__ = [
    "CATALOG_SCHEMA",
    "CatalogIntrospector",
    "TypeDeclaration",
    "TypeIntrospector",
    "build_catalog",
    "load_catalog",
]
