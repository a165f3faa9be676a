"""Schema catalog exports."""

from .catalog_loader import (
    CatalogReference,
    NoCatalogLoaded,
    SchemaLoadError,
    compile_all,
    load_catalog,
    load_catalog_file,
    read_catalog_source,
)
from .catalog_models import Catalog, CompiledCatalog, SchemaDocument, TypeTag

__all__ = [
    "Catalog",
    "CatalogReference",
    "CompiledCatalog",
    "NoCatalogLoaded",
    "SchemaDocument",
    "SchemaLoadError",
    "TypeTag",
    "compile_all",
    "load_catalog",
    "load_catalog_file",
    "read_catalog_source",
]
