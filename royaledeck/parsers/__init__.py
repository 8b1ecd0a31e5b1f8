from royaledeck.parsers.catalog import (
    CATALOG_COLUMNS,
    CatalogParseError,
    load_catalog,
    parse_catalog,
)

__all__ = [
    "CATALOG_COLUMNS",
    "CatalogParseError",
    "load_catalog",
    "parse_catalog",
]
