from __future__ import annotations

from typing import Iterable, Literal, Optional

from ..config import get_config
from .backends.csv_backend import CsvCatalog
from .backends.memory_backend import InMemoryCatalog
from .interface import CatalogAccess
from .models import Product


def get_catalog_access(
    kind: Literal["csv", "memory"] = "csv",
    products: Optional[Iterable[Product]] = None,
) -> CatalogAccess:
    if kind == "csv":
        # Reads from configured CSV folder
        config = get_config()
        return CsvCatalog(data_dir=config.data_dir, file_name=config.catalog_file)
    if kind == "memory":
        return InMemoryCatalog(products or ())
    raise ValueError(f"Unknown catalog access kind: {kind}")
