from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Tuple

import pandas as pd
from pydantic import ValidationError

from ...config import get_config
from ...logging import get_logger
from ..errors import CatalogLoadError, ProductNotFoundError
from ..interface import CatalogAccess
from ..models import Product, StringList

logger = get_logger(__name__)

REQUIRED_COLUMNS = ["id", "name", "price", "created_at"]
OPTIONAL_DEFAULTS = {"description": "", "category_id": None, "stock": 0, "rating": 0.0}


class CsvCatalog(CatalogAccess):
    """
    CSV-backed implementation.
    - Loads the catalog CSV from `data_dir` once at construction.
    - Rows become validated, immutable Products kept in file order.
    - Every query runs the pipeline over the loaded snapshot; nothing is cached.
    """

    def __init__(self, data_dir: str | Path = None, file_name: str = None) -> None:
        config = get_config()
        if data_dir is None:
            data_dir = config.data_dir
        if file_name is None:
            file_name = config.catalog_file

        self.data_dir = self._resolve_dir(Path(data_dir))
        self.path = self.data_dir / file_name

        self._products = self._load_products(self.path)
        self._by_id: Dict[str, Product] = {p.id: p for p in self._products}
        logger.info(f"Loaded {len(self._products)} products from {self.path}")

    # ---------- loading helpers ----------

    @staticmethod
    def _resolve_dir(data_dir: Path) -> Path:
        if data_dir.is_absolute():
            return data_dir
        # Relative paths are anchored at the repository root (nearest pyproject.toml)
        current = Path.cwd()
        for parent in [current] + list(current.parents):
            if (parent / "pyproject.toml").exists():
                return parent / data_dir
        return current / data_dir

    @staticmethod
    def _read_frame(path: Path) -> pd.DataFrame:
        if not path.parent.exists():
            raise FileNotFoundError(
                f"Data directory not found: {path.parent}\n"
                f"Please either:\n"
                f"  1. Generate sample data: python -m shopcatalog.seed_data\n"
                f"  2. Set DATA_DIR environment variable to point to your data directory\n"
                f"  3. Create a .env file with DATA_DIR=/path/to/your/data"
            )
        if not path.exists():
            raise FileNotFoundError(
                f"Catalog file missing: {path}\n"
                f"Please either:\n"
                f"  1. Generate sample data: python -m shopcatalog.seed_data --output-dir {path.parent}\n"
                f"  2. Set CATALOG_FILE to the name of your products CSV"
            )

        try:
            df = pd.read_csv(path, dtype={"id": str, "category_id": str, "name": str, "description": str})
        except Exception as e:
            raise CatalogLoadError(
                f"Error reading catalog CSV {path}: {e}\n"
                f"Please check that the file is valid and readable."
            ) from e

        missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise CatalogLoadError(
                f"Catalog CSV {path} is missing columns: {', '.join(missing)}\n"
                f"  Expected columns: {', '.join(REQUIRED_COLUMNS + list(OPTIONAL_DEFAULTS))}"
            )
        return df

    @staticmethod
    def _to_records(df: pd.DataFrame) -> list[dict]:
        df = df.copy()
        for col, default in OPTIONAL_DEFAULTS.items():
            if col not in df.columns:
                df[col] = default
        df["description"] = df["description"].fillna("")
        df["rating"] = df["rating"].fillna(0.0)
        df["stock"] = df["stock"].fillna(0)
        # Per-row ISO 8601 parsing; naive values are UTC. Unparseable values
        # keep their raw text so validation reports what was in the file.
        raw_created = df["created_at"]
        parsed = pd.to_datetime(raw_created, format="ISO8601", utc=True, errors="coerce")
        df["created_at"] = parsed.astype(object).where(parsed.notna(), raw_created)

        # NaN -> None so optional fields validate as absent
        df = df.astype(object).where(df.notna(), None)
        records = df.to_dict(orient="records")
        for rec in records:
            if isinstance(rec["created_at"], pd.Timestamp):
                rec["created_at"] = rec["created_at"].to_pydatetime()
        return records

    @classmethod
    def _load_products(cls, path: Path) -> Tuple[Product, ...]:
        df = cls._read_frame(path)
        products = []
        seen = set()
        for row_number, rec in enumerate(cls._to_records(df), start=2):
            try:
                product = Product.model_validate(rec)
            except ValidationError as e:
                raise CatalogLoadError(f"Invalid product on line {row_number} of {path}: {e}") from e
            if product.id in seen:
                raise CatalogLoadError(f"Duplicate product id {product.id!r} on line {row_number} of {path}")
            seen.add(product.id)
            products.append(product)
        return tuple(products)

    # ---------- interface implementation ----------

    def snapshot(self) -> Tuple[Product, ...]:
        return self._products

    def get_product(self, product_id: str) -> Product:
        try:
            return self._by_id[product_id]
        except KeyError:
            raise ProductNotFoundError(product_id) from None

    def list_category_ids(self) -> StringList:
        categories = {p.category_id for p in self._products if p.category_id is not None}
        return StringList(values=sorted(categories))
