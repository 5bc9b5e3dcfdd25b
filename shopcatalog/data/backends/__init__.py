from .csv_backend import CsvCatalog
from .memory_backend import InMemoryCatalog

__all__ = ["CsvCatalog", "InMemoryCatalog"]
