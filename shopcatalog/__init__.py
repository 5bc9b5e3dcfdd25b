"""Product catalog querying: filter, sort and paginate a product snapshot."""

__version__ = "0.1.0"
