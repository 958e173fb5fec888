"""London restaurant directory: area indexing, fragment routing and template rendering."""

__version__ = "2.0.0"
