"""Block diagram data model: object types, model objects, layered layout options and an R-tree index."""

__version__ = "1.0.0"