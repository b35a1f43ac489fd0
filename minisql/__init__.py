"""Storage pages, B+ tree nodes, transaction types and predicate expressions for a small relational database engine."""

__version__ = "2022.7.0"