"""Adapters turning external data structures into document blocks."""

from .dataframe import table_from_dataframe

__all__ = ["table_from_dataframe"]
