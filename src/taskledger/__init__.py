"""taskledger - per-owner task registry with a storage and query core."""

__version__ = "0.3.0"
