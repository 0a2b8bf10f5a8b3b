"""Repository interfaces for taskledger.

This package contains the abstract base class that defines the contract for
task persistence. This is the "Port" in the Hexagonal Architecture.

Implementations (Adapters) are in:
- taskledger.adapters.memory (in-process arena)
- taskledger.adapters.sqlite (local SQLite vault)
"""

from .repository import TaskRepository

__all__ = ["TaskRepository"]
