"""
Exception definitions for the game store.

Hierarchy:
- StoreError (base for all store exceptions)
  - GameAlreadyExists (insert rejected by the one-active-game constraint)
  - DocumentNotFound (update of a record that is not in the store)
  - UnexpectedResult
"""


class StoreError(Exception):
    """Base exception for all store-related errors."""
    category: str = "store"
    retryable: bool = True


class GameAlreadyExists(StoreError):
    retryable = False


class DocumentNotFound(StoreError):
    retryable = False


class UnexpectedResult(StoreError):
    retryable = True
    # scenarios that can only occur by breaking the store's own invariants
