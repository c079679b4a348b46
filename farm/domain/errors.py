# farm/domain/errors.py
"""
Error taxonomy for barn allocation.

- NotFoundError: an animal or barn id is absent from its store.
- CapacityInvariantViolation: balancing was asked to do something impossible
  (zero groups, non-positive chunk size, a chunk over capacity).
- StoreFailure: the persistence layer failed; the transaction was rolled back.
"""


class FarmError(Exception):
    """Base class for allocation errors."""


class NotFoundError(FarmError):
    def __init__(self, kind: str, identity):
        super().__init__(f"{kind} {identity} not found")
        self.kind = kind
        self.identity = identity


class CapacityInvariantViolation(FarmError):
    pass


class StoreFailure(FarmError):
    pass
