"""Database infrastructure - shared connection and transaction primitives."""

from infrastructure.database.constraints import (
    ConstraintViolation,
    ViolationKind,
    violated_constraint,
)
from infrastructure.database.pipeline import TransactionPipeline
from shared_kernel.transactions import TransactionStepError

__all__ = [
    "ConstraintViolation",
    "TransactionPipeline",
    "TransactionStepError",
    "ViolationKind",
    "violated_constraint",
]
