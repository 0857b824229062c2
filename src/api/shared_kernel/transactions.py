"""Errors shared by the transaction pipeline and the services that run it."""

from __future__ import annotations

from typing import Any


class TransactionStepError(Exception):
    """Raised when a named step of a TransactionPipeline fails.

    The surrounding transaction has already been rolled back when this
    propagates.

    Attributes:
        step: Name of the failing step
        cause: The exception the step raised
        completed: Results of the steps that ran before it (diagnostics only)
    """

    def __init__(self, step: str, cause: BaseException, completed: dict[str, Any]):
        super().__init__(f"Transaction step '{step}' failed: {cause}")
        self.step = step
        self.cause = cause
        self.completed = completed
