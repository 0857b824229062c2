"""Transaction pipeline: ordered, named steps run under one transaction.

Each step receives the results of the steps before it. If a step raises, the
transaction rolls back and ``TransactionStepError`` reports the step name,
the cause and the results already produced (for diagnostics only, none of
them survive the rollback).

Example:
    pipeline = (
        TransactionPipeline(session)
        .step("group", insert_group)
        .step("group_user", lambda done: insert_membership(done["group"]))
    )
    results = await pipeline.run()
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from types import MappingProxyType
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from shared_kernel.transactions import TransactionStepError

StepOperation = Callable[[Mapping[str, Any]], Awaitable[Any]]


class TransactionPipeline:
    """Runs (name, operation) pairs atomically on one session."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._steps: list[tuple[str, StepOperation]] = []

    def step(self, name: str, operation: StepOperation) -> TransactionPipeline:
        """Append a named step.

        Raises:
            ValueError: If a step with the same name was already added
        """
        if any(existing == name for existing, _ in self._steps):
            raise ValueError(f"Duplicate pipeline step: {name}")
        self._steps.append((name, operation))
        return self

    @property
    def step_names(self) -> list[str]:
        """Names of the steps in execution order."""
        return [name for name, _ in self._steps]

    async def run(self) -> dict[str, Any]:
        """Execute all steps inside ``session.begin()``.

        Returns:
            Mapping of step name to the value its operation returned

        Raises:
            TransactionStepError: If any step raised; the transaction is
                rolled back before this propagates
        """
        results: dict[str, Any] = {}

        async with self._session.begin():
            for name, operation in self._steps:
                try:
                    results[name] = await operation(MappingProxyType(results))
                except Exception as e:
                    raise TransactionStepError(
                        step=name, cause=e, completed=dict(results)
                    ) from e

        return results
