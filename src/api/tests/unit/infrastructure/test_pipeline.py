"""Unit tests for TransactionPipeline."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from infrastructure.database.pipeline import TransactionPipeline
from shared_kernel.transactions import TransactionStepError


@pytest.fixture
def transaction():
    transaction = MagicMock()
    transaction.__aenter__ = AsyncMock(return_value=None)
    transaction.__aexit__ = AsyncMock(return_value=None)
    return transaction


@pytest.fixture
def mock_session(transaction):
    session = AsyncMock()
    session.begin = MagicMock(return_value=transaction)
    return session


def _returning(value):
    async def operation(done):
        return value

    return operation


class TestTransactionPipeline:
    @pytest.mark.asyncio
    async def test_runs_steps_in_order_with_prior_results(self, mock_session):
        seen = []

        async def second(done):
            seen.append(dict(done))
            return done["first"] + 1

        results = await (
            TransactionPipeline(mock_session)
            .step("first", _returning(1))
            .step("second", second)
            .run()
        )

        assert results == {"first": 1, "second": 2}
        assert seen == [{"first": 1}]

    @pytest.mark.asyncio
    async def test_runs_inside_one_transaction(self, mock_session, transaction):
        await TransactionPipeline(mock_session).step("only", _returning(None)).run()

        mock_session.begin.assert_called_once()
        transaction.__aenter__.assert_awaited_once()
        transaction.__aexit__.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_failure_names_step_and_keeps_completed(
        self, mock_session, transaction
    ):
        cause = ValueError("boom")

        async def failing(done):
            raise cause

        third = AsyncMock()

        with pytest.raises(TransactionStepError) as exc_info:
            await (
                TransactionPipeline(mock_session)
                .step("first", _returning("a"))
                .step("second", failing)
                .step("third", third)
                .run()
            )

        error = exc_info.value
        assert error.step == "second"
        assert error.cause is cause
        assert error.__cause__ is cause
        assert error.completed == {"first": "a"}
        third.assert_not_called()
        exit_args = transaction.__aexit__.await_args.args
        assert exit_args[0] is TransactionStepError

    @pytest.mark.asyncio
    async def test_steps_cannot_mutate_prior_results(self, mock_session):
        async def tamper(done):
            done["first"] = "changed"

        with pytest.raises(TransactionStepError) as exc_info:
            await (
                TransactionPipeline(mock_session)
                .step("first", _returning("a"))
                .step("tamper", tamper)
                .run()
            )

        assert isinstance(exc_info.value.cause, TypeError)

    def test_duplicate_step_names_are_rejected(self, mock_session):
        pipeline = TransactionPipeline(mock_session).step("group", _returning(1))

        with pytest.raises(ValueError):
            pipeline.step("group", _returning(2))

    def test_step_names(self, mock_session):
        pipeline = (
            TransactionPipeline(mock_session)
            .step("group", _returning(1))
            .step("group_user", _returning(2))
        )

        assert pipeline.step_names == ["group", "group_user"]
