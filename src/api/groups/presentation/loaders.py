"""Batched, identity-scoped group loading for graph-shaped APIs.

A resolver tree asks for groups one field at a time. ``GroupsLoaderSource``
collects every key requested during the same event-loop iteration and
resolves them with a single ``IN (...)`` query over the actor's visibility
predicate, so authorization is never re-implemented in resolvers and no
key is fetched twice.

A source is bound to one actor and one request. Never share an instance:
its cache holds what *that* actor may see.

Example:
    source = GroupsLoaderSource.from_params(
        session_factory, {"current_user": space_user}
    )
    first, second = await asyncio.gather(
        source.load(Group, first_id),
        source.load(Group, second_id),
    )  # one SELECT
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy import Select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from groups.domain.actors import Actor, SpaceUser, User
from groups.domain.aggregates import Group
from groups.domain.value_objects import GroupId
from groups.infrastructure.mappers import group_from_model
from groups.infrastructure.models import GroupModel
from groups.infrastructure.visibility import visible_groups_query
from groups.ports.exceptions import LoaderConfigurationError
from groups.presentation.observability import (
    DefaultGroupsLoaderProbe,
    GroupsLoaderProbe,
)


class GroupsLoaderSource:
    """Per-request batching and caching loader for visible groups."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        actor: Actor,
        probe: GroupsLoaderProbe | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._actor = actor
        self._probe = probe or DefaultGroupsLoaderProbe()
        self._cache: dict[str, asyncio.Future[Group | None]] = {}
        self._pending: list[str] = []
        self._dispatch_scheduled = False
        self._batches: set[asyncio.Task[None]] = set()

    @classmethod
    def from_params(
        cls,
        session_factory: async_sessionmaker[AsyncSession],
        params: Mapping[str, Any],
        probe: GroupsLoaderProbe | None = None,
    ) -> GroupsLoaderSource:
        """Build a source for the authenticated actor in ``params``.

        Raises:
            LoaderConfigurationError: If ``current_user`` is missing or is
                not a SpaceUser or User
        """
        actor = params.get("current_user")
        if not isinstance(actor, (SpaceUser, User)):
            raise LoaderConfigurationError("authentication required")
        return cls(session_factory, actor, probe)

    @property
    def actor(self) -> Actor:
        return self._actor

    def query(self, entity: type) -> Select[tuple[GroupModel]]:
        """Base query for ``entity`` as seen by the bound actor.

        Raises:
            LoaderConfigurationError: If ``entity`` is not Group
        """
        _require_group(entity)
        return visible_groups_query(self._actor)

    async def load(self, entity: type, key: GroupId | str) -> Group | None:
        """Load one group, or None if it is absent or not visible."""
        _require_group(entity)
        return await asyncio.shield(self._future_for(key))

    async def load_many(
        self,
        entity: type,
        keys: Iterable[GroupId | str],
    ) -> list[Group | None]:
        """Load several groups in request order; misses come back as None."""
        _require_group(entity)
        futures = [self._future_for(key) for key in keys]
        return list(await asyncio.shield(asyncio.gather(*futures)))

    def _future_for(self, key: GroupId | str) -> asyncio.Future[Group | None]:
        group_id = key.value if isinstance(key, GroupId) else str(key)
        future = self._cache.get(group_id)
        if future is not None:
            return future

        loop = asyncio.get_running_loop()
        future = loop.create_future()
        self._cache[group_id] = future
        self._pending.append(group_id)
        if not self._dispatch_scheduled:
            self._dispatch_scheduled = True
            loop.call_soon(self._dispatch)
        return future

    def _dispatch(self) -> None:
        keys, self._pending = self._pending, []
        self._dispatch_scheduled = False
        task = asyncio.get_running_loop().create_task(self._load_batch(keys))
        self._batches.add(task)
        task.add_done_callback(self._batches.discard)

    async def _load_batch(self, keys: list[str]) -> None:
        stmt = self.query(Group).where(GroupModel.id.in_(keys))
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                found = {
                    model.id: group_from_model(model)
                    for model in result.scalars().all()
                }
        except Exception as e:
            self._probe.batch_failed(len(keys), str(e))
            # Failed keys are evicted so a later load retries them.
            for key in keys:
                future = self._cache.pop(key)
                if not future.done():
                    future.set_exception(e)
            return

        self._probe.batch_loaded(len(keys), len(found))
        for key in keys:
            future = self._cache[key]
            if not future.done():
                future.set_result(found.get(key))


def _require_group(entity: type) -> None:
    if entity is not Group:
        raise LoaderConfigurationError("query not valid for this context")
