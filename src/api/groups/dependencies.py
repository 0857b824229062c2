"""Wiring for the Groups bounded context.

Builds services and loaders around a caller-provided session, and the
message catalog errors are rendered with. All repositories of one
GroupService share that session, so the service's transactions cover every
write of a use case.
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from groups.application.observability import DefaultGroupServiceProbe, GroupServiceProbe
from groups.application.services import GroupService
from groups.infrastructure.bookmark_repository import GroupBookmarkRepository
from groups.infrastructure.group_repository import GroupRepository
from groups.infrastructure.membership_repository import GroupMembershipRepository
from groups.presentation.loaders import GroupsLoaderSource
from infrastructure.database.dependencies import get_session_factory
from infrastructure.logging import bind_observation_context
from infrastructure.pubsub.dependencies import get_event_publisher
from infrastructure.settings import get_i18n_settings
from shared_kernel.messages import GettextMessageCatalog, MessageCatalog
from shared_kernel.observability_context import ObservationContext
from shared_kernel.pubsub import EventPublisher


def get_group_service_probe(
    context: ObservationContext | None = None,
) -> GroupServiceProbe:
    """Get GroupServiceProbe instance, bound to ``context`` when given."""
    probe = DefaultGroupServiceProbe()
    if context is not None:
        return probe.with_context(context)
    return probe


def get_group_service(
    session: AsyncSession,
    publisher: EventPublisher | None = None,
    context: ObservationContext | None = None,
) -> GroupService:
    """Get GroupService instance.

    Args:
        session: Session shared by the service and its repositories
        publisher: Event publisher; defaults to the process-wide queue
        context: Optional request metadata bound to the service probe and
            to every log event of the current task

    Returns:
        GroupService instance
    """
    if context is not None:
        bind_observation_context(context)
    return GroupService(
        session=session,
        group_repository=GroupRepository(session=session),
        membership_repository=GroupMembershipRepository(session=session),
        bookmark_repository=GroupBookmarkRepository(session=session),
        publisher=publisher or get_event_publisher(),
        probe=get_group_service_probe(context),
    )


def get_groups_loader(params: Mapping[str, Any]) -> GroupsLoaderSource:
    """Build a loader for one request from its context ``params``.

    Raises:
        LoaderConfigurationError: If ``params`` has no authenticated actor
    """
    return GroupsLoaderSource.from_params(get_session_factory(), params)


@lru_cache
def get_message_catalog() -> MessageCatalog:
    """Get the process-wide catalog used to render Groups errors.

    Reads LEVEL_I18N_LOCALE_DIR and LEVEL_I18N_DEFAULT_LOCALE.
    """
    settings = get_i18n_settings()
    return GettextMessageCatalog(
        locale_dir=settings.locale_dir,
        locale=settings.default_locale,
    )
