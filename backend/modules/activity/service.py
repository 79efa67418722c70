"""
Audit logger.

Writes one immutable activity record per recipe mutation and hands it to
the broadcaster. The lifecycle service calls record_best_effort(), which
never raises: a gap in the audit trail must not undo a successful
mutation.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Callable, Optional

from modules.auth.exceptions import UserNotFoundError
from modules.auth.interfaces import ICredentialStore

from .broadcast import ACTIVITY_FEED_TOPIC, NullBroadcaster
from .interfaces import IActivityBroadcaster, IActivityStore
from .models import Activity, ActivityAction

if TYPE_CHECKING:
    from modules.recipes.models import Recipe

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


def coerce_limit(value: Any, default: int = DEFAULT_LIMIT, maximum: int = MAX_LIMIT) -> int:
    """
    Turn a user-supplied limit into a safe one.

    Missing, non-numeric or non-positive values give the default; large
    values are clamped to the maximum.
    """
    try:
        limit = int(str(value).strip()) if value is not None else default
    except ValueError:
        return default
    if limit <= 0:
        return default
    return min(limit, maximum)


class AuditLogger:
    """Appends activity records and broadcasts them."""

    def __init__(
        self,
        store: IActivityStore,
        users: ICredentialStore,
        broadcaster: Optional[IActivityBroadcaster] = None,
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = MAX_LIMIT,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self._store = store
        self._users = users
        self._broadcaster = broadcaster or NullBroadcaster()
        self._default_limit = default_limit
        self._max_limit = max_limit
        self._clock = clock

    async def record(
        self,
        actor_id: str,
        action: ActivityAction,
        recipe: "Recipe",
    ) -> Activity:
        """
        Append an activity for `recipe` and push it to subscribers.

        The actor's display name and the recipe's current title are
        copied into the record.

        Raises:
            UserNotFoundError: If the actor has no credential record
        """
        actor = await self._users.get_by_id(actor_id)
        if actor is None:
            raise UserNotFoundError(actor_id)

        activity = await self._store.append(
            Activity(
                id=str(uuid.uuid4()),
                user_id=actor.id,
                user_name=actor.display_name,
                action=action,
                recipe_id=recipe.id,
                recipe_title=recipe.title.strip(),
                created_at=self._clock(),
            )
        )

        try:
            self._broadcaster.publish(ACTIVITY_FEED_TOPIC, activity)
        except Exception:
            logger.exception(f"Broadcast failed for activity {activity.id}")

        return activity

    async def record_best_effort(
        self,
        actor_id: str,
        action: ActivityAction,
        recipe: "Recipe",
    ) -> Optional[Activity]:
        """
        Like record(), but failures are logged and swallowed.

        Returns:
            The stored Activity, or None if recording failed
        """
        try:
            return await self.record(actor_id, action, recipe)
        except Exception:
            logger.exception(f"Activity log failed for {action.value} on recipe {recipe.id}")
            return None

    async def recent(self, limit: Any = None) -> list[Activity]:
        """Newest activities first; see coerce_limit() for limit handling."""
        safe_limit = coerce_limit(limit, self._default_limit, self._max_limit)
        return await self._store.recent(safe_limit)
