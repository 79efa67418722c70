"""
Activity module.

Append-only audit trail of recipe mutations and the live feed that
pushes each new record to subscribers.

Public API:
- AuditLogger: records activities (best-effort from the lifecycle core)
- BroadcastHub / NullBroadcaster: push channel implementations
- Activity, ActivityAction: record model
"""

from .interfaces import IActivityBroadcaster, IActivityStore
from .models import Activity, ActivityAction
from .broadcast import ACTIVITY_FEED_TOPIC, BroadcastHub, NullBroadcaster
from .service import AuditLogger

__all__ = [
    # Interfaces
    "IActivityBroadcaster",
    "IActivityStore",
    # Models
    "Activity",
    "ActivityAction",
    # Implementations
    "ACTIVITY_FEED_TOPIC",
    "BroadcastHub",
    "NullBroadcaster",
    "AuditLogger",
]
