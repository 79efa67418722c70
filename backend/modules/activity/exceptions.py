"""
Activity module exceptions.
"""

from shared.exceptions import NotFoundError, ServiceUnavailableError


class UnknownTopicError(NotFoundError):
    """Raised when subscribing to a topic the hub does not serve."""

    def __init__(self, topic: str):
        super().__init__(f"Unknown topic: {topic}", details={"topic": topic})


class PushUnavailableError(ServiceUnavailableError):
    """Raised when live push is switched off; clients should poll instead."""

    def __init__(self):
        super().__init__("Live activity push is unavailable, poll /api/activities instead")
