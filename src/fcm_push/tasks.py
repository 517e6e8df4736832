"""Response callback dispatch."""

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


def process_on_response(
    on_response: Callable[[Any], None] | None, notification: Any
) -> None:
    """Hand the finalized *notification* to *on_response*.

    No-op when no callback was registered. A failing callback is logged
    and does not affect delivery bookkeeping.
    """
    if on_response is None:
        return
    try:
        on_response(notification)
    except Exception:
        logger.exception(
            "on_response callback failed",
            extra={"notification_status": str(getattr(notification, "status", None))},
        )
