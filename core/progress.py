"""
Per-page progress notification.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]


def completion_percentage(completed: int, total: int) -> int:
    """
    Integer completion percentage, rounding halves up.

    Example:
        >>> [completion_percentage(i, 3) for i in (1, 2, 3)]
        [33, 67, 100]
    """
    if total <= 0:
        raise ValueError("Total must be positive")
    # round(100 * completed / total) with halves rounded up, in integers
    return (200 * completed + total) // (2 * total)


class ProgressReporter:
    """
    Fire-and-forget progress emitter.

    The callback receives an integer percentage after each completed
    page. Exceptions raised by the callback are logged and ignored.
    """

    def __init__(self, callback: Optional[ProgressCallback], total: int):
        self.callback = callback
        self.total = total
        self.completed = 0
        self.last_percentage = 0

    def advance(self) -> int:
        """
        Mark one more page complete and notify the observer.

        Returns:
            The percentage that was emitted.
        """
        self.completed += 1
        percentage = completion_percentage(self.completed, self.total)
        self.last_percentage = percentage

        if self.callback is not None:
            try:
                self.callback(percentage)
            except Exception as e:
                logger.warning(f"Progress observer failed at {percentage}%: {e}")

        return percentage
