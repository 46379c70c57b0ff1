# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from enum import Enum
from typing import Self

from rmq_lib.core.logger import get_logger

logger = get_logger(__name__)

# Name under which the resource manager reports the fair scheduler.
FAIR_SCHEDULER_NAME = "FairScheduler"


class QueueState(Enum):
    """
    Lifecycle state of a queue as reported by the resource manager.
    """

    RUNNING = 1
    STOPPED = 2
    DRAINING = 3
    UNKNOWN = 4

    def __str__(self) -> str:
        """
        Return the string representation of the enum variant.

        Returns:
            str: The name of the state in uppercase, as printed by the resource manager.
        """
        return self.name

    @classmethod
    def fromStr(cls, s: str | None) -> Self:
        """
        Convert a string to the corresponding QueueState enum variant.

        Args:
            s (str | None): String representation of the state (case-insensitive).

        Returns:
            QueueState: Corresponding enum variant. Returns UNKNOWN if no match is found.
        """
        if not s:
            return cls.UNKNOWN

        try:
            return cls[s.strip().upper()]
        except KeyError:
            logger.debug(f"Unknown queue state '{s}'.")
            return cls.UNKNOWN


class SchedulerType(Enum):
    """
    Family of the scheduler governing a queue.

    Only the fair scheduler is rendered differently; the capacity scheduler
    and every other scheduler (e.g. FIFO) share the capacity-based rendering.
    """

    FAIR = 1
    CAPACITY = 2

    @classmethod
    def fromStr(cls, s: str | None) -> Self:
        """
        Decode the scheduler name reported by the resource manager.

        Args:
            s (str | None): Name of the scheduler, e.g. "FairScheduler" or "CapacityScheduler".
                The comparison is exact (case-sensitive).

        Returns:
            SchedulerType: FAIR if `s` is exactly "FairScheduler", CAPACITY otherwise.
        """
        if s == FAIR_SCHEDULER_NAME:
            return cls.FAIR

        return cls.CAPACITY
