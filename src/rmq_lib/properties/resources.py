# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Amounts of cluster resources reported for fair-scheduler queues.
"""

from dataclasses import dataclass
from typing import Any, Self


@dataclass(frozen=True)
class ResourceInfo:
    """
    Amount of memory and virtual cores.
    """

    # Memory in megabytes.
    memory: int = 0

    # Number of virtual cores.
    vcores: int = 0

    def __str__(self) -> str:
        return f"<memory: {self.memory}, vCores: {self.vcores}>"

    @classmethod
    def fromDict(cls, data: dict[str, Any] | None) -> Self:
        """
        Construct ResourceInfo from a resource object of the REST API.

        Args:
            data (dict[str, Any] | None): Dictionary with keys `memory` and `vCores`.
                Missing dictionary or missing keys are treated as zero.

        Returns:
            ResourceInfo: The parsed amount of resources.
        """
        if not data:
            return cls()

        return cls(memory=int(data.get("memory", 0)), vcores=int(data.get("vCores", 0)))

    def toDict(self) -> dict[str, int]:
        return {"memory": self.memory, "vCores": self.vcores}
