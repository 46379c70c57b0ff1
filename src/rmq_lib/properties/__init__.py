# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Structured metadata describing scheduling queues.

This module provides the read-only records that rmq receives from the resource
manager: the queue itself (`QueueInfo`), its lifecycle state (`QueueState`),
the scheduler governing it (`SchedulerType`), and amounts of cluster
resources (`ResourceInfo`).
"""

from .queue_info import QueueInfo
from .resources import ResourceInfo
from .states import QueueState, SchedulerType

__all__ = [
    "QueueInfo",
    "QueueState",
    "ResourceInfo",
    "SchedulerType",
]
