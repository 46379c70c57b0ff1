# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Presentation of queues of the resource manager.

This module defines `QueuePresenter`, which renders a detailed report of a
single queue (capacity-based or fair-share, depending on the scheduler), and
`QueuesPresenter`, which renders a list of queues as a table. The `queue`
command ties them to the queries of the resource manager.
"""

from .cli import queue
from .presenter import QueuePresenter, QueuesPresenter

__all__ = [
    "QueuePresenter",
    "QueuesPresenter",
    "queue",
]
