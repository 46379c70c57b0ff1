# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Clients for querying queue metadata from the resource manager.

This module provides:

- `QueueQueryClient`: the abstract interface of the three read-only queries
  rmq performs (single queue, children of a queue, all queues), including the
  variant routed to a single federation subcluster.

- `RestQueueClient`: an implementation talking to the scheduler endpoint of
  the resource manager's REST API.

- `ClientFactory`: selects the address of the resource manager and the
  federation mode from the environment and the rmq configuration.
"""

from .factory import ClientFactory
from .interface import QueueQueryClient
from .rest import RestQueueClient

__all__ = [
    "ClientFactory",
    "QueueQueryClient",
    "RestQueueClient",
]
