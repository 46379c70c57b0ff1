# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core implementation of the rmq command-line tool.

This package provides the logic behind rmq: the read-only queries of queue
metadata from a cluster resource manager (optionally routed to a single
federation subcluster), the records describing queues, and the presenters
rendering them as reports and tables. All rmq CLI commands ultimately
delegate to the functionality implemented here.
"""

from .rmq import __version__, cli

__all__ = [
    "__version__",
    "cli",
    "client",
    "core",
    "properties",
    "queue",
]
