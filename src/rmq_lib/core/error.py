# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Exception types used throughout rmq.

Not-found results and usage errors are not exceptions: queries return None
and the command prints a message. The exceptions defined here signal that a
query could not be answered at all. Each carries the exit code used by rmq
commands to report the failure.
"""

from rmq_lib.core.config import CFG


class RMQError(Exception):
    """Common exception type for all recoverable rmq errors."""

    exit_code = CFG.exit_codes.default


class RMQCommunicationError(RMQError):
    """
    Raised when the resource manager cannot be reached, times out,
    or answers with an error.
    """

    exit_code = CFG.exit_codes.communication
