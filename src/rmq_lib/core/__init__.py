# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Core infrastructure for rmq.

This module collects the foundational pieces shared by all rmq commands:
configuration, error types, structured logging, and help formatting for the
command-line interface.
"""
