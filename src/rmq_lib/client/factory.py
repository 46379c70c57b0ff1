# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import os

from rmq_lib.core.common import is_truthy
from rmq_lib.core.config import CFG
from rmq_lib.core.logger import get_logger

from .interface import QueueQueryClient
from .rest import RestQueueClient

logger = get_logger(__name__)


class ClientFactory:
    """
    Construct a QueueQueryClient for the configured resource manager.

    Environment variables take precedence over the rmq configuration file.
    """

    @staticmethod
    def getAddress() -> str:
        """
        Get the web address of the resource manager.

        Returns:
            str: Value of the `RMQ_RM_ADDRESS` environment variable if set,
            otherwise `resource_manager.address` from the configuration.
        """
        if address := os.environ.get(CFG.env_vars.rm_address):
            logger.debug(
                f"Using resource manager address from an environment variable: {address}."
            )
            return address

        return CFG.resource_manager.address

    @staticmethod
    def isFederationEnabled() -> bool:
        """
        Determine whether the resource manager runs in federation mode.

        Returns:
            bool: Value of the `RMQ_FEDERATION` environment variable if set,
            otherwise `federation.enabled` from the configuration.
        """
        if (value := os.environ.get(CFG.env_vars.federation)) is not None:
            return is_truthy(value)

        return CFG.federation.enabled

    @staticmethod
    def makeClient() -> QueueQueryClient:
        """
        Construct a client for the configured resource manager.

        Returns:
            QueueQueryClient: Client querying the REST API of the resource manager.
        """
        address = ClientFactory.getAddress()
        logger.debug(f"Creating REST client for '{address}'.")
        return RestQueueClient(
            address, CFG.federation.subclusters, CFG.timeouts.http
        )
