# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from abc import ABC, abstractmethod

from rmq_lib.properties.queue_info import QueueInfo


class QueueQueryClient(ABC):
    """
    Abstract base class for read-only queries of queue metadata
    from a resource manager.

    A query that finds nothing returns None; this is not an error.
    All methods should raise RMQCommunicationError if the resource manager
    cannot be reached or fails to answer, and RMQError for other failures.
    """

    @abstractmethod
    def queryByName(self, name: str) -> QueueInfo | None:
        """
        Retrieve information about a single queue.

        Args:
            name (str): Name of the queue. Either the short name or the full path.

        Returns:
            QueueInfo | None: Information about the queue, or None if no such queue exists.
        """
        pass

    @abstractmethod
    def queryByNameAndSubcluster(
        self, name: str, subcluster_id: str
    ) -> QueueInfo | None:
        """
        Retrieve information about a single queue of a specific federation subcluster.

        Args:
            name (str): Name of the queue. Either the short name or the full path.
            subcluster_id (str): Identifier of the subcluster to query.

        Returns:
            QueueInfo | None: Information about the queue, or None if no such queue exists
            in the subcluster.

        Raises:
            RMQError: If the subcluster is not known.
        """
        pass

    @abstractmethod
    def queryChildren(self, parent_name: str) -> list[QueueInfo] | None:
        """
        Retrieve information about the immediate children of a queue.

        Args:
            parent_name (str): Name of the parent queue.

        Returns:
            list[QueueInfo] | None: Child queues in the order reported by the resource
            manager (empty for a leaf queue), or None if the parent queue does not exist.
        """
        pass

    @abstractmethod
    def queryAll(self) -> list[QueueInfo] | None:
        """
        Retrieve information about all queues of the hierarchy.

        Returns:
            list[QueueInfo] | None: All queues below the root queue, parents before
            their children, or None if no queue information is available.
        """
        pass
