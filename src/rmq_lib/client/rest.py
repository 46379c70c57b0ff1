# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Queue queries over the REST API of the resource manager.

`RestQueueClient` downloads the scheduler document
(`GET <address>/ws/v1/cluster/scheduler`) once per query and converts the
queue hierarchy it describes into `QueueInfo` records. The capacity, fair and
FIFO schedulers are supported.
"""

import http.client
import json
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from typing import Any

from rmq_lib.core.config import CFG
from rmq_lib.core.error import RMQCommunicationError, RMQError
from rmq_lib.core.logger import get_logger
from rmq_lib.properties.queue_info import QueueInfo
from rmq_lib.properties.resources import ResourceInfo
from rmq_lib.properties.states import QueueState

from .interface import QueueQueryClient

logger = get_logger(__name__)


# Names of the schedulers as reported by the RPC interface of the resource manager,
# keyed by the scheduler type used in the REST API.
_SCHEDULER_NAMES = {
    "capacityScheduler": "CapacityScheduler",
    "fairScheduler": "FairScheduler",
    "fifoScheduler": "FifoScheduler",
}


@dataclass
class _QueueNode:
    """Queue together with its child queues."""

    info: QueueInfo
    children: list["_QueueNode"] = field(default_factory=list)

    def walk(self):
        """Yield this node and all its descendants, parents before children."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, name: str) -> "_QueueNode | None":
        """Return the first node whose name, full path or last path component is `name`."""
        for node in self.walk():
            short_name = node.info.path.rsplit(".", 1)[-1]
            if name in (node.info.name, node.info.path, short_name):
                return node

        return None


class RestQueueClient(QueueQueryClient):
    """
    Implementation of QueueQueryClient using the REST API of the resource manager.
    """

    def __init__(
        self,
        address: str,
        subclusters: dict[str, str] | None = None,
        timeout: int | None = None,
    ):
        """
        Initialize the client.

        Args:
            address (str): Web address of the resource manager
                (or of the router in federation mode), e.g. `http://rm:8088`.
            subclusters (dict[str, str] | None): Web addresses of individual federation
                subclusters keyed by subcluster id.
            timeout (int | None): Timeout of a single request in seconds.
                Defaults to `CFG.timeouts.http`.
        """
        self._address = address.rstrip("/")
        self._subclusters = subclusters or {}
        self._timeout = timeout if timeout is not None else CFG.timeouts.http

    def queryByName(self, name: str) -> QueueInfo | None:
        node = self._getHierarchy(self._address).find(name)
        return node.info if node else None

    def queryByNameAndSubcluster(
        self, name: str, subcluster_id: str
    ) -> QueueInfo | None:
        if not (address := self._subclusters.get(subcluster_id)):
            raise RMQError(
                f"Unknown subcluster '{subcluster_id}'. Known subclusters: {', '.join(self._subclusters) or 'none'}."
            )

        node = self._getHierarchy(address.rstrip("/")).find(name)
        return node.info if node else None

    def queryChildren(self, parent_name: str) -> list[QueueInfo] | None:
        if not (parent := self._getHierarchy(self._address).find(parent_name)):
            return None

        return [child.info for child in parent.children]

    def queryAll(self) -> list[QueueInfo] | None:
        root = self._getHierarchy(self._address)
        # the root queue itself is not listed
        return [node.info for node in root.walk() if node is not root]

    def _getHierarchy(self, address: str) -> _QueueNode:
        """
        Download the scheduler document and convert it into a queue hierarchy.

        Args:
            address (str): Web address of the resource manager to query.

        Returns:
            _QueueNode: The root queue.

        Raises:
            RMQCommunicationError: If the request fails.
            RMQError: If the response cannot be interpreted.
        """
        url = f"{address}{CFG.resource_manager.scheduler_endpoint}"
        document = self._fetchJson(url)

        try:
            scheduler_info = document["scheduler"]["schedulerInfo"]
        except (KeyError, TypeError) as e:
            raise RMQError(
                f"Unexpected response from the resource manager at '{url}': missing scheduler information."
            ) from e

        root = _parse_scheduler_info(scheduler_info)
        logger.debug(
            f"Loaded {sum(1 for _ in root.walk())} queues from scheduler '{root.info.scheduler_name}'."
        )
        return root

    def _fetchJson(self, url: str) -> Any:
        """
        Perform a GET request and decode the JSON body of the response.

        Raises:
            RMQCommunicationError: If the request fails or times out.
            RMQError: If the body is not valid JSON.
        """
        logger.debug(f"Requesting '{url}'.")
        request = urllib.request.Request(url, headers={"Accept": "application/json"})

        try:
            with urllib.request.urlopen(request, timeout=self._timeout) as response:
                body = response.read()
        except urllib.error.HTTPError as e:
            raise RMQCommunicationError(
                f"Resource manager at '{url}' returned HTTP {e.code}: {e.reason}."
            ) from e
        except urllib.error.URLError as e:
            raise RMQCommunicationError(
                f"Could not connect to the resource manager at '{url}': {e.reason}."
            ) from e
        except TimeoutError as e:
            raise RMQCommunicationError(
                f"Request to the resource manager at '{url}' timed out after {self._timeout} seconds."
            ) from e
        except (OSError, http.client.HTTPException) as e:
            raise RMQCommunicationError(
                f"Connection to the resource manager at '{url}' failed: {e!r}."
            ) from e

        try:
            return json.loads(body)
        except json.JSONDecodeError as e:
            raise RMQError(
                f"Could not decode response from the resource manager at '{url}': {e}."
            ) from e


def _parse_scheduler_info(data: dict[str, Any]) -> _QueueNode:
    """
    Convert the `schedulerInfo` object of the REST API into a queue hierarchy.

    Raises:
        RMQError: If the scheduler is not supported or its description is malformed.
    """
    scheduler_type = data.get("type")
    scheduler_name = _SCHEDULER_NAMES.get(scheduler_type)

    try:
        match scheduler_type:
            case "capacityScheduler":
                return _parse_capacity_queue(data, scheduler_name)
            case "fairScheduler":
                return _parse_fair_queue(data["rootQueue"], scheduler_name)
            case "fifoScheduler":
                return _parse_fifo_scheduler(data, scheduler_name)
            case _:
                raise RMQError(f"Unsupported scheduler type '{scheduler_type}'.")
    except (KeyError, TypeError, ValueError) as e:
        raise RMQError(f"Malformed description of scheduler '{scheduler_type}': {e}.") from e


def _as_list(container: dict[str, Any] | None, key: str) -> list[dict[str, Any]]:
    """
    Return the list stored under `key` of a REST collection object.

    A collection with a single item may be serialized as that item alone
    rather than as a list of one item.
    """
    if not container:
        return []

    items = container.get(key)
    if items is None:
        return []
    if isinstance(items, dict):
        return [items]

    return list(items)


def _as_labels(value: Any) -> tuple[str, ...]:
    """Return node labels as a tuple. A single label may be serialized as a bare string."""
    if not value:
        return ()
    if isinstance(value, str):
        return (value,)

    return tuple(value)


def _optional_bool(value: Any) -> bool | None:
    if value is None:
        return None

    return bool(value)


def _optional_int(value: Any) -> int | None:
    if value is None:
        return None

    return int(value)


def _parse_capacity_queue(data: dict[str, Any], scheduler_name: str) -> _QueueNode:
    """
    Parse a queue of the capacity scheduler and all its descendants.
    Capacities are reported as percentages and converted to fractions.
    """
    name = data["queueName"]
    info = QueueInfo(
        name=name,
        path=data.get("queuePath") or name,
        scheduler_name=scheduler_name,
        state=QueueState.fromStr(data.get("state")),
        capacity=float(data.get("capacity", 0.0)) / 100,
        current_capacity=float(data.get("usedCapacity", 0.0)) / 100,
        maximum_capacity=float(data.get("maxCapacity", 0.0)) / 100,
        weight=float(data.get("weight", 0.0)),
        preemption_disabled=_optional_bool(data.get("preemptionDisabled")),
        intra_queue_preemption_disabled=_optional_bool(
            data.get("intraQueuePreemptionDisabled")
        ),
        default_node_label_expression=data.get("defaultNodeLabelExpression"),
        accessible_node_labels=_as_labels(data.get("nodeLabels")),
        max_parallel_apps=_optional_int(data.get("maxParallelApps")),
    )

    children = [
        _parse_capacity_queue(child, scheduler_name)
        for child in _as_list(data.get("queues"), "queue")
    ]
    return _QueueNode(info, children)


def _parse_fair_queue(data: dict[str, Any], scheduler_name: str) -> _QueueNode:
    """
    Parse a queue of the fair scheduler and all its descendants.
    The fair scheduler reports the full path of the queue as its name.
    """
    path = data["queueName"]
    preemptable = data.get("preemptable")
    info = QueueInfo(
        name=path,
        path=path,
        scheduler_name=scheduler_name,
        state=QueueState.fromStr(data.get("state")),
        weight=float(data.get("weight", 1.0)),
        min_resource=ResourceInfo.fromDict(data.get("minResources")),
        max_resource=ResourceInfo.fromDict(data.get("maxResources")),
        reserved_resource=ResourceInfo.fromDict(data.get("reservedResources")),
        steady_fair_share=ResourceInfo.fromDict(data.get("steadyFairResources")),
        preemption_disabled=None if preemptable is None else not preemptable,
    )

    children = [
        _parse_fair_queue(child, scheduler_name)
        for child in _as_list(data.get("childQueues"), "queue")
    ]
    return _QueueNode(info, children)


def _parse_fifo_scheduler(data: dict[str, Any], scheduler_name: str) -> _QueueNode:
    """
    Parse the FIFO scheduler, which manages a single `default` queue
    placed below a synthetic root. Its capacities are already fractions.
    """
    root = QueueInfo(
        name="root",
        path="root",
        scheduler_name=scheduler_name,
        state=QueueState.RUNNING,
        capacity=1.0,
        current_capacity=float(data.get("usedCapacity", 0.0)),
        maximum_capacity=1.0,
    )
    default = QueueInfo(
        name="default",
        path="root.default",
        scheduler_name=scheduler_name,
        state=QueueState.fromStr(data.get("qstate")),
        capacity=float(data.get("capacity", 1.0)),
        current_capacity=float(data.get("usedCapacity", 0.0)),
        maximum_capacity=float(data.get("capacity", 1.0)),
    )

    return _QueueNode(root, [_QueueNode(default)])
