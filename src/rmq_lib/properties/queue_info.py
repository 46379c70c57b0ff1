# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Read-only record describing a single scheduling queue.

This module defines the `QueueInfo` dataclass, which captures the identity,
capacity metrics, fair-share resources, state, preemption policy, node labels,
and limits of a queue as reported by the resource manager.
"""

from dataclasses import dataclass, field
from typing import Any

import yaml

from rmq_lib.core.common import load_yaml_dumper

from .resources import ResourceInfo
from .states import QueueState, SchedulerType

Dumper: type[yaml.Dumper] = load_yaml_dumper()


@dataclass(frozen=True)
class QueueInfo:
    """
    Dataclass representing a queue of the resource manager.

    Exactly one group of metrics is meaningful for a queue, selected by
    `scheduler_type`: resources for fair-scheduler queues, capacities for all
    other queues.
    """

    # Short name of the queue.
    name: str

    # Full hierarchical path of the queue (e.g. `root.default`).
    path: str

    # Name of the scheduler as reported by the resource manager.
    scheduler_name: str | None = None

    # State of the queue.
    state: QueueState = QueueState.UNKNOWN

    # Configured capacity as a fraction of the parent queue.
    capacity: float = 0.0

    # Currently used capacity as a fraction of the configured capacity.
    current_capacity: float = 0.0

    # Maximum capacity as a fraction of the parent queue.
    maximum_capacity: float = 0.0

    # Weight of the queue.
    weight: float = 0.0

    # Guaranteed resources of the queue (fair scheduler).
    min_resource: ResourceInfo = field(default_factory=ResourceInfo)

    # Resource limit of the queue (fair scheduler).
    max_resource: ResourceInfo = field(default_factory=ResourceInfo)

    # Resources reserved for containers of the queue (fair scheduler).
    reserved_resource: ResourceInfo = field(default_factory=ResourceInfo)

    # Steady fair share of the queue (fair scheduler).
    steady_fair_share: ResourceInfo = field(default_factory=ResourceInfo)

    # Is preemption disabled for the queue? None if not reported.
    preemption_disabled: bool | None = None

    # Is intra-queue preemption disabled for the queue? None if not reported.
    intra_queue_preemption_disabled: bool | None = None

    # Node label expression used when an application does not specify one.
    default_node_label_expression: str | None = None

    # Node labels the queue can use.
    accessible_node_labels: tuple[str, ...] = ()

    # Maximum number of applications running in parallel. None if not reported.
    max_parallel_apps: int | None = None

    # Scheduler family decoded from `scheduler_name`.
    scheduler_type: SchedulerType = field(init=False)

    def __post_init__(self):
        object.__setattr__(
            self, "scheduler_type", SchedulerType.fromStr(self.scheduler_name)
        )
        # keep the first occurrence of every label
        object.__setattr__(
            self,
            "accessible_node_labels",
            tuple(dict.fromkeys(self.accessible_node_labels)),
        )

    def isFairScheduler(self) -> bool:
        """
        Check whether the queue is governed by the fair scheduler.

        Returns:
            bool: True for fair-scheduler queues, False for all other queues.
        """
        return self.scheduler_type == SchedulerType.FAIR

    def toDict(self) -> dict[str, Any]:
        """
        Return the fields relevant for the scheduler of the queue as a dictionary.

        Returns:
            dict[str, Any]: Dictionary with camelCase keys, in display order.
            Optional fields that are not set are left out.
        """
        data: dict[str, Any] = {}
        if self.scheduler_name is not None:
            data["schedulerName"] = self.scheduler_name
        data["queueName"] = self.name
        data["queuePath"] = self.path
        data["state"] = str(self.state)

        if self.isFairScheduler():
            data["weight"] = self.weight
            data["minResource"] = self.min_resource.toDict()
            data["maxResource"] = self.max_resource.toDict()
            data["reservedResource"] = self.reserved_resource.toDict()
            data["steadyFairShare"] = self.steady_fair_share.toDict()
        else:
            data["capacity"] = self.capacity
            data["currentCapacity"] = self.current_capacity
            data["maximumCapacity"] = self.maximum_capacity
            data["weight"] = self.weight
            if self.max_parallel_apps is not None:
                data["maxParallelApps"] = self.max_parallel_apps
            if self.default_node_label_expression:
                data["defaultNodeLabelExpression"] = (
                    self.default_node_label_expression
                )
            data["accessibleNodeLabels"] = list(self.accessible_node_labels)
            if self.intra_queue_preemption_disabled is not None:
                data["intraQueuePreemptionDisabled"] = (
                    self.intra_queue_preemption_disabled
                )

        if self.preemption_disabled is not None:
            data["preemptionDisabled"] = self.preemption_disabled

        return data

    def toYaml(self) -> str:
        """
        Return all information about the queue in YAML format.

        Returns:
            str: YAML-formatted string of queue metadata.
        """
        return yaml.dump(
            self.toDict(), default_flow_style=False, sort_keys=False, Dumper=Dumper
        )
