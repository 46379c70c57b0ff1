# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from tabulate import tabulate

from rmq_lib.core.common import format_decimal, format_percentage
from rmq_lib.core.config import CFG
from rmq_lib.properties.queue_info import QueueInfo


class QueuePresenter:
    """
    Presents information about a single queue of the resource manager.
    """

    def __init__(
        self,
        queue: QueueInfo,
        federation: bool = False,
        subcluster_id: str | None = None,
    ):
        """
        Initialize the presenter.

        Args:
            queue (QueueInfo): The queue to present.
            federation (bool): Is the resource manager running in federation mode?
            subcluster_id (str | None): Subcluster the queue was obtained from, if any.
        """
        self._queue = queue
        self._federation = federation
        self._subcluster_id = subcluster_id

    def createReport(self) -> str:
        """
        Create a human-readable report about the queue, including the header.

        Returns:
            str: The report, each line terminated by a newline.
        """
        lines = self._createHeader()
        if self._queue.isFairScheduler():
            lines.extend(self._createFairSchedulerReport())
        else:
            lines.extend(self._createCapacitySchedulerReport())

        return "".join(f"{line}\n" for line in lines)

    def createYaml(self) -> str:
        """
        Create the YAML representation of the queue.
        """
        return self._queue.toYaml()

    def _createHeader(self) -> list[str]:
        lines = []
        if self._federation:
            lines.append("Using YARN Federation mode.")

        if self._subcluster_id:
            lines.append(f"SubClusterId : {self._subcluster_id}, Queue Information : ")
        else:
            lines.append("Queue Information : ")

        return lines

    def _createCapacitySchedulerReport(self) -> list[str]:
        """
        Create the report for queues of the capacity scheduler (and any
        other scheduler that is not the fair scheduler).

        Returns:
            list[str]: Lines of the report.
        """
        queue = self._queue
        lines = []

        if queue.scheduler_name is not None:
            lines.append(f"Scheduler Name : {queue.scheduler_name}")
        lines.append(f"Queue Name : {queue.name}")
        lines.append(f"Queue Path : {queue.path}")

        lines.append(f"\tState : {queue.state}")
        lines.append(f"\tCapacity : {format_percentage(queue.capacity)}")
        lines.append(
            f"\tCurrent Capacity : {format_percentage(queue.current_capacity)}"
        )
        lines.append(
            f"\tMaximum Capacity : {format_percentage(queue.maximum_capacity)}"
        )
        lines.append(f"\tWeight : {format_decimal(queue.weight)}")
        lines.append(
            f"\tMaximum Parallel Apps : {QueuePresenter._formatOptional(queue.max_parallel_apps)}"
        )

        label_expression = queue.default_node_label_expression
        if not label_expression or not label_expression.strip():
            label_expression = CFG.queue_presenter.default_partition
        lines.append(f"\tDefault Node Label expression : {label_expression}")
        lines.append(
            f"\tAccessible Node Labels : {','.join(queue.accessible_node_labels)}"
        )

        # a set flag means "disabled" for both kinds of preemption
        if queue.preemption_disabled is not None:
            lines.append(
                f"\tPreemption : {'disabled' if queue.preemption_disabled else 'enabled'}"
            )
        if queue.intra_queue_preemption_disabled is not None:
            lines.append(
                f"\tIntra-queue Preemption : {'disabled' if queue.intra_queue_preemption_disabled else 'enabled'}"
            )

        return lines

    def _createFairSchedulerReport(self) -> list[str]:
        """
        Create the report for queues of the fair scheduler.

        Returns:
            list[str]: Lines of the report.
        """
        queue = self._queue
        lines = []

        if queue.scheduler_name is not None:
            lines.append(f"Scheduler Name : {queue.scheduler_name}")
        lines.append(f"Queue Name : {queue.name}")

        lines.append(f"\tWeight : {format_decimal(queue.weight)}")
        lines.append(f"\tState : {queue.state}")
        lines.append(f"\tMinResource : {queue.min_resource}")
        lines.append(f"\tMaxResource : {queue.max_resource}")
        lines.append(f"\tReservedResource : {queue.reserved_resource}")
        lines.append(f"\tSteadyFairShare : {queue.steady_fair_share}")

        # unlike in the capacity report, a set flag is shown as "enabled"
        if queue.preemption_disabled is not None:
            lines.append(
                f"\tQueue Preemption : {'enabled' if queue.preemption_disabled else 'disabled'}"
            )

        return lines

    @staticmethod
    def _formatOptional(value: object | None) -> str:
        return "" if value is None else str(value)


class QueuesPresenter:
    """
    Presents information about a list of queues of the resource manager as a table.
    """

    # Column headers of the queues table, in display order.
    HEADERS = [
        "Queue Name",
        "Queue Path",
        "State",
        "Capacity",
        "Current Capacity",
        "Maximum Capacity",
        "Weight",
        "Maximum Parallel Apps",
    ]

    def __init__(self, queues: list[QueueInfo]):
        """
        Initialize the presenter with a list of queues.

        Args:
            queues (list[QueueInfo]): Queues to present, in display order.
        """
        self._queues = queues

    def createQueuesTable(self) -> str:
        """
        Create a table of the queues preceded by a title line stating their number.

        Returns:
            str: The title and the table, terminated by a newline.
        """
        title = f"{len(self._queues)} queues were found"
        table = tabulate(
            [QueuesPresenter._createQueueRow(queue) for queue in self._queues],
            headers=QueuesPresenter.HEADERS,
            tablefmt=CFG.queue_presenter.table_format,
            disable_numparse=True,
        )

        return f"{title}\n{table}\n"

    def createYaml(self) -> str:
        """
        Create the YAML representation of all queues, one document per queue.
        """
        return "".join(f"---\n{queue.toYaml()}" for queue in self._queues)

    @staticmethod
    def _createQueueRow(queue: QueueInfo) -> list[str]:
        """
        Create a single row of the queues table.

        Args:
            queue (QueueInfo): Queue to show information for.

        Returns:
            list[str]: Formatted values, one for each column of `HEADERS`.
        """
        return [
            queue.name,
            queue.path,
            str(queue.state),
            format_percentage(queue.capacity),
            format_percentage(queue.current_capacity),
            format_percentage(queue.maximum_capacity),
            format_decimal(queue.weight),
            QueuePresenter._formatOptional(queue.max_parallel_apps),
        ]
