# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from unittest.mock import patch

import pytest
import yaml

from rmq_lib.core.config import CFG
from rmq_lib.properties.queue_info import QueueInfo
from rmq_lib.properties.resources import ResourceInfo
from rmq_lib.properties.states import QueueState
from rmq_lib.queue.presenter import QueuePresenter, QueuesPresenter

CAPACITY_ONLY_LINES = ("Capacity :", "Current Capacity :", "Maximum Capacity :", "Queue Path :")
FAIR_ONLY_LINES = ("MinResource", "MaxResource", "ReservedResource", "SteadyFairShare")


def _capacity_queue(**kwargs) -> QueueInfo:
    defaults = {
        "name": "default",
        "path": "root.default",
        "scheduler_name": "CapacityScheduler",
        "state": QueueState.RUNNING,
        "capacity": 0.25,
        "current_capacity": 0.0,
        "maximum_capacity": 1.0,
        "weight": 1.0,
    }
    return QueueInfo(**(defaults | kwargs))


def _fair_queue(**kwargs) -> QueueInfo:
    defaults = {
        "name": "root.default",
        "path": "root.default",
        "scheduler_name": "FairScheduler",
        "state": QueueState.RUNNING,
        "weight": 2.5,
        "min_resource": ResourceInfo(1024, 1),
        "max_resource": ResourceInfo(8192, 8),
        "reserved_resource": ResourceInfo(0, 0),
        "steady_fair_share": ResourceInfo(4096, 4),
    }
    return QueueInfo(**(defaults | kwargs))


def test_queue_presenter_init_sets_fields_correctly():
    queue = _capacity_queue()

    presenter = QueuePresenter(queue, True, "sc-1")

    assert presenter._queue == queue
    assert presenter._federation is True
    assert presenter._subcluster_id == "sc-1"


def test_queue_presenter_capacity_report_full_output():
    report = QueuePresenter(_capacity_queue()).createReport()

    assert report == (
        "Queue Information : \n"
        "Scheduler Name : CapacityScheduler\n"
        "Queue Name : default\n"
        "Queue Path : root.default\n"
        "\tState : RUNNING\n"
        "\tCapacity : 25.00%\n"
        "\tCurrent Capacity : 0.00%\n"
        "\tMaximum Capacity : 100.00%\n"
        "\tWeight : 1.00\n"
        "\tMaximum Parallel Apps : \n"
        f"\tDefault Node Label expression : {CFG.queue_presenter.default_partition}\n"
        "\tAccessible Node Labels : \n"
    )


def test_queue_presenter_capacity_report_with_all_fields():
    queue = _capacity_queue(
        capacity=0.5,
        current_capacity=0.125,
        maximum_capacity=0.75,
        weight=3.0,
        max_parallel_apps=20,
        default_node_label_expression="gpu",
        accessible_node_labels=("gpu", "ssd", "*"),
        preemption_disabled=False,
        intra_queue_preemption_disabled=True,
    )

    lines = QueuePresenter(queue).createReport().splitlines()

    assert "\tCapacity : 50.00%" in lines
    assert "\tCurrent Capacity : 12.50%" in lines
    assert "\tMaximum Capacity : 75.00%" in lines
    assert "\tWeight : 3.00" in lines
    assert "\tMaximum Parallel Apps : 20" in lines
    assert "\tDefault Node Label expression : gpu" in lines
    assert "\tAccessible Node Labels : gpu,ssd,*" in lines
    assert lines[-2:] == [
        "\tPreemption : enabled",
        "\tIntra-queue Preemption : disabled",
    ]


@pytest.mark.parametrize(
    "flag, expected", [(True, "disabled"), (False, "enabled")]
)
def test_queue_presenter_capacity_report_preemption_polarity(flag, expected):
    queue = _capacity_queue(
        preemption_disabled=flag, intra_queue_preemption_disabled=flag
    )

    lines = QueuePresenter(queue).createReport().splitlines()

    assert f"\tPreemption : {expected}" in lines
    assert f"\tIntra-queue Preemption : {expected}" in lines


def test_queue_presenter_capacity_report_only_intra_queue_flag():
    queue = _capacity_queue(intra_queue_preemption_disabled=False)

    report = QueuePresenter(queue).createReport()

    assert "\tPreemption :" not in report
    assert "\tIntra-queue Preemption : enabled\n" in report


@pytest.mark.parametrize("expression", [None, "", "   "])
def test_queue_presenter_capacity_report_blank_label_expression_uses_default_partition(
    expression,
):
    queue = _capacity_queue(default_node_label_expression=expression)

    with patch.object(CFG.queue_presenter, "default_partition", "<DEFAULT>"):
        report = QueuePresenter(queue).createReport()

    assert "\tDefault Node Label expression : <DEFAULT>\n" in report


def test_queue_presenter_capacity_report_without_scheduler_name():
    queue = _capacity_queue(scheduler_name=None)

    lines = QueuePresenter(queue).createReport().splitlines()

    assert lines[1] == "Queue Name : default"
    assert not any(line.startswith("Scheduler Name") for line in lines)


@pytest.mark.parametrize("scheduler", ["CapacityScheduler", "FifoScheduler", None])
def test_queue_presenter_non_fair_report_never_shows_fair_lines(scheduler):
    queue = _capacity_queue(scheduler_name=scheduler, preemption_disabled=True)

    report = QueuePresenter(queue).createReport()

    for text in FAIR_ONLY_LINES:
        assert text not in report
    assert "Queue Preemption" not in report


def test_queue_presenter_fair_report_full_output():
    queue = _fair_queue(preemption_disabled=True)

    report = QueuePresenter(queue).createReport()

    assert report == (
        "Queue Information : \n"
        "Scheduler Name : FairScheduler\n"
        "Queue Name : root.default\n"
        "\tWeight : 2.50\n"
        "\tState : RUNNING\n"
        "\tMinResource : <memory: 1024, vCores: 1>\n"
        "\tMaxResource : <memory: 8192, vCores: 8>\n"
        "\tReservedResource : <memory: 0, vCores: 0>\n"
        "\tSteadyFairShare : <memory: 4096, vCores: 4>\n"
        "\tQueue Preemption : enabled\n"
    )


def test_queue_presenter_fair_report_preemption_flag_false():
    queue = _fair_queue(preemption_disabled=False)

    report = QueuePresenter(queue).createReport()

    assert report.endswith("\tQueue Preemption : disabled\n")


def test_queue_presenter_fair_report_never_shows_capacity_lines():
    queue = _fair_queue(
        capacity=0.5,
        maximum_capacity=1.0,
        accessible_node_labels=("gpu",),
        intra_queue_preemption_disabled=True,
    )

    report = QueuePresenter(queue).createReport()

    for text in CAPACITY_ONLY_LINES:
        assert text not in report
    assert "Accessible Node Labels" not in report
    assert "Intra-queue Preemption" not in report
    assert "Preemption" not in report


def test_queue_presenter_header_federation_mode():
    report = QueuePresenter(_capacity_queue(), federation=True).createReport()

    assert report.startswith("Using YARN Federation mode.\nQueue Information : \n")


def test_queue_presenter_header_subcluster():
    report = QueuePresenter(
        _capacity_queue(), federation=True, subcluster_id="sc-1"
    ).createReport()

    assert report.startswith(
        "Using YARN Federation mode.\nSubClusterId : sc-1, Queue Information : \n"
    )


def test_queue_presenter_create_yaml():
    queue = _capacity_queue()

    result = QueuePresenter(queue).createYaml()

    assert yaml.safe_load(result)["queueName"] == "default"


def test_queues_presenter_table_title_and_headers():
    queues = [
        _capacity_queue(),
        _capacity_queue(
            name="analytics",
            path="root.analytics",
            state=QueueState.STOPPED,
            capacity=0.75,
            current_capacity=0.5,
            maximum_capacity=0.8,
            weight=2.0,
            max_parallel_apps=5,
        ),
    ]

    output = QueuesPresenter(queues).createQueuesTable()
    lines = output.splitlines()

    assert lines[0] == "2 queues were found"
    header = next(line for line in lines if "Queue Name" in line)
    positions = [header.index(h) for h in QueuesPresenter.HEADERS]
    assert positions == sorted(positions)

    analytics = next(line for line in lines if "root.analytics" in line)
    cells = [cell.strip() for cell in analytics.strip("|").split("|")]
    assert cells == [
        "analytics",
        "root.analytics",
        "STOPPED",
        "75.00%",
        "50.00%",
        "80.00%",
        "2.00",
        "5",
    ]


def test_queues_presenter_table_keeps_query_order():
    queues = [
        _capacity_queue(name="zeta", path="root.zeta"),
        _capacity_queue(name="alpha", path="root.alpha"),
    ]

    output = QueuesPresenter(queues).createQueuesTable()

    assert output.index("root.zeta") < output.index("root.alpha")


def test_queues_presenter_empty_table_still_has_headers():
    output = QueuesPresenter([]).createQueuesTable()
    lines = output.splitlines()

    assert lines[0] == "0 queues were found"
    header = next(line for line in lines if "Queue Name" in line)
    for h in QueuesPresenter.HEADERS:
        assert h in header


def test_queues_presenter_headers_are_fixed():
    assert QueuesPresenter.HEADERS == [
        "Queue Name",
        "Queue Path",
        "State",
        "Capacity",
        "Current Capacity",
        "Maximum Capacity",
        "Weight",
        "Maximum Parallel Apps",
    ]


def test_queues_presenter_create_yaml_one_document_per_queue():
    queues = [
        _capacity_queue(),
        _capacity_queue(name="analytics", path="root.analytics"),
    ]

    documents = list(yaml.safe_load_all(QueuesPresenter(queues).createYaml()))

    assert [d["queuePath"] for d in documents] == ["root.default", "root.analytics"]


def test_queues_presenter_create_yaml_empty():
    assert QueuesPresenter([]).createYaml() == ""
