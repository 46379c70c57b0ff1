# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


import sys
from typing import NoReturn, TextIO

import click

from rmq_lib.client.factory import ClientFactory
from rmq_lib.client.interface import QueueQueryClient
from rmq_lib.core.click_format import RAW_ARGS_KEY, UsageOnErrorCommand
from rmq_lib.core.config import CFG
from rmq_lib.core.error import RMQError
from rmq_lib.core.logger import get_logger

from .presenter import QueuePresenter, QueuesPresenter

logger = get_logger(__name__)

# Parent queue name selecting all queues of the hierarchy (case-insensitive).
ALL_QUEUES_TAG = "all"

# Maximal number of arguments accepted together with `-status`.
STATUS_MAX_ARGS = 4

# Number of arguments required together with `-list`.
LIST_NARGS = 2

# Switches that do not count towards the argument limits.
_UNCOUNTED_ARGS = {"-yaml", "--yaml"}


@click.command(
    short_help="Display information about queues of the resource manager.",
    help="""Display information about queues of the resource manager.

Exactly one of `-status`, `-list` and `-help` must be specified.""",
    cls=UsageOnErrorCommand,
    help_options_color="bright_blue",
    add_help_option=False,
)
@click.option(
    "-status",
    "--status",
    "status",
    type=str,
    default=None,
    metavar="QUEUE_NAME",
    help="List queue information about the given queue.",
)
@click.option(
    "-list",
    "--list",
    "parent",
    type=str,
    default=None,
    metavar="PARENT_QUEUE_NAME",
    help=f"Display all child queues of the given parent queue. If the value is `{ALL_QUEUES_TAG}`, all queues are displayed.",
)
@click.option(
    "-subClusterId",
    "--subClusterId",
    "subcluster_id",
    type=str,
    default=None,
    metavar="SUBCLUSTER_ID",
    help="Query a specific subcluster. Only used with `-status` in federation mode.",
)
@click.option(
    "-yaml", "--yaml", "yaml", is_flag=True, help="Output queue metadata in YAML format."
)
@click.option(
    "-help", "--help", "-h", "show_help", is_flag=True, help="Display this help and exit."
)
@click.pass_context
def queue(
    ctx: click.Context,
    status: str | None,
    parent: str | None,
    subcluster_id: str | None,
    yaml: bool,
    show_help: bool,
) -> NoReturn:
    nargs = sum(
        1 for arg in ctx.meta.get(RAW_ARGS_KEY, []) if arg not in _UNCOUNTED_ARGS
    )

    try:
        if status is not None:
            # -status QUEUE [-subClusterId ID]
            if nargs > STATUS_MAX_ARGS:
                _exit_with_usage(ctx)

            client = ClientFactory.makeClient()
            exit_code = show_queue(
                client,
                status,
                subcluster_id,
                ClientFactory.isFederationEnabled(),
                yaml,
                sys.stdout,
            )
        elif show_help:
            click.echo(ctx.get_help())
            exit_code = 0
        elif parent is not None:
            # -list PARENT
            if nargs != LIST_NARGS:
                _exit_with_usage(ctx)

            client = ClientFactory.makeClient()
            exit_code = list_queues(client, parent, yaml, sys.stdout)
        else:
            click.echo("Invalid Command Usage : ", err=True)
            _exit_with_usage(ctx)

        sys.exit(exit_code)
    except RMQError as e:
        logger.error(e)
        print()
        sys.exit(e.exit_code)
    except Exception as e:
        logger.critical(e, exc_info=True, stack_info=True)
        print()
        sys.exit(CFG.exit_codes.unexpected_error)


def show_queue(
    client: QueueQueryClient,
    queue_name: str,
    subcluster_id: str | None,
    federation: bool,
    yaml: bool,
    stream: TextIO,
) -> int:
    """
    Query a single queue and write its report into `stream`.

    The subcluster is only used in federation mode. If the queue is not found,
    an explanatory message is written instead.

    Args:
        client (QueueQueryClient): Client used to query the resource manager.
        queue_name (str): Name of the queue.
        subcluster_id (str | None): Subcluster to query.
        federation (bool): Is the resource manager running in federation mode?
        yaml (bool): Write the queue in YAML format instead of the report.
        stream (TextIO): Output stream.

    Returns:
        int: 0 if the queue was found, `CFG.exit_codes.default` otherwise.
    """
    use_subcluster = federation and bool(subcluster_id and subcluster_id.strip())

    if use_subcluster:
        logger.debug(f"Querying queue '{queue_name}' in subcluster '{subcluster_id}'.")
        info = client.queryByNameAndSubcluster(queue_name, subcluster_id)
    else:
        logger.debug(f"Querying queue '{queue_name}'.")
        info = client.queryByName(queue_name)

    if info is None:
        if use_subcluster:
            message = f"Cannot get queue from RM by queueName = {queue_name}, subClusterId = {subcluster_id} please check.\n"
        else:
            message = f"Cannot get queue from RM by queueName = {queue_name}, please check.\n"
        _write(stream, message)
        return CFG.exit_codes.default

    presenter = QueuePresenter(
        info, federation, subcluster_id if use_subcluster else None
    )
    _write(stream, presenter.createYaml() if yaml else presenter.createReport())
    return 0


def list_queues(
    client: QueueQueryClient, parent_name: str, yaml: bool, stream: TextIO
) -> int:
    """
    Query the children of a queue, or all queues, and write them into `stream` as a table.

    Args:
        client (QueueQueryClient): Client used to query the resource manager.
        parent_name (str): Name of the parent queue. The value `all` (case-insensitive)
            selects all queues.
        yaml (bool): Write the queues in YAML format instead of the table.
        stream (TextIO): Output stream.

    Returns:
        int: 0 if the queues were obtained, `CFG.exit_codes.default` otherwise.
    """
    if parent_name.lower() == ALL_QUEUES_TAG:
        logger.debug("Querying all queues.")
        queues = client.queryAll()
        not_found = "Cannot get any queues from RM,please check.\n"
    else:
        logger.debug(f"Querying child queues of '{parent_name}'.")
        queues = client.queryChildren(parent_name)
        not_found = f"Cannot get any queues under {parent_name} from RM,please check.\n"

    if queues is None:
        _write(stream, not_found)
        return CFG.exit_codes.default

    presenter = QueuesPresenter(queues)
    _write(stream, presenter.createYaml() if yaml else presenter.createQueuesTable())
    return 0


def _write(stream: TextIO, text: str) -> None:
    stream.write(text)
    stream.flush()


def _exit_with_usage(ctx: click.Context) -> NoReturn:
    """
    Print the usage of the command to stderr and exit with the default error code.
    """
    click.echo(ctx.get_help(), err=True)
    sys.exit(CFG.exit_codes.default)
