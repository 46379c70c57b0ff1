# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import click
from click.testing import CliRunner

from rmq_lib.core.click_format import (
    RAW_ARGS_KEY,
    GNUHelpColorsCommand,
    UsageOnErrorCommand,
)
from rmq_lib.core.config import CFG


@click.command(cls=UsageOnErrorCommand)
@click.option("-name", "--name", "name", type=str, required=True, help="A name.")
@click.pass_context
def greet(ctx: click.Context, name: str):
    click.echo(f"{name} {len(ctx.meta[RAW_ARGS_KEY])}")


def test_usage_on_error_command_stores_raw_args():
    result = CliRunner().invoke(greet, ["-name", "x"])

    assert result.exit_code == 0
    assert result.output.strip() == "x 2"


def test_usage_on_error_command_missing_option_prints_usage():
    result = CliRunner().invoke(greet, [])

    assert result.exit_code == CFG.exit_codes.default
    assert "Error: Missing option" in result.output
    assert "Usage:" in result.output


def test_usage_on_error_command_unknown_option_prints_usage():
    result = CliRunner().invoke(greet, ["-name", "x", "--unknown"])

    assert result.exit_code == CFG.exit_codes.default
    assert "No such option" in result.output
    assert "Usage:" in result.output


def test_gnu_help_colors_command_prints_options_on_separate_lines():
    @click.command(cls=GNUHelpColorsCommand)
    @click.option("--flag", is_flag=True, help="Some flag.")
    def cmd(flag):
        pass

    result = CliRunner().invoke(cmd, ["--help"])

    assert result.exit_code == 0
    assert "  --flag\n      Some flag.\n" in result.output


def test_gnu_help_colors_command_wraps_long_descriptions():
    description = "Display all child queues of the given parent queue. " * 4

    @click.command(cls=GNUHelpColorsCommand)
    @click.option("-list", "--list", "parent", type=str, help=description)
    def cmd(parent):
        pass

    result = CliRunner().invoke(cmd, ["--help"], terminal_width=60)

    assert result.exit_code == 0
    lines = result.output.split("  -list, --list TEXT\n", 1)[1].splitlines()
    definition = []
    for line in lines:
        if not line:
            break
        definition.append(line)

    assert len(definition) > 1
    assert all(line.startswith("      ") for line in definition)
    assert all(len(line) <= 60 for line in definition)
    assert " ".join(line.strip() for line in definition) == description.strip()


def test_gnu_help_colors_command_usage_line():
    @click.command(cls=GNUHelpColorsCommand)
    @click.option("--flag", is_flag=True, help="Some flag.")
    def cmd(flag):
        pass

    result = CliRunner().invoke(cmd, ["--help"], prog_name="rmq queue")

    assert result.output.startswith("Usage: rmq queue [OPTIONS]\n")
