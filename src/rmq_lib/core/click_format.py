# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

"""
Help formatting for rmq commands.

Options are listed GNU-style, one per paragraph with the description indented
below them, and the help is printed in color using click-help-colors.
"""

import click
from click import HelpFormatter
from click.formatting import wrap_text
from click_help_colors import HelpColorsCommand

from .config import CFG

# Key in `click.Context.meta` under which the raw command-line arguments are stored.
RAW_ARGS_KEY = "rmq.raw_args"

# Indentation of option names and of their descriptions.
_TERM_INDENT = "  "
_DEFINITION_INDENT = "      "


class GNUHelpFormatter(HelpFormatter):
    """
    Formatter printing bold colored headings and GNU-style option lists.

    Option descriptions are wrapped to the width of the terminal.
    """

    def __init__(self, width=None, headers_color=None, options_color=None):
        super().__init__(width=width)
        self.headers_color = headers_color or "white"
        self.options_color = options_color or "white"

    def write_heading(self, heading):
        styled_heading = click.style(heading, fg=self.headers_color, bold=True)
        self.write(f"{styled_heading}\n")

    def write_usage(self, prog_name, args, prefix=None):
        styled_prefix = click.style(prefix or "Usage:", fg=self.headers_color, bold=True)
        usage_line = f"{styled_prefix} {prog_name}"

        if args:
            usage_line += f" {args}"

        self.write(f"{usage_line}\n")

    def write_dl(self, rows, _col_max=30, _col_spacing=2):
        for term, definition in rows:
            colored_term = click.style(term, fg=self.options_color, bold=True)
            self.write(f"{_TERM_INDENT}{colored_term}\n")

            for line in (definition or "").splitlines():
                if not line.strip():
                    continue

                wrapped = wrap_text(
                    line,
                    width=self.width,
                    initial_indent=_DEFINITION_INDENT,
                    subsequent_indent=_DEFINITION_INDENT,
                )
                self.write(f"{wrapped}\n")

            self.write("\n")


class GNUHelpColorsCommand(HelpColorsCommand):
    """Command printing its help through GNUHelpFormatter."""

    def get_help(self, ctx):
        formatter = GNUHelpFormatter(
            width=ctx.terminal_width,
            headers_color=getattr(self, "help_headers_color", "white"),
            options_color=getattr(self, "help_options_color", "white"),
        )

        self.format_help(ctx, formatter)
        return formatter.getvalue()


class UsageOnErrorCommand(GNUHelpColorsCommand):
    """
    GNU-style command that prints its usage to stderr and exits with
    the default rmq error code if the command line cannot be parsed.

    The raw arguments are kept in `ctx.meta[RAW_ARGS_KEY]` so that the command
    can validate how many of them were provided.
    """

    def parse_args(self, ctx, args):
        ctx.meta[RAW_ARGS_KEY] = list(args)
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            click.echo(f"Error: {e.format_message()}", err=True)
            click.echo(ctx.get_help(), err=True)
            ctx.exit(CFG.exit_codes.default)
