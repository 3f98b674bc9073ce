# -*- coding: utf-8 -*-
"""Module to print neatly formatted messages and key / value listings to the terminal."""

import enum
from typing import Any, Sequence, Tuple

import click


class Align(enum.Enum):
    """Text alignment in column"""

    Left = 0
    Right = 1


class Prefix(enum.Enum):
    """Prefix for command line output"""

    Ok = 0
    Warn = 1
    NONE = 2


def adjust(text: str, width: int, align: Align = Align.Left) -> str:
    """
    Pads a string with spaces up the desired width. Preserves ANSI color codes without
    counting them towards the width.

    :param text: Initial string.
    :param width: Target width. If smaller than the given text, nothing is done.
    :param align: Side to align the padded string: to the left or to the right.
    """
    needed = width - len(click.unstyle(text))

    if needed > 0:
        if align == Align.Left:
            return text + " " * needed
        else:
            return " " * needed + text
    else:
        return text


def echo_fields(fields: Sequence[Tuple[str, Any]]) -> None:
    """
    Prints labelled values as two aligned columns.

    :param fields: Sequence of label, value pairs.
    """
    if not fields:
        return

    label_width = max(len(label) for label, _ in fields) + 1
    values = [str(value) for _, value in fields]
    value_width = max(len(value) for value in values)

    for (label, _), value in zip(fields, values):
        click.echo(
            adjust(f"{label}:", label_width)
            + "  "
            + adjust(value, value_width, align=Align.Right)
        )


def echo(message: str, nl: bool = True, prefix: Prefix = Prefix.NONE) -> None:
    if prefix is Prefix.Ok:
        pre = click.style("✓", fg="green") + " "
    elif prefix is Prefix.Warn:
        pre = click.style("!", fg="red") + " "
    else:
        pre = ""

    click.echo(f"{pre}{message}", nl=nl)


def warn(message: str, nl: bool = True) -> None:
    echo(message, nl=nl, prefix=Prefix.Warn)


def ok(message: str, nl: bool = True) -> None:
    echo(message, nl=nl, prefix=Prefix.Ok)


class CliException(click.ClickException):
    def show(self, file=None) -> None:
        warn(self.format_message())
