"""Static package metadata surfaced to CLI commands and documentation.

Purpose
-------
Expose the metadata the ``info`` command prints without reading packaging
files at runtime.

Contents
--------
* Module-level constants describing the distribution.
* :func:`print_info` rendering the constants as a banner.
"""

from __future__ import annotations

from typing import Callable

name = "lib_log_switch"
title = "Process-wide logging facility with switchable output mechanisms"
version = "0.1.0"
homepage = "https://github.com/bitranox/lib_log_switch"
author = "bitranox"
author_email = "bitranox@gmail.com"
shell_command = "lib_log_switch"


def print_info(writer: Callable[[str], None] | None = None) -> None:
    """Print the summary metadata block.

    Parameters
    ----------
    writer:
        Receives each rendered line (newline included); defaults to ``print``
        without an extra line terminator.

    Examples
    --------
    >>> lines = []
    >>> print_info(writer=lines.append)
    >>> lines[0]
    'Info for lib_log_switch:\\n'
    """

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:\n", "\n"]
    lines.extend(f"    {label.ljust(pad)} = {value}\n" for label, value in fields)
    emit = writer if writer is not None else (lambda text: print(text, end=""))
    for line in lines:
        emit(line)


__all__ = ["print_info", "name", "title", "version", "homepage", "author", "author_email", "shell_command"]
