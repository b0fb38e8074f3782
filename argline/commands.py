"""
Argline CLI shell: the only place that touches sys.argv, stdout/stderr and exit codes.

What this module provides
- parse_args(registry, tokens=Unset): parse the process arguments (or the given
  tokens, verbatim) and behave like a command-line tool:
  • help requested → print the help page to stdout and exit with status 0.
  • parse fault    → print a diagnostic to stderr and exit with status 1.
  • otherwise      → return the ParseResult.
- invoke(registry, prompt=Unset): same as parse_args, also accepting a
  shell-like string split with shlex.

Library code that must not exit should use argline.parser.Parser directly and
handle ArglineException itself.

Quick start
    from argline import Registry, parse_args

    registry = Registry("example", "An example program")
    registry.declare_option("v", "verbose", "0", "say more")
    registry.declare_positional("FILES", "+", "files to read")
    result = parse_args(registry)
    if result["v"].present:
        ...
"""
import shlex
import sys
from collections.abc import Iterable

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .faults import *
from .helper import render
from .parser import Parser
from .registry import Registry
from .utils import *


def print_help(registry, /, *, stderr=False):
    """
    Print the help page of 'registry', inside a panel when the registry is fancy.
    """
    console = Console(stderr=stderr)
    renderable = render(registry)
    if registry.fancy:
        renderable = Panel(
            renderable,
            title=Text.assemble("[", " ", f"{registry.name} HELP".upper(), " ", "]"),
            title_align="left",
        )
    # Rows are laid out by render(); the console must not re-wrap them.
    console.print(renderable, soft_wrap=not registry.fancy)


def parse_args(registry, tokens=Unset, /):
    """
    Parse command-line tokens the way a command-line tool does.

    Parameters
    - registry: the declarations to parse against.
    - tokens:
      • Unset: read sys.argv[1:] (the invocation name is excluded).
      • Iterable[str]: used verbatim, nothing is stripped.

    Exits
    - status 0 after printing help when -h/--help is present.
    - status 1 after printing a diagnostic on a parse fault.
    """
    if not isinstance(registry, Registry):
        raise TypeError("parse_args() first argument must be a registry")

    tokens = sys.argv[1:] if tokens is Unset else tokens

    try:
        result = Parser(registry).parse(tokens)
    except ArglineException as fault:
        trigger(fault, shell=True)
        raise  # trigger() exits in shell mode

    if result.helped:
        print_help(registry)
        sys.exit(0)

    return result


def invoke(registry, prompt=Unset, /):
    """
    Convenience runner accepting several prompt shapes.

    Parameters
    - prompt:
      • Unset: read sys.argv[1:].
      • str: shell-like string, split with shlex.split.
      • Iterable[str]: pre-tokenized sequence, used verbatim.

    Raises
    - TypeError: when prompt is not Unset/str/Iterable[str].
    """
    if prompt is Unset:
        tokens = Unset
    elif isinstance(prompt, str):
        tokens = shlex.split(prompt)
    elif isinstance(prompt, Iterable):
        tokens = list(prompt)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("invoke() argument must be a string or an iterable of strings")
    else:
        raise TypeError("invoke() argument must be a string or an iterable of strings")

    return parse_args(registry, tokens)


__all__ = (
    "print_help",
    "parse_args",
    "invoke",
)
