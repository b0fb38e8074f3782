"""
Argline definition registry: the declarations a parser and a help page work from.

What this module provides
- Registry: an ordered container of Positional and Option specs plus program
  metadata (name, description, epilog, credits) and an exit-status catalogue
  ordered by code.

Ordering
- Positionals are kept in declaration order; that order drives both help layout
  and positional consumption.
- Options are kept in declaration order; that order only drives help layout
  (options are matched by name while parsing).
- The built-in help option (-h/--help, arity 0) is always registered first.

Lifecycle
- Built incrementally by its owner before parsing, then read (never mutated)
  by argline.parser and argline.helper.

Quick start
    from argline import Registry

    registry = Registry("example", "An example program", "Bottom text", "Someone 2024")
    registry.declare_option("f", "foo", "0", "Some help!")
    registry.declare_option("-", "no-help", "2")
    registry.declare_positional("BAR", "1")
    registry.declare_exit_status(0, "Everything went just fine")
    result = registry.parse(["value", "-f", "--no-help", "x", "y"])
"""
import logging
import os.path
import sys

from rich.text import Text

from .arguments import Positional, Option
from .utils import *

logger = logging.getLogger("argline")

HELP_KEY = "h"


def _process_strings(cls, metadata):
    """
    Normalize scalar string metadata fields in place.

    - Validates type: each value must be str | Text | Unset | None.
    - Trims strings; Unset and None become "".
    """
    for name in ("name", "description", "epilog", "credits"):
        if (object := coalesce(metadata[name])) is None:
            object = ""
        if not isinstance(object, str | Text):
            raise TypeError(f"{cls.__name__.lower()} {name!r} must be a string")
        metadata[name] = object.strip() if isinstance(object, str) else object


class Registry:
    """
    Ordered declarations of a command-line interface.

    Responsibilities
    - Hold positionals and options in declaration order (the only source of
      truth for order; no side tables).
    - Enforce uniqueness: positional placeholders, option short characters,
      option long names, and result keys across both kinds.
    - Carry program metadata and the descriptive exit-status catalogue.

    Runtime flags (keyword-only)
    - colorful: style the help page and fault reports.
    - fancy: wrap the help page and fault reports in a panel.
    """

    __introspectable__ = (
        "name",
        "description",
        "epilog",
        "credits",
        "positionals",
        "options",
        "exit_statuses",
        "colorful",
        "fancy",
    )

    name = mirror("name")
    description = mirror("description")
    epilog = mirror("epilog")
    credits = mirror("credits")
    positionals = mirror("positionals")
    options = mirror("options")
    exit_statuses = mirror("exit_statuses")
    colorful = mirror("colorful")
    fancy = mirror("fancy")

    def __init__(
            self,
            name=Unset,
            description=Unset,
            epilog=Unset,
            credits=Unset,
            /,
            *,
            colorful=False,
            fancy=False
    ):
        metadata = {
            "name": coalesce(name, os.path.basename(sys.argv[0])),
            "description": description,
            "epilog": epilog,
            "credits": credits,
        }
        _process_strings(type(self), metadata)
        for field, object in metadata.items():
            setattr(self, "_" + field, object)

        self._colorful = bool(colorful)
        self._fancy = bool(fancy)
        self._positionals = []
        self._options = []
        self._exit_statuses = {}

        self._declare(Option(HELP_KEY, "help", "0", help="show this help message and exit"))

    def __repr__(self):
        return "registry(%s)" % ", ".join("%s=%r" % (name, value) for name, value in self.__rich_repr__())

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)

    @property
    def help_option(self):
        """
        The built-in -h/--help option.
        """
        return self._options[0]

    def keys(self):
        """
        Result keys in the order a parse result presents them: options, then positionals.
        """
        return tuple(option.key for option in self._options) + tuple(
            positional.key for positional in self._positionals
        )

    def option_for(self, *, short=Unset, long=Unset):
        """
        Look up a declared option by short character or by long name.

        Exactly one of 'short'/'long' must be given. Returns None when no
        option matches.
        """
        if (short is Unset) == (long is Unset):
            raise TypeError("option_for() takes exactly one of 'short' or 'long'")
        for option in self._options:
            if short is not Unset and option.short is not None and option.short == short:
                return option
            if long is not Unset and option.long is not None and option.long == long:
                return option
        return None

    def _declare(self, argument):
        if argument.key in self.keys():
            raise ValueError(f"{type(self).__name__.lower()} key {argument.key!r} is already in use")

        if isinstance(argument, Option):
            if argument.short is not None and self.option_for(short=argument.short):
                raise ValueError(f"{type(self).__name__.lower()} short name {argument.short!r} is already in use")
            if argument.long is not None and self.option_for(long=argument.long):
                raise ValueError(f"{type(self).__name__.lower()} long name {argument.long!r} is already in use")
            self._options.append(argument)
        elif isinstance(argument, Positional):
            self._positionals.append(argument)
        else:
            raise TypeError(f"{type(self).__name__.lower()} can only declare positionals and options")

        logger.debug("Declared %r.", argument)
        return argument

    def declare_positional(self, placeholder, arity, help=None):
        """
        Append a positional argument.

        Parameters
        - placeholder: display name and result key (unique).
        - arity: "+" for unbounded, or a non-negative integer (int or digits).
        - help: optional description.

        Raises TypeError/ValueError on malformed declarations (programmer errors).
        """
        return self._declare(Positional(placeholder, arity, help=help))

    def declare_option(self, short=None, long=None, arity="0", help=None):
        """
        Append an option.

        Parameters
        - short: single character; " " or "-" (or None) for "no short name".
        - long: name without dashes; "", " ", "-", "--" (or None) for "no long name".
        - arity: "+" for unbounded, or a non-negative integer (int or digits).
        - help: optional description.

        Raises TypeError/ValueError on malformed declarations (programmer errors).
        """
        return self._declare(Option(short, long, arity, help=help))

    def declare_exit_status(self, code, help, /):
        """
        Register a descriptive exit status for the help page.

        Purely cosmetic: exit statuses never affect parsing. The catalogue is
        kept sorted by code; redeclaring a code replaces its description.
        """
        if not isinstance(code, int) or isinstance(code, bool):
            raise TypeError(f"{type(self).__name__.lower()} exit status code must be an integer")
        if code < 0:
            raise ValueError(f"{type(self).__name__.lower()} exit status code must be a non-negative integer")
        if not isinstance(help, str):
            raise TypeError(f"{type(self).__name__.lower()} exit status help must be a string")
        self._exit_statuses = dict(sorted({**self._exit_statuses, code: help.strip()}.items()))

    add_arg = declare_positional
    add_option = declare_option
    add_exit_status = declare_exit_status

    def render_help(self):
        """
        Render the help page of this registry (see argline.helper.render).
        """
        from .helper import render
        return render(self)

    def parse(self, tokens, /):
        """
        Parse 'tokens' verbatim against this registry (see argline.parser.Parser).
        """
        from .parser import Parser
        return Parser(self).parse(tokens)


__all__ = (
    "HELP_KEY",
    "Registry",
)
