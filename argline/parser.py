"""
Argline parser: turn a raw token list into a ParseResult.

What this module provides
- Entry: (present, values) pair recorded for every declared argument.
- ParseResult: read-only mapping from argument key to Entry.
- Parser: a single left-to-right option scan, the help short-circuit, then a
  positional scan over the same tokens.

Token classification (option scan)
- "-abc" (length > 1, one leading dash): a cluster of short flags; every
  character naming a declared short option is resolved, unknown characters are
  skipped silently.
- "--name" (length > 2, two leading dashes): a long option; unknown names are
  ignored silently.
- anything else is not an option token.

Arity resolution
- Fixed(n): exactly the next n tokens, verbatim. Fewer than n tokens left is an
  InsufficientArgumentsError naming the flag and the count.
- Unbounded: every following token up to, not including, the next token that
  starts with "-". A value token starting with a backslash has that backslash
  stripped exactly once, which is how a dash-looking value ("\\-x") is passed.

Short clusters
- Tokens are assigned left-to-right without overlap: in "-ab x y" with both
  'a' and 'b' of arity 1, 'a' receives "x" and 'b' receives "y".

Help
- When -h/--help is present after the option scan, the positional scan is
  skipped and the result reports helped=True. Rendering the page and exiting
  is the CLI shell's job (argline.commands).

Positional scan
- Independent from the option scan: a cursor walks the raw tokens in
  positional declaration order. Fixed(n) takes the next n tokens (or raises
  InsufficientArgumentsError); Unbounded takes the run up to the next
  dash-prefixed token and moves the cursor past it.
"""
import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import NamedTuple

from .faults import *
from .registry import HELP_KEY, Registry
from .utils import *

logger = logging.getLogger("argline")

ESCAPE = "\\"


class Entry(NamedTuple):
    present: bool
    values: tuple[str, ...]


class ParseResult(Mapping):
    """
    Read-only mapping from argument key to Entry.

    Keys are option keys (short character, else long name) in declaration
    order, followed by positional placeholders in declaration order.
    """

    def __init__(self, entries, /, *, helped=False):
        self._entries = MappingProxyType(dict(entries))
        self._helped = bool(helped)

    @property
    def helped(self):
        """
        Whether -h/--help was supplied (the positional scan was skipped).
        """
        return self._helped

    def __getitem__(self, key, /):
        return self._entries[key]

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return "parse-result(%s)" % ", ".join("%s=%r" % item for item in self.__rich_repr__())

    def __rich_repr__(self):
        for key, entry in self._entries.items():
            yield key, entry

    def __eq__(self, other, /):
        if isinstance(other, ParseResult):
            return self._helped == other._helped and dict(self._entries) == dict(other._entries)
        if isinstance(other, Mapping):
            return dict(self._entries) == dict(other)
        return NotImplemented

    __hash__ = None


def _unbounded(tokens, start, /):
    """
    Collect tokens[start:] up to the next dash-prefixed token.

    Returns (values, consumed) where values have one leading backslash stripped.
    """
    values = []
    for token in tokens[start:]:
        if token.startswith("-"):
            break
        values.append(token[len(ESCAPE):] if token.startswith(ESCAPE) else token)
    return tuple(values), len(values)


class Parser:
    """
    Parse token lists against a Registry.

    The registry is only read; a Parser can be reused for several parse calls.
    """

    def __init__(self, registry, /):
        if not isinstance(registry, Registry):
            raise TypeError(f"{type(self).__name__.lower()} 'registry' must be a registry")
        self._registry = registry

    @property
    def registry(self):
        return self._registry

    def _fault(self, fault, /, **options):
        trigger(
            fault,
            registry=self._registry,
            colorful=self._registry.colorful,
            fancy=self._registry.fancy,
            **options
        )

    def _resolve(self, option, input, tokens, start, /):
        """
        Resolve the arity of 'option' reading tokens from index 'start'.

        Returns (values, consumed).
        """
        if option.arity.unbounded:
            return _unbounded(tokens, start)

        required = option.arity.count
        if len(tokens) < start + required:
            self._fault(InsufficientArgumentsError(
                "%s requires %s" % (input, plural(required, "argument")),
                title="insufficient arguments",
                code=FaultCode.INSUFFICIENT_ARGUMENTS,
                hint="pass %s after %s" % (plural(required, "value"), input),
                argument=option,
                required=required,
                available=max(len(tokens) - start, 0),
            ))
        return tuple(tokens[start:start + required]), required

    def _scan_cluster(self, entries, tokens, position, /):
        cursor = position + 1
        for char in tokens[position][1:]:
            if (option := self._registry.option_for(short=char)) is None:
                logger.debug("Skipping unknown short flag %r in %r.", char, tokens[position])
                continue
            values, consumed = self._resolve(option, "-" + char, tokens, cursor)
            cursor += consumed
            entries[option.key] = Entry(True, values)
            logger.debug("Matched -%s with %r.", char, values)

    def _scan_long(self, entries, tokens, position, /):
        name = tokens[position][2:]
        if (option := self._registry.option_for(long=name)) is None:
            logger.debug("Ignoring unknown long option %r.", tokens[position])
            return
        values, _ = self._resolve(option, "--" + name, tokens, position + 1)
        entries[option.key] = Entry(True, values)
        logger.debug("Matched --%s with %r.", name, values)

    def _scan_positionals(self, entries, tokens, /):
        cursor = 0
        for positional in self._registry.positionals:
            if positional.arity.unbounded:
                values, consumed = _unbounded(tokens, cursor)
            else:
                required = positional.arity.count
                if cursor + required > len(tokens):
                    self._fault(InsufficientArgumentsError(
                        "%s requires %s" % (positional.placeholder, plural(required, "argument")),
                        title="insufficient arguments",
                        code=FaultCode.INSUFFICIENT_ARGUMENTS,
                        hint="pass %s for %s" % (plural(required, "value"), positional.placeholder),
                        argument=positional,
                        required=required,
                        available=max(len(tokens) - cursor, 0),
                    ))
                values, consumed = tuple(tokens[cursor:cursor + required]), required
            cursor += consumed
            entries[positional.key] = Entry(True, values)
            logger.debug("Matched %s with %r.", positional.placeholder, values)

    def parse(self, tokens, /):
        """
        Parse 'tokens' (used verbatim) into a ParseResult.

        Raises
        - TypeError: tokens is not an iterable of strings.
        - InsufficientArgumentsError: a fixed arity cannot be satisfied.
        """
        if isinstance(tokens, str) or not isinstance(tokens, Iterable):
            raise TypeError("parse() argument must be an iterable of strings")
        tokens = list(tokens)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("parse() argument must be an iterable of strings")

        logger.debug("Parsing %r.", tokens)

        entries = {}
        for option in self._registry.options:
            entries[option.key] = Entry(False, ())
        for positional in self._registry.positionals:
            entries[positional.key] = Entry(True, ())

        for position, token in enumerate(tokens):
            if len(token) > 1 and token.startswith("-") and token[1] != "-":
                self._scan_cluster(entries, tokens, position)
            elif len(token) > 2 and token.startswith("--"):
                self._scan_long(entries, tokens, position)

        if entries[HELP_KEY].present:
            logger.debug("Help requested, skipping positionals.")
            return ParseResult(entries, helped=True)

        self._scan_positionals(entries, tokens)
        return ParseResult(entries)


__all__ = (
    "Entry",
    "ParseResult",
    "Parser",
)
