r"""
Argline argument specifications.

Overview
- Arity: how many value tokens an argument consumes; either a fixed non-negative
  count or unbounded (greedy, written "+" at declaration and "*∞" in help).
- Positional: a value identified by its declaration order (placeholder, arity, help).
- Option: a value identified by a short (single character) and/or long name,
  introduced on the command line by "-" or "--".

Introspection & representation
- ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes the
  fields listed in __introspectable__ via read-only properties.

Normalization (applied on construction)
- Arity literals: a non-negative integer (as int or decimal string) or "+".
  Anything else is a programmer error raised immediately.
- Option short sentinels " " and "-" mean "no short name" (stored as None).
- Option long sentinels "", " ", "-" and "--" mean "no long name" (stored as None).
- At least one of short/long must survive normalization.
- help: None or empty means "no help"; stored as an empty string.

Quick example:
    >>> Option("f", "foo", "0", "Some help!").names
    ('-f', '--foo')
    >>> Option("-", "no-help", "2").key
    'no-help'
    >>> Positional("FILES", "+").arity
    arity(*∞)
"""
import functools
import operator
import re

from .utils import *


class Arity:
    """
    Number of value tokens consumed by a positional or an option.

    Arity(n) is a fixed count (n >= 0); Arity(...) is unbounded, mirroring the
    greedy Ellipsis arity used by positional specs. Instances are immutable,
    hashable and compare by count.
    """
    __slots__ = ("_count",)

    # Declaration symbol for unbounded capture.
    SYMBOL = "+"

    def __new__(cls, count, /):
        if count is not Ellipsis:
            if not isinstance(count, int) or isinstance(count, bool):
                raise TypeError("arity count must be an integer or ellipsis")
            if count < 0:
                raise ValueError("arity count must be a non-negative integer")
        self = super().__new__(cls)
        object.__setattr__(self, "_count", count)
        return self

    def __setattr__(self, name, value, /):
        raise AttributeError("arity is read-only")

    @classmethod
    def parse(cls, literal, /):
        """
        Build an Arity from a declaration literal.

        Accepted
        - an existing Arity (returned unchanged)
        - "+" (unbounded)
        - a non-negative int, or a string holding only decimal digits

        Raises
        - TypeError: literal is neither str, int nor Arity (booleans included).
        - ValueError: literal is a string or int outside the accepted forms.
        """
        if isinstance(literal, Arity):
            return literal
        if isinstance(literal, bool) or not isinstance(literal, str | int):
            raise TypeError("arity must be a string or an integer")
        if isinstance(literal, int):
            if literal < 0:
                raise ValueError("arity must be either a positive integer, 0 or %r" % cls.SYMBOL)
            return cls(literal)
        if literal == cls.SYMBOL:
            return cls(...)
        if not re.fullmatch(r"[0-9]+", literal):
            raise ValueError("arity must be either a positive integer, 0 or %r" % cls.SYMBOL)
        return cls(int(literal))

    @property
    def unbounded(self):
        return self._count is Ellipsis

    @property
    def count(self):
        """
        The fixed count, or None when unbounded.
        """
        return None if self._count is Ellipsis else self._count

    def __eq__(self, other, /):
        if not isinstance(other, Arity):
            return NotImplemented
        return self._count is other._count if self.unbounded else self._count == other._count

    def __hash__(self):
        return hash((Arity, self._count))

    def __str__(self):
        return "*∞" if self.unbounded else "*%d" % self._count

    def __repr__(self):
        return "arity(%s)" % self


UNBOUNDED = Arity(...)


class ArgumentType(type):
    """
    Metaclass that turns specs into introspectable, read-only records.

    Responsibilities
    - Expose the fields named in __introspectable__ as read-only properties
      using mirror(), backed by "_{name}" attributes set at construction.
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics and pretty printing.

    Conventions
    - __typename__ is derived from the class name (camel-case split with
      hyphens) and used in messages.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        @rename("__eq__")
        def __eq__(self, other):
            if type(other) is not type(self):
                return NotImplemented
            return tuple(self.__rich_repr__()) == tuple(other.__rich_repr__())
        self.__eq__ = __eq__

        @rename("__hash__")
        def __hash__(self):
            return hash(tuple(self.__rich_repr__()))
        self.__hash__ = __hash__

        return self


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize the shared 'arity' and 'help' fields in place.

    - arity: parsed through Arity.parse (TypeError/ValueError on bad literals).
    - help: Unset/None become "", strings are trimmed.
    """
    try:
        metadata["arity"] = Arity.parse(metadata["arity"])
    except TypeError:
        raise TypeError(f"{cls.__typename__} 'arity' must be a string or an integer") from None
    except ValueError:
        raise ValueError(
            f"{cls.__typename__} 'arity' must be either a positive integer, 0 or {Arity.SYMBOL!r}"
        ) from None

    if (help := coalesce(metadata["help"])) is None:
        help = ""
    if not isinstance(help, str):
        raise TypeError(f"{cls.__typename__} 'help' must be a string")
    metadata["help"] = help.strip()


def _sanitize_names(cls, metadata, /):
    """
    Internal: normalize the 'short' and 'long' option identifiers in place.

    Sentinels
    - short: Unset, None, " " and "-" → None
    - long: Unset, None, "", " ", "-" and "--" → None

    Validation
    - short must be exactly one visible character, not a dash.
    - long must not start with a dash nor contain whitespace.
    - at least one of both must remain.
    """
    short = coalesce(metadata["short"])
    if short in (" ", "-"):
        short = None
    if short is not None:
        if not isinstance(short, str):
            raise TypeError(f"{cls.__typename__} 'short' must be a single character string")
        if len(short) != 1 or short.isspace():
            raise ValueError(f"{cls.__typename__} 'short' must be a single visible character")

    long = coalesce(metadata["long"])
    if long in ("", " ", "-", "--"):
        long = None
    if long is not None:
        if not isinstance(long, str):
            raise TypeError(f"{cls.__typename__} 'long' must be a string")
        if not re.fullmatch(r"(?!-)\S+", long):
            raise ValueError(f"{cls.__typename__} 'long' cannot start with a dash or contain whitespace")

    if short is None and long is None:
        raise ValueError(f"{cls.__typename__} must specify a short name, a long name or both")

    metadata["short"] = short
    metadata["long"] = long


class Positional(metaclass=ArgumentType):
    """
    Positional argument specification.

    The placeholder is both the display name in help and the key of the
    argument in a parse result, so it must be unique within a registry.
    Positionals are consumed in declaration order.
    """

    __introspectable__ = (
        "placeholder",
        "arity",
        "help",
    )

    def __new__(cls, placeholder, arity, /, help=None):
        if not isinstance(placeholder, str):
            raise TypeError(f"{cls.__typename__} 'placeholder' must be a string")
        elif not placeholder or placeholder != placeholder.strip():
            raise ValueError(f"{cls.__typename__} 'placeholder' cannot be empty nor padded with whitespace")

        metadata = {
            "placeholder": placeholder,
            "arity": arity,
            "help": help,
        }
        _sanitize_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @property
    def key(self):
        """
        Result-mapping key: the placeholder itself.
        """
        return self._placeholder


class Option(metaclass=ArgumentType):
    """
    Named option specification.

    An option has a short character, a long name or both. It is matched by
    name wherever it appears in the token stream; its declaration order only
    matters for help layout.
    """

    __introspectable__ = (
        "short",
        "long",
        "arity",
        "help",
    )

    def __new__(cls, short=None, long=None, arity="0", /, help=None):
        metadata = {
            "short": short,
            "long": long,
            "arity": arity,
            "help": help,
        }
        _sanitize_names(cls, metadata)
        _sanitize_metadata(cls, metadata)

        self = super().__new__(cls)
        for name, object in metadata.items():
            setattr(self, "_" + name, object)
        return self

    @property
    def key(self):
        """
        Result-mapping key: the short character when present, else the long name.
        """
        return self._short if self._short is not None else self._long

    @property
    def names(self):
        """
        Command-line spellings of this option, short form first.
        """
        names = []
        if self._short is not None:
            names.append("-" + self._short)
        if self._long is not None:
            names.append("--" + self._long)
        return tuple(names)


__all__ = (
    "Arity",
    "UNBOUNDED",
    "Positional",
    "Option",
)
