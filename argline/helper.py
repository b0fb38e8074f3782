"""
Argline help renderer.

render(registry) builds the help page of a Registry as a rich Text, in
declaration order:

    Usage: NAME BAR FILES*∞ [OPTIONS]
    description

    Positional Arguments:
        BAR          a single value
        FILES*∞      any number of values

    Options:
        -h  --help         show this help message and exit
        -f  --foo          Some help!
            --no-help*2

    Exit Statuses:
        0   Everything went just fine
        1   Something went a little wrong

    epilog
    credits

Rules
- Exit statuses are listed by ascending code.
- Positionals are annotated with their arity whenever it is not exactly 1.
- Options are annotated when their arity is greater than 1 or unbounded; the
  annotation follows the last displayed name.
- The exit-status block only appears when more than one status is registered.
- Empty description, epilog or credits are left out.
- Every option is looked up again by name before it is laid out; a miss
  raises InconsistentRegistryError.

Palette keys (override through __styles__ in __main__; applied when the
registry is colorful)
- usage-label, program-name, placeholder, description-section
- section-label, option-name, arity, argument-description
- exit-code, exit-description, epilog-section, credits-section

The renderer is pure: it never prints. Use Text.plain for the unstyled page.
"""
import functools
from collections import defaultdict

from rich.text import Text

from .arguments import Arity
from .faults import *

PADDING = 4
GUTTER = 2

_ONE = Arity(1)


def _palette(registry):
    styles = defaultdict(str, {
        # === Head sections ===
        "usage-label": "bold #00E6FF",  # CYAN → signature info color
        "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
        "placeholder": "bold #FFD600",  # AMBER for parameters
        "description-section": "italic #A3A3A3",  # Neutral gray

        # === Blocks ===
        "section-label": "bold #FFFFFF",  # Pure white headers
        "option-name": "bold #00E6FF",
        "arity": "italic #FFD600",
        "argument-description": "#9CA3AF",  # Muted gray
        "exit-code": "bold #22C55E",
        "exit-description": "#9CA3AF",

        # === Footer ===
        "epilog-section": "#737373",  # Dim footer gray
        "credits-section": "dim #737373",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if registry.colorful else ""

    return styler


def _positional_label(positional, styler):
    label = Text(positional.placeholder, styler("placeholder"))
    if positional.arity != _ONE:
        label.append(str(positional.arity), styler("arity"))
    return label


def _option_label(option, styler, short_width):
    label = Text()
    short = "-" + option.short if option.short is not None else ""
    label.append(short, styler("option-name"))
    if option.long is not None:
        label.append(" " * (short_width - len(short)))
        label.append("--" + option.long, styler("option-name"))
    if option.arity.unbounded or option.arity.count > 1:
        label.append(str(option.arity), styler("arity"))
    return label


def _lookup(registry, option):
    """
    Find 'option' again through the registry lookup the parser uses.

    A declared option the lookup cannot return means the registry is corrupt.
    """
    if option.short is not None:
        found = registry.option_for(short=option.short)
    else:
        found = registry.option_for(long=option.long)
    if found is not option:
        trigger(
            InconsistentRegistryError(
                "option %s cannot be found back in the registry" % option.names[0],
                title="inconsistent registry",
                code=FaultCode.INCONSISTENT_REGISTRY,
                argument=option,
            ),
            registry=registry,
            colorful=registry.colorful,
            fancy=registry.fancy,
        )
    return found


def _block(title, rows, styler):
    """
    Lay out (label, description) rows under a title, descriptions aligned.
    """
    block = Text()
    block.append(title, styler("section-label")).append(":")
    width = max((len(label) for label, _ in rows), default=0) + GUTTER
    for label, descr in rows:
        block.append("\n").append(" " * PADDING).append(label)
        if descr:
            block.append(" " * (width - len(label))).append(descr)
    return block


def render(registry):
    """
    Return the help page of 'registry' as a rich Text.
    """
    styler = _palette(registry)
    sections = []

    usage = Text()
    usage.append("Usage", styler("usage-label")).append(": ")
    usage.append(registry.name, styler("program-name"))
    for positional in registry.positionals:
        usage.append(" ").append(_positional_label(positional, styler))
    usage.append(" [OPTIONS]")
    if registry.description:
        usage.append("\n").append(registry.description, styler("description-section"))
    sections.append(usage)

    if registry.positionals:
        sections.append(_block("Positional Arguments", [
            (_positional_label(positional, styler), Text(positional.help, styler("argument-description")))
            for positional in registry.positionals
        ], styler))

    # Short names take "-x" plus a gutter so long names line up.
    short_width = 2 + GUTTER
    sections.append(_block("Options", [
        (_option_label(option, styler, short_width), Text(option.help, styler("argument-description")))
        for option in map(functools.partial(_lookup, registry), registry.options)
    ], styler))

    if len(registry.exit_statuses) > 1:
        sections.append(_block("Exit Statuses", [
            (Text(str(code), styler("exit-code")), Text(descr, styler("exit-description")))
            for code, descr in registry.exit_statuses.items()
        ], styler))

    footer = Text()
    if registry.epilog:
        footer.append(registry.epilog, styler("epilog-section"))
    if registry.credits:
        if footer:
            footer.append("\n")
        footer.append(registry.credits, styler("credits-section"))
    if footer:
        sections.append(footer)

    return Text("\n\n").join(sections)


__all__ = (
    "render",
)
