"""
Demo program: python -m argline [-h] [-f] [--no-help X Y] BAR

Set ARGLINE_LOG_LEVEL (e.g. DEBUG) to watch the parser through a rich log handler.
"""
import logging
import os

from rich.logging import RichHandler
from rich.pretty import pprint

from argline import Registry, parse_args


def setup_logging():
    if not (level := os.getenv("ARGLINE_LOG_LEVEL")):
        return
    handler = RichHandler(
        rich_tracebacks=True,
        show_time=True,
        show_level=True,
        show_path=False,
        log_time_format="[%Y-%m-%d %H:%M:%S]",
    )
    logger = logging.getLogger("argline")
    logger.setLevel(level.upper())
    logger.addHandler(handler)
    logger.debug("Logging initialized at %s level.", level.upper())


def main(tokens=None):
    setup_logging()

    registry = Registry(
        "argline",
        "A small demonstration of declarative argument parsing.",
        "Values that start with a dash can be escaped with a backslash, e.g. \\-x.",
        "argline contributors",
        colorful=True,
    )
    registry.declare_option("f", "foo", "0", "a flag without values")
    registry.declare_option("-", "no-help", "2")
    registry.declare_positional("BAR", "1", "a single value")
    registry.declare_exit_status(0, "Everything went just fine")
    registry.declare_exit_status(1, "Something went a little wrong")

    result = parse_args(registry) if tokens is None else parse_args(registry, tokens)
    pprint(dict(result))
    return result


if __name__ == '__main__':
    main()
