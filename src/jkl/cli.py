"""Command-line interface for jkl."""

import argparse
import logging
import sys

from jkl import __version__
from jkl.client import JmxClient
from jkl.config import ClientConfig
from jkl.core import Query, QueryKind, plan_query, run_query
from jkl.exceptions import JklError, JmxConnectionError
from jkl.formatting import OUTPUT_FORMATS, render_names, render_values


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="jkl",
        description="Show MBean names, attribute names and attribute values of a JMX server",
    )
    parser.add_argument("hostport", metavar="HOST:PORT", help="Location of the JMX agent")
    parser.add_argument("bean", nargs="?", metavar="BEAN", help="Bean name, e.g. java.lang:type=Memory")
    parser.add_argument("attribute", nargs="?", metavar="ATTRIBUTE", help="Attribute name")
    parser.add_argument("type", nargs="?", metavar="TYPE", help="Sub key of a composite or array value")
    parser.add_argument(
        "-t",
        "--target",
        dest="targets",
        action="append",
        default=[],
        help=(
            'Usage: "BEAN\\tATTRIBUTE[\\tTYPE][\\tALIAS]". Can be repeated. '
            "Targets that cannot be resolved are shown as empty values."
        ),
    )
    parser.add_argument("-f", "--file", help="File with one target per line")
    parser.add_argument(
        "-p",
        "--ping",
        action="store_true",
        help="Only check that the JMX server accepts a connection",
    )
    parser.add_argument(
        "--show-keys",
        action="store_true",
        help="Show headers. Requires ATTRIBUTE, --target or --file",
    )
    parser.add_argument(
        "-o",
        "--output",
        choices=OUTPUT_FORMATS,
        default="csv",
        help="Output format (default: csv)",
    )
    parser.add_argument(
        "--use-tab",
        action="store_true",
        help="Use tab instead of comma for csv output",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug messages to stderr",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"jkl {__version__}",
    )

    args = parser.parse_intermixed_args(argv)
    config = ClientConfig.from_env()
    _configure_logging(args.verbose, config.log_level)

    try:
        host, port = _parse_hostport(args.hostport)
        query = plan_query(
            args.bean,
            args.attribute,
            args.type,
            args.targets,
            args.file,
            ping=args.ping,
            show_header=args.show_keys,
        )
        with JmxClient(host, port, config=config) as client:
            result = run_query(client, query)
    except JklError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for line in _render(query, result, args):
        print(line)
    return 0


def _parse_hostport(value: str) -> tuple[str, int]:
    host, sep, port = value.partition(":")
    if not sep or not port.isdigit():
        raise JmxConnectionError(f"Host and port must be joined by ':' ({value}).")
    return host, int(port)


def _configure_logging(verbose: bool, level_name: str | None) -> None:
    level = logging.DEBUG if verbose else getattr(logging, level_name or "WARNING", None)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _render(query: Query, result, args: argparse.Namespace) -> list[str]:
    """Turn a query result into output lines."""
    if query.kind is QueryKind.PING:
        return []
    if query.kind is QueryKind.BEANS:
        return render_names(result, output=args.output, use_tab=args.use_tab, escape=True)
    if query.kind is QueryKind.ATTRIBUTE_NAMES:
        return render_names(result, output=args.output, use_tab=args.use_tab)
    return render_values(
        result,
        output=args.output,
        show_header=args.show_keys,
        use_tab=args.use_tab,
    )


if __name__ == "__main__":
    sys.exit(main())
