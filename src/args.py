"""Argument parsing functionality for moddeps."""

import argparse

from constants import Constants


def _add_common_arguments(parser):
    """Options shared by every sub-command."""
    parser.add_argument("-f", "--file",
                        dest="MOD_SET",
                        help="Mod set file (YAML or JSON) describing the game's mods",
                        action="store", type=str,
                        required=True)
    parser.add_argument("--format",
                        dest="OUTPUT_FORMAT",
                        help="Output format (text or json, default: text)",
                        action="store",
                        type=str.lower,
                        choices=Constants.SUPPORTED_FORMATS,
                        default="text")
    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Write the result to this file instead of stdout",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='INFO')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML)",
                        action="store",
                        type=str)
    parser.add_argument("--set",
                        dest="CONFIG_SET",
                        help="Configuration override (KEY=VALUE format, can be used multiple times)",
                        action="append",
                        type=str,
                        default=[])


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog=Constants.PROG_NAME,
        description="moddeps - Mod dependency resolver",
        add_help=True,
    )
    subparsers = parser.add_subparsers(dest="action", metavar="ACTION")
    subparsers.required = True

    order = subparsers.add_parser(
        "order", help="Print the flattened activation order of a mod")
    _add_common_arguments(order)
    order.add_argument("-m", "--mod",
                       dest="MOD",
                       help="Identifier of the mod to resolve",
                       action="store", type=str,
                       required=True)
    order.add_argument("--activation",
                       dest="ACTIVATION",
                       help="Print activation entries (locations/workshop ids) of physical mods only",
                       action="store_true")

    deps = subparsers.add_parser(
        "deps", help="Print the resolved direct dependencies of a mod")
    _add_common_arguments(deps)
    deps.add_argument("-m", "--mod",
                      dest="MOD",
                      help="Identifier of the mod to resolve",
                      action="store", type=str,
                      required=True)

    graph = subparsers.add_parser(
        "graph", help="Print the dependency graph of a mod")
    _add_common_arguments(graph)
    graph.add_argument("-m", "--mod",
                       dest="MOD",
                       help="Identifier of the root mod",
                       action="store", type=str,
                       required=True)

    check = subparsers.add_parser(
        "check", help="Resolve many mods and report the ones that fail")
    _add_common_arguments(check)
    check.add_argument("-m", "--mod",
                       dest="MODS",
                       help="Mod to check (repeatable, default: all mods)",
                       action="append", type=str,
                       default=[])
    check.add_argument("--abort-on-error",
                       dest="ABORT_ON_ERROR",
                       help="Stop at the first mod that fails to resolve",
                       action="store_true")

    return parser.parse_args(argv)
