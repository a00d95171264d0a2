"""moddeps - Mod dependency resolver

Loads a mod set, resolves the dependencies of the requested mods and prints
activation orders, direct dependencies, graphs or batch check results.

    Returns:
        int: Exit code
"""
import json
import logging
import os
import sys

from constants import Constants, ExitCodes, OutputFormats
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from args import parse_args
from cli_config import ConfigError, apply_config
from mods.exceptions import ModError, ModNotFoundError
from mods.loader import ModSetFormatError, load_mod_set
from mods.models import DependencyResolveStatus, ModReference
from resolution import (
    ModDependencyTraverser,
    MultiModDependencyResolver,
    build_activation_list,
    build_dependency_graph,
)

logger = logging.getLogger(__name__)


def _find_mod(game, identifier):
    mod = game.find_mod(ModReference(identifier))
    if mod is None:
        raise ModNotFoundError(ModReference(identifier), game)
    return mod


def _resolved(mod):
    """Resolve a mod unless it already is (virtual mods always are)."""
    if mod.dependency_resolve_status != DependencyResolveStatus.RESOLVED:
        mod.resolve_dependencies()
    return mod


def run_order(game, args):
    """Flattened activation order (root first)."""
    mod = _resolved(_find_mod(game, args.MOD))
    chain = ModDependencyTraverser().traverse(mod)
    if args.ACTIVATION:
        entries = build_activation_list(chain)
        payload = {
            "mod": mod.identifier,
            "activation": [{"value": e.value, "workshop": e.workshop} for e in entries],
        }
        lines = [("workshop:" if e.workshop else "") + e.value for e in entries]
    else:
        payload = {"mod": mod.identifier, "order": [m.identifier for m in chain]}
        lines = [m.identifier for m in chain]
    return payload, lines, ExitCodes.SUCCESS


def run_deps(game, args):
    """Resolved direct dependencies."""
    mod = _resolved(_find_mod(game, args.MOD))
    dependencies = []
    lines = []
    for entry in mod.dependencies:
        dependencies.append({
            "id": entry.mod.identifier,
            "version": str(entry.mod.version) if entry.mod.version is not None else None,
            "range": str(entry.version_range) if entry.version_range is not None else None,
        })
        lines.append(entry.mod.identifier + (f" ({entry.version_range})" if entry.version_range else ""))
    return {"mod": mod.identifier, "dependencies": dependencies}, lines, ExitCodes.SUCCESS


def run_graph(game, args):
    """Vertices and edges of the dependency graph."""
    mod = _find_mod(game, args.MOD)
    graph = build_dependency_graph(mod)
    cycle = graph.find_cycle()
    payload = {
        "mod": mod.identifier,
        "vertices": [{"id": v.identifier, "kind": v.kind.value} for v in graph.vertices],
        "edges": [
            {
                "source": e.source,
                "target": e.target,
                "range": str(e.version_range) if e.version_range is not None else None,
            }
            for e in graph.edges
        ],
        "has_cycle": bool(cycle),
        "cycle": cycle,
    }
    lines = [f"{v.identifier} [{v.kind.value}]" for v in graph.vertices]
    lines.extend(f"{e.source} -> {e.target}" for e in graph.edges)
    if cycle:
        lines.append("cycle: " + " -> ".join(cycle))
    return payload, lines, ExitCodes.SUCCESS


def run_check(game, args):
    """Batch-resolve mods and report failures."""
    mods = [_find_mod(game, identifier) for identifier in args.MODS] if args.MODS else list(game)
    resolver = MultiModDependencyResolver(
        on_resolved=lambda m: logging.info("Resolved %s", m.identifier)
    )
    result = resolver.resolve_dependencies_for_mods(
        mods, skip_resolved_mods=True, abort_on_error=args.ABORT_ON_ERROR
    )
    failed = [
        {"mod": mod.identifier, "error": str(error), "type": type(error).__name__}
        for mod, error in result.error_data
    ]
    payload = {"checked": len(mods), "failed": failed}
    lines = [f"{f['mod']}: {f['type']}: {f['error']}" for f in failed]
    lines.append(f"{len(mods) - len(failed)}/{len(mods)} mods resolved")
    code = ExitCodes.EXIT_FAILURES if result.has_errors else ExitCodes.SUCCESS
    return payload, lines, code


ACTIONS = {
    "order": run_order,
    "deps": run_deps,
    "graph": run_graph,
    "check": run_check,
}


def _emit(payload, lines, args):
    """Write the result to --output or stdout in the selected format."""
    if args.OUTPUT_FORMAT == OutputFormats.JSON.value:
        text = json.dumps(payload, indent=2)
    else:
        text = "\n".join(lines)
    if args.OUTPUT:
        with open(args.OUTPUT, "w", encoding="utf-8") as fh:
            fh.write(text + "\n")
        logging.info("Result written to %s", args.OUTPUT)
    else:
        print(text)


def run(argv=None):
    """Run the command line and return the exit code."""
    args = parse_args(argv)
    # Honor CLI --loglevel by passing it to centralized logger via env
    os.environ[Constants.ENV_LOG_LEVEL] = str(args.LOG_LEVEL).upper()
    configure_logging(args.LOG_FILE)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=args.action)
        )

    try:
        apply_config(args)
    except (ConfigError, OSError) as e:
        logging.error("Configuration error: %s", e)
        return ExitCodes.FILE_ERROR.value

    try:
        game = load_mod_set(args.MOD_SET)
    except OSError as e:
        logging.error("Cannot read mod set: %s", e)
        return ExitCodes.FILE_ERROR.value
    except (ModSetFormatError, ModError) as e:
        logging.error("Invalid mod set: %s", e)
        return ExitCodes.FILE_ERROR.value

    try:
        payload, lines, code = ACTIONS[args.action](game, args)
    except ModError as e:
        logging.error("%s", e)
        return ExitCodes.RESOLUTION_ERROR.value

    try:
        _emit(payload, lines, args)
    except OSError as e:
        logging.error("Cannot write output: %s", e)
        return ExitCodes.FILE_ERROR.value

    if is_debug_enabled(logger):
        logger.debug(
            "CLI finished",
            extra=extra_context(
                event="function_exit", component="cli", action=args.action, outcome=code.name.lower()
            )
        )
    return code.value


def main():
    """Main function of the program."""
    sys.exit(run())


if __name__ == "__main__":
    main()
