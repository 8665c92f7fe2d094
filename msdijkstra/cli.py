"""Command-line interface for computing shortest-path forests."""

from __future__ import annotations

import argparse
import json
import sys
import time
import traceback
from dataclasses import asdict
from typing import Callable, List, Optional

from .engine import EngineConfig, ShortestPathEngine
from .exceptions import ConfigError, InputError, MSDijkstraError
from .io import parse_sources, read_digraph
from .logger import StdLogger
from .report import export_spt_json, format_spt

EXAMPLE_EWD = """4
5
0 1 2.0
0 2 5.0
1 2 1.0
1 3 4.0
2 3 1.0
"""

EXIT_OK = 0
EXIT_USAGE = 64
EXIT_INTERNAL = 70


def _prompt(ask: Callable[[str], str], message: str) -> str:
    """Ask the user for a value, treating end of input as an error."""
    try:
        return ask(message)
    except EOFError:
        raise InputError("no input given") from None


def main(argv: Optional[List[str]] = None, ask: Callable[[str], str] = input) -> int:
    """Entry point for the ``msdijkstra`` command-line tool.

    Args:
        argv: Argument list, ``sys.argv[1:]`` if None.
        ask: Callable used to prompt for values missing from ``argv``.

    Returns:
        Process exit status.
    """
    examples = (
        "Examples:\n"
        "  msdijkstra --edges tinyEWD.txt --sources '0 2'\n"
        "  msdijkstra --edges graph.csv --sources 0,3 --json\n"
        "  msdijkstra --example > tiny.txt\n"
    )
    p = argparse.ArgumentParser(
        prog="msdijkstra",
        description="Multi-source Dijkstra shortest-path forest",
        epilog=examples,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    p.add_argument("--verbose", action="store_true", help="Show full tracebacks")
    p.add_argument("--log-json", action="store_true", help="Emit structured log lines as JSON")
    p.add_argument(
        "--log-level",
        choices=["debug", "info", "warning"],
        default="warning",
        help="Log verbosity",
    )
    p.add_argument("--edges", type=str, default=None, help="Path to graph file (prompted if omitted)")
    p.add_argument(
        "--format",
        choices=["ewd", "csv"],
        default=None,
        help="Graph file format (auto-detected from extension)",
    )
    p.add_argument(
        "--sources",
        type=str,
        default=None,
        help="Source vertex ids separated by spaces or commas (prompted if omitted)",
    )
    p.add_argument("--double", action="store_true", help="Use double precision weights")
    p.add_argument("--json", action="store_true", help="Print the forest as JSON instead of a table")
    p.add_argument("--export-json", type=str, default=None, help="Also write the forest as JSON")
    p.add_argument("--metrics-out", type=str, default=None, help="Write run metrics to this JSON file")
    p.add_argument("--example", action="store_true", help="Print a sample graph file and exit")

    args = p.parse_args(argv)

    if args.example:
        sys.stdout.write(EXAMPLE_EWD)
        return EXIT_OK

    logger = StdLogger(level=args.log_level, json_fmt=args.log_json, stream=sys.stderr)

    try:
        dtype = "float64" if args.double else "float32"
        cfg = EngineConfig(dtype=dtype, log_settles=args.log_level == "debug")

        path = args.edges
        if path is None:
            path = _prompt(ask, "Filepath to txt file containing edge-weighted digraph: ").strip()
        G = read_digraph(path, fmt=args.format, dtype=dtype)
        logger.info("loaded", path=path, n=G.vertex_count, m=G.edge_count, dtype=dtype)

        text = args.sources
        if text is None:
            text = _prompt(
                ask,
                f"Which vertices between 0 and {G.vertex_count - 1} are the sources? "
                "(e.g. `2 4 5 7`): ",
            )
        sources = parse_sources(text)

        if args.verbose:
            sys.stderr.write(f"config: n={G.vertex_count} m={G.edge_count} dtype={dtype} sources={sources}\n")

        engine = ShortestPathEngine(G, sources, config=cfg, logger=logger)
        t0 = time.perf_counter()
        res = engine.run()
        wall_ms = (time.perf_counter() - t0) * 1000.0

        if args.json:
            sys.stdout.write(export_spt_json(G, res) + "\n")
        else:
            sys.stdout.write(format_spt(G, res))

        if args.export_json:
            with open(args.export_json, "w", encoding="utf-8") as fh:
                fh.write(export_spt_json(G, res))
        if args.metrics_out:
            with open(args.metrics_out, "w", encoding="utf-8") as fh:
                json.dump(asdict(engine.metrics(wall_ms=wall_ms)), fh)
        return EXIT_OK

    except (InputError, ConfigError) as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"error: {exc}\n")
        return EXIT_USAGE
    except MSDijkstraError as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"internal error: {exc}\n")
        return EXIT_INTERNAL
    except OSError as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"error: {exc}\n")
        return EXIT_USAGE
    except Exception as exc:
        if args.verbose:
            traceback.print_exc()
        else:
            sys.stderr.write(f"internal error: {exc}\n")
        return EXIT_INTERNAL


if __name__ == "__main__":
    sys.exit(main())
