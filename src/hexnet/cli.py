"""hexnet command-line interface."""

from __future__ import annotations

import argparse
import json
import logging
import random
from typing import Optional, Sequence

from .config import DEFAULT_CONFIG, ConfigurationError, TessellationConfig


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="hexnet CLI")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    build = sub.add_parser("build", help="Build a tessellation and report its size")
    _add_layout_args(build)
    build.add_argument("--render-out", dest="render_path")
    build.add_argument("--strict", action="store_true", help="Fail on validation errors")

    solve = sub.add_parser("solve", help="Place terminals and connect them")
    _add_layout_args(solve)
    solve.add_argument("--terminals", type=int, default=DEFAULT_CONFIG.terminal_count)
    solve.add_argument(
        "--nodes", type=int, nargs="+", dest="node_ids",
        help="Explicit terminal node ids (overrides --terminals)",
    )
    solve.add_argument("--seed", type=int)
    solve.add_argument("--redundancy", type=int, default=2)
    solve.add_argument("--render-out", dest="render_path")
    solve.add_argument("--json", action="store_true", help="Print the render snapshot as JSON")
    solve.add_argument("--diagnose", action="store_true")

    return parser


def _add_layout_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--rows", type=int, default=DEFAULT_CONFIG.rows)
    parser.add_argument("--cols", type=int, default=DEFAULT_CONFIG.cols)
    parser.add_argument("--cells", type=int, default=DEFAULT_CONFIG.cell_count)
    parser.add_argument("--radius", type=float, default=DEFAULT_CONFIG.radius)


def _config_from_args(args, terminal_count: int = 0) -> TessellationConfig:
    return TessellationConfig(
        rows=args.rows,
        cols=args.cols,
        cell_count=args.cells,
        radius=args.radius,
        terminal_count=terminal_count,
    )


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "build":
            _cmd_build(args)
        elif args.command == "solve":
            _cmd_solve(args)
    except ConfigurationError as exc:
        print(f"Invalid configuration: {exc}")
        raise SystemExit(2)


def _cmd_build(args) -> None:
    from .tessellation import build_tessellation

    tess = build_tessellation(_config_from_args(args))
    errors = tess.validate()
    print(f"cells: {len(tess.cells)}")
    print(f"nodes: {len(tess.nodes)}")
    print(f"edges: {len(tess.perimeter_edges())}")
    if errors:
        for error in errors:
            print(error)
        if args.strict:
            raise SystemExit(1)
    if args.render_path:
        from .render import render_png
        render_png(tess, args.render_path)
        print(f"Saved {args.render_path}")


def _cmd_solve(args) -> None:
    from .engine import ConnectivityEngine

    rng = random.Random(args.seed) if args.seed is not None else None
    engine = ConnectivityEngine(
        _config_from_args(args, terminal_count=args.terminals),
        rng=rng,
        redundancy=args.redundancy,
    )
    if args.node_ids:
        try:
            engine.place_terminals(node_ids=args.node_ids)
        except ValueError as exc:
            print(exc)
            raise SystemExit(1)

    summary = engine.solve()

    if args.json:
        print(json.dumps(engine.snapshot(), indent=2, sort_keys=True))
    else:
        for key, value in summary.items():
            print(f"{key}: {value}")

    if args.diagnose and engine.result is not None:
        from .diagnostics import diagnostics_report
        report = diagnostics_report(engine.tessellation, engine.result)
        print(json.dumps(report, indent=2, sort_keys=True))

    if args.render_path:
        from .render import render_png
        render_png(engine.tessellation, args.render_path, result=engine.result,
                   terminals=engine.terminals)
        print(f"Saved {args.render_path}")


if __name__ == "__main__":
    main()
