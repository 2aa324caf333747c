"""glitchfolio command line: serve the site or simulate the page headless."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace

from pulse import Stage, Viewport
from pulse_fx import FixedProbe, PerformanceTier

from folio.config import SiteConfig
from folio.data import load_local
from folio.page import PortfolioPage
from folio.storage import LocalStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="glitchfolio", description="Glitch portfolio host and effect simulator"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the Flask data provider")
    serve.add_argument("--host", default=None, help="Bind address (default: $HOST or 0.0.0.0)")
    serve.add_argument("--port", type=int, default=None, help="Port (default: $PORT or 3000)")
    serve.add_argument("--data-dir", default=None, help="Directory with the JSON data files")
    serve.add_argument("--static-dir", default=None, help="Directory with index.html")

    sim = sub.add_parser("simulate", help="Run the page headless and print a JSON summary")
    sim.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    sim.add_argument("--ms", type=float, default=10_000.0, help="Virtual ms to run (default: 10000)")
    sim.add_argument("--width", type=float, default=1280.0, help="Viewport width (default: 1280)")
    sim.add_argument("--height", type=float, default=800.0, help="Viewport height (default: 800)")
    sim.add_argument("--reduced-motion", action="store_true", help="Prefer reduced motion")
    sim.add_argument("--touch", action="store_true", help="No pointer device")
    sim.add_argument("--low-performance", action="store_true", help="Force the LOW tier")
    sim.add_argument(
        "--scroll", type=float, action="append", default=[], metavar="Y",
        help="Scroll to Y before running (repeatable, applied in order)",
    )
    sim.add_argument("--data-dir", default=None, help="Directory with the JSON data files")
    return parser


def _serve(args: argparse.Namespace) -> int:
    from folio.server import serve

    config = SiteConfig.from_env()
    overrides = {
        key: value
        for key, value in (
            ("host", args.host),
            ("port", args.port),
            ("data_dir", args.data_dir),
            ("static_dir", args.static_dir),
        )
        if value is not None
    }
    serve(replace(config, **overrides))
    return 0


def _simulate(args: argparse.Namespace) -> int:
    config = SiteConfig.from_env()
    if args.data_dir is not None:
        config = replace(config, data_dir=args.data_dir)
    viewport = Viewport(
        width=args.width,
        height=args.height,
        prefers_reduced_motion=args.reduced_motion,
        touch=args.touch,
    )
    tier = PerformanceTier.LOW if args.low_performance else PerformanceTier.NORMAL
    page = PortfolioPage(
        stage=Stage(seed=args.seed, viewport=viewport),
        config=config,
        data=load_local(config.data_dir),
        store=LocalStore(),
        opener=lambda url: None,
        probe=FixedProbe(tier),
    )
    page.start()
    steps = len(args.scroll) + 1
    for y in args.scroll:
        page.stage.advance(args.ms / steps)
        page.stage.scroll_to(y)
    page.stage.advance(args.ms / steps)
    json.dump(page.summary(), sys.stdout, indent=2)
    sys.stdout.write("\n")
    page.stage.teardown()
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    if args.command == "serve":
        return _serve(args)
    return _simulate(args)


if __name__ == "__main__":
    sys.exit(main())
