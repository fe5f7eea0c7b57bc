"""Unified command line entry point using ``argparse``."""
from __future__ import annotations

import argparse

from . import analyze_strategy
from . import bs_calculator
from . import strategy_template
from ..logutils import setup_logging


def _serve(args: argparse.Namespace) -> int:
    from ..web import main as web_main

    web_main.run(host=args.host, port=args.port)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="optrisk command line utilities")
    sub = parser.add_subparsers(dest="cmd")

    sub_bs = sub.add_parser("bs-calculator", help="Price one option with Black-Scholes")
    sub_bs.add_argument("params", nargs="*", help="TYPE SPOT STRIKE DTE IV [R] [MID]")
    sub_bs.set_defaults(func=lambda a: bs_calculator.main(a.params))

    sub_an = sub.add_parser("analyze", help="Analyze a strategy JSON file")
    sub_an.add_argument("path", help="Path to the request JSON")
    sub_an.add_argument("--json", action="store_true", help="Print the JSON payload")
    sub_an.set_defaults(
        func=lambda a: analyze_strategy.main([a.path] + (["--json"] if a.json else []))
    )

    sub_tpl = sub.add_parser("template", help="Build and analyze a template strategy")
    sub_tpl.add_argument("name", help="Template name, e.g. iron_condor")
    sub_tpl.add_argument("path", help="Path to the option chain JSON")
    sub_tpl.add_argument("--quantity", type=int, default=1)
    sub_tpl.add_argument("--json", action="store_true", help="Print the JSON payload")
    sub_tpl.set_defaults(
        func=lambda a: strategy_template.main(
            [a.name, a.path, "--quantity", str(a.quantity)] + (["--json"] if a.json else [])
        )
    )

    sub_srv = sub.add_parser("serve", help="Start the web API")
    sub_srv.add_argument("--host", default=None)
    sub_srv.add_argument("--port", type=int, default=None)
    sub_srv.set_defaults(func=_serve)

    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        return 0
    setup_logging()
    return args.func(args) or 0


if __name__ == "__main__":
    import sys

    sys.exit(main())
