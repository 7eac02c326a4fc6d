# bnfparse/main.py
import argparse
import json
import logging
import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from bnfparse.config import BnfParseConfig, BnfParseConfigError
from bnfparse.grammar import GrammarSyntaxError, format_rule, parse_grammar_or_raise
from bnfparse.logger import setup_bnfparse_logger

logger = logging.getLogger("bnfparse.main")
console = Console()


def run_serve(args) -> int:
    import uvicorn
    from bnfparse.web.api.main import create_app

    try:
        cfg = BnfParseConfig.load(args.config)
    except BnfParseConfigError as e:
        console.print(f"[bold red]{escape(str(e))}[/]", soft_wrap=True)
        return 2

    if args.host:
        cfg.host = args.host
    if args.port:
        cfg.port = args.port
    if args.log_level:
        cfg.log_level = args.log_level

    level = logging.WARNING if args.quiet else getattr(logging, cfg.log_level)
    setup_bnfparse_logger(log_level=level, log_to_file=cfg.log_to_file)
    logger.info(f"Serving on {cfg.host}:{cfg.port}")

    uvicorn.run(create_app(cfg), host=cfg.host, port=cfg.port, log_level=logging.getLevelName(level).lower())
    return 0


def run_check(args) -> int:
    setup_bnfparse_logger(log_level=logging.WARNING if args.quiet else logging.INFO)
    try:
        with open(args.file, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[bold red]Cannot read {escape(args.file)}: {escape(str(e))}[/]", soft_wrap=True)
        return 2

    try:
        document = parse_grammar_or_raise(text)
    except GrammarSyntaxError as e:
        console.print(f"[bold red]{escape(args.file)}: {escape(e.failure.message)}[/]", soft_wrap=True)
        return 1

    if args.json:
        print(json.dumps(document.to_dict(), indent=2))
        return 0

    table = Table(title=f"[bold green]{escape(args.file)}[/] ({len(document)} rules)", show_header=True,
                  header_style="bold magenta")
    table.add_column("#", justify="right")
    table.add_column("Rule")
    table.add_column("Alternatives", justify="right")
    table.add_column("Definition")
    for i, rule in enumerate(document, 1):
        table.add_row(str(i), rule.name, str(len(rule.body)), escape(format_rule(rule)))
    console.print(table)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="bnfparse: BNF grammar parser and HTTP parsing service"
    )
    parser.add_argument("--quiet", action="store_true",
                        help="Minimize console output (overrides log-level to WARNING).")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP parsing service.")
    serve.add_argument("--config", default=None,
                       help="Optional path to an alternate config file (otherwise uses default in ~/.bnfparse/).")
    serve.add_argument("--host", default=None, help="Address to bind to (default 0.0.0.0)")
    serve.add_argument("--port", type=int, default=None, help="Port to listen on (default 3000)")
    serve.add_argument("--log-level", default=None, choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                       help="Set the logging level for bnfparse.")
    serve.set_defaults(func=run_serve)

    check = sub.add_parser("check", help="Parse a grammar file and report the result.")
    check.add_argument("file", help="Grammar file to parse")
    check.add_argument("--json", action="store_true", help="Print the parsed grammar as JSON")
    check.set_defaults(func=run_check)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
