"""CLI entry point and argument parsing"""

import argparse
import asyncio
import sys

from rich.console import Console

import settings
from hosted_login import FlowConfig, InvalidFlowConfig, classify
from utils.logging_setup import setup_logging
from cli.replay import TraceError, build_engine, load_trace, replay_trace
from cli.status_display import show_classification, show_replay


console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Hosted-login navigation policy tools")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    parser.add_argument("--base-url", default=None, help="Hosted-login base URL (default: from config)")
    parser.add_argument("--client-id", default=None, help="OAuth client id (default: from config)")
    parser.add_argument(
        "--social-host",
        action="append",
        default=[],
        help="Provider host treated as a social pre-login page (repeatable)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    replay = subparsers.add_parser("replay", help="Replay a JSON trace of navigation events")
    replay.add_argument("trace", help="Path to the trace file")
    replay.add_argument(
        "--exchange",
        choices=("success", "failure", "live"),
        default="success",
        help="Code exchange outcome, or live to call the token endpoint",
    )
    replay.add_argument(
        "--open-external",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Whether system browser hand-offs succeed",
    )

    classify_parser = subparsers.add_parser("classify", help="Print the route category of URLs")
    classify_parser.add_argument("urls", nargs="+", help="URLs to classify")

    return parser


def build_config(args: argparse.Namespace) -> FlowConfig:
    """Flow configuration from settings, with CLI overrides"""
    config = FlowConfig.from_settings()
    overrides = {}
    if args.base_url:
        overrides["base_url"] = args.base_url
        # Derived URIs follow the new base URL
        overrides["callback_uri"] = config.callback_uri.replace(config.base_url, args.base_url.rstrip("/"), 1)
        overrides["social_login_redirect_uri"] = ""
    if args.client_id:
        overrides["client_id"] = args.client_id
    if args.social_host:
        overrides["social_prelogin_hosts"] = config.social_prelogin_hosts + tuple(
            host.lower() for host in args.social_host
        )
    if not overrides:
        return config

    fields = {
        "base_url": config.base_url,
        "client_id": config.client_id,
        "callback_uri": config.callback_uri,
        "social_login_redirect_uri": config.social_login_redirect_uri,
        "social_prelogin_hosts": config.social_prelogin_hosts,
        "external_browser_marker": config.external_browser_marker,
    }
    fields.update(overrides)
    return FlowConfig(**fields)


def run_replay(args: argparse.Namespace, config: FlowConfig) -> int:
    try:
        events = load_trace(args.trace)
    except TraceError as e:
        console.print(f"[red]ERROR:[/red] {e}")
        return 1

    engine, surface = build_engine(
        config,
        exchange=args.exchange,
        open_external=args.open_external,
        timeout=settings.EXCHANGE_TIMEOUT,
    )

    async def _run():
        try:
            return await replay_trace(engine, surface, events)
        finally:
            engine.close()

    steps = asyncio.run(_run())
    show_replay(steps, engine.state, console)
    return 0


def run_classify(args: argparse.Namespace, config: FlowConfig) -> int:
    show_classification([(url, classify(url, config)) for url in args.urls], console)
    return 0


def main(argv=None) -> int:
    """Entry point for the CLI"""
    args = build_parser().parse_args(argv)

    if args.debug:
        setup_logging("debug", log_file=settings.DEBUG_LOG_FILE, console=console)
    else:
        setup_logging(settings.LOG_LEVEL, console=console)

    try:
        config = build_config(args)
    except InvalidFlowConfig as e:
        console.print(f"[red]ERROR:[/red] {e}")
        return 1

    try:
        if args.command == "replay":
            return run_replay(args, config)
        return run_classify(args, config)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        return 130


if __name__ == "__main__":
    sys.exit(main())
