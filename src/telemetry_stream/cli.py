"""CLI interface for telemetry_stream."""

from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading

from . import __version__
from .config import TelemetryStreamConfig, load_config
from .errors import TransportError

logger = logging.getLogger(__name__)


def _apply_overrides(cfg: TelemetryStreamConfig, args: argparse.Namespace, section: str) -> None:
    target = getattr(cfg, section)
    if getattr(args, "host", None):
        target.host = args.host
    if getattr(args, "port", None) is not None:
        target.port = args.port
    if getattr(args, "interval", None) is not None:
        target.interval_seconds = args.interval


def _cmd_agent(args: argparse.Namespace, cfg: TelemetryStreamConfig) -> int:
    """Stream host metrics to a collector."""
    _apply_overrides(cfg, args, "agent")

    from .agent import TelemetryAgent

    agent = TelemetryAgent(cfg.agent)

    def _handle_signal(_sig: int, _frame: object) -> None:
        agent.stop()

    signal.signal(signal.SIGINT, _handle_signal)
    signal.signal(signal.SIGTERM, _handle_signal)

    print(f"Connecting to collector at {cfg.agent.host}:{cfg.agent.port}...")
    try:
        agent.run()
    except TransportError as exc:
        logger.error("Agent stopped: %s", exc)
        return 1
    finally:
        agent.close()
    print("\nAgent stopped.")
    return 0


def _cmd_serve(args: argparse.Namespace, cfg: TelemetryStreamConfig) -> int:
    """Accept agent connections and display their samples."""
    _apply_overrides(cfg, args, "server")
    if args.no_console:
        cfg.server.console = False

    from .server.commands import CommandConsole
    from .server.listener import TelemetryServer
    from .server.presenter import Presenter

    presenter = Presenter(clear_screen=cfg.server.clear_screen)
    server = TelemetryServer(cfg.server, presenter.present)
    try:
        server.bind()
    except OSError as exc:
        logger.error("Cannot listen on %s:%d: %s", cfg.server.host, cfg.server.port, exc)
        return 1

    stop = threading.Event()

    def _handle_signal(_sig: int, _frame: object) -> None:
        stop.set()

    signal.signal(signal.SIGINT, _handle_signal)
    signal.signal(signal.SIGTERM, _handle_signal)

    thread = threading.Thread(target=server.serve_forever, name="accept-loop", daemon=True)
    thread.start()
    print(f"Telemetry collector listening on {cfg.server.host}:{cfg.server.port}")
    if cfg.server.console:
        CommandConsole(stop.set, browser_url=cfg.server.browser_url).start()
        print("Commands: E - open browser, H - help, Q - quit")
    print("Press Ctrl+C to stop.\n")
    try:
        while not stop.is_set():
            stop.wait(0.5)
    finally:
        server.stop()
        # an active session blocks on its peer; the thread is a daemon
        thread.join(timeout=1.0)
    print("\nCollector stopped.")
    return 0


def _cmd_version(_args: argparse.Namespace, _cfg: TelemetryStreamConfig) -> int:
    print(f"telemetry_stream {__version__}")
    return 0


def main(argv: list[str] | None = None) -> None:
    """Entry point for the telemetry-stream CLI."""
    parser = argparse.ArgumentParser(
        prog="telemetry-stream",
        description="Stream hardware utilization from an agent to a collector",
    )
    parser.add_argument("--config", "-c", default=None, help="Path to telemetry_stream.yaml")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command")

    # agent
    agent_p = sub.add_parser("agent", help="Sample host metrics and send them to a collector")
    agent_p.add_argument("--host", default=None, help="Collector host")
    agent_p.add_argument("--port", type=int, default=None, help="Collector port")
    agent_p.add_argument("--interval", type=float, default=None, help="Seconds between samples")
    agent_p.set_defaults(func=_cmd_agent)

    # serve
    serve_p = sub.add_parser("serve", help="Listen for an agent and display its samples")
    serve_p.add_argument("--host", default=None, help="Address to bind")
    serve_p.add_argument("--port", type=int, default=None, help="Port to bind")
    serve_p.add_argument("--no-console", action="store_true", help="Do not read operator commands")
    serve_p.set_defaults(func=_cmd_serve)

    # version
    ver_p = sub.add_parser("version", help="Print version")
    ver_p.set_defaults(func=_cmd_version)

    args = parser.parse_args(argv)
    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    cfg = load_config(args.config)
    level = "DEBUG" if args.verbose else cfg.log_level
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    sys.exit(args.func(args, cfg))


if __name__ == "__main__":
    main()
