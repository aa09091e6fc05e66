"""Command-line runner.

Usage:
    # Single pipeline cycle, prints the run summary as JSON
    trendpress run-once

    # Run the interval scheduler until interrupted
    trendpress schedule

    # Serve the HTTP API (starts the scheduler when SCHEDULER_ENABLED)
    trendpress serve --host 0.0.0.0 --port 8000
"""

import argparse
import asyncio
import json
import signal
import sys

import uvicorn

from trendpress.core.container import ApplicationContainer, get_container
from trendpress.core.database import close_db, init_db
from trendpress.core.logging import get_logger, setup_logging
from trendpress.services.pipeline.schemas import RunStatus

logger = get_logger(__name__)


async def run_once(container: ApplicationContainer) -> int:
    """Run one pipeline cycle.

    Returns:
        Process exit code: 0 unless the run failed
    """
    engine = container.db_engine()
    await init_db(engine)
    try:
        result = await container.pipeline().run_once()
    finally:
        await container.http_client().close()
        await close_db(engine)

    print(json.dumps(result.model_dump(mode="json"), ensure_ascii=False, indent=2))
    return 1 if result.status == RunStatus.FAILED else 0


async def run_scheduler(container: ApplicationContainer) -> int:
    """Run the interval scheduler until SIGINT/SIGTERM."""
    engine = container.db_engine()
    await init_db(engine)

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
        except NotImplementedError:
            # Windows event loops have no signal handler support
            pass

    scheduler = container.scheduler()
    scheduler.start()
    try:
        await stop.wait()
    finally:
        scheduler.shutdown()
        await container.http_client().close()
        await close_db(engine)
    return 0


def serve(host: str, port: int) -> int:
    uvicorn.run("trendpress.main:build_app", factory=True, host=host, port=port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="trendpress",
        description="Korean trending-keyword news pipeline",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("run-once", help="Run a single pipeline cycle")
    commands.add_parser("schedule", help="Run the pipeline on its interval until stopped")

    serve_parser = commands.add_parser("serve", help="Serve the HTTP API")
    serve_parser.add_argument("--host", default=None, help="Bind host (default: API_HOST)")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port (default: API_PORT)")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()
    container = get_container()
    config = container.config()

    logger.info("Runner starting", command=args.command, env=config.app_env)
    try:
        if args.command == "run-once":
            return asyncio.run(run_once(container))
        if args.command == "schedule":
            return asyncio.run(run_scheduler(container))
        return serve(args.host or config.api_host, args.port or config.api_port)
    except KeyboardInterrupt:
        logger.info("Runner interrupted")
        return 130


__all__ = ["build_parser", "main", "run_once", "run_scheduler", "serve"]


if __name__ == "__main__":
    sys.exit(main())
