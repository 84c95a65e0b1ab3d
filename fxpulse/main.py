"""FxPulse — application entry point.

Boots the FastAPI presentation API and provides the CLI entry point for the
long-running ``serve`` mode and a one-shot ``once`` mode.
"""

import logging

from fastapi import FastAPI

from fxpulse.api.routers import router

app = FastAPI(title="FxPulse Analysis API", version="0.1.0")
app.include_router(router)

logger = logging.getLogger("fxpulse")


@app.get("/health")
async def health():
    """Liveness check."""
    return {"status": "ok"}


# ── CLI ──────────────────────────────────────────────────────────────────


def _run_cli() -> None:
    """Parse CLI arguments and dispatch to the appropriate mode."""
    import argparse
    import asyncio

    from fxpulse.config import load_config

    parser = argparse.ArgumentParser(description="FxPulse market analysis engine")
    parser.add_argument(
        "--mode",
        choices=["serve", "once"],
        default="serve",
        help="serve: API + periodic refresh; once: print one snapshot (default: serve)",
    )
    parser.add_argument(
        "--timeframe",
        help="Timeframe to select after start-up (15m, 1h, 4h, 1d)",
    )
    parser.add_argument("--env-file", help="Path to a .env file")
    args = parser.parse_args()

    config = load_config(env_path=args.env_file)

    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.mode == "once":
        asyncio.run(_run_once(config, args.timeframe))
    else:
        asyncio.run(_run_server(config, args.timeframe))


async def _build_engine(config, timeframe: str | None):
    """Create and initialise the engine described by *config*."""
    from fxpulse.engine import MarketAnalysisEngine
    from fxpulse.feeds.registry import get_source

    source = get_source(config)
    engine = await MarketAnalysisEngine.create(
        source,
        reference_price=config.reference_price,
        poll_timeout=config.poll_timeout_seconds,
        default_timeframe=config.default_timeframe,
    )
    if timeframe:
        await engine.select(timeframe)
    logger.info("Using %s indicator feed.", config.feed_kind)
    return engine


async def _run_once(config, timeframe: str | None) -> None:
    """Compute a single snapshot and print it."""
    from fxpulse.cli.dashboard import print_snapshot

    engine = await _build_engine(config, timeframe)
    print_snapshot(engine.current_snapshot())


async def _run_server(config, timeframe: str | None) -> None:
    """Start the API server and the refresh scheduler concurrently."""
    import asyncio

    import uvicorn

    from fxpulse.api.routers import configure_routers
    from fxpulse.scheduler import RefreshScheduler

    engine = await _build_engine(config, timeframe)
    configure_routers(engine=engine, symbol=config.symbol)
    scheduler = RefreshScheduler(engine, interval=config.refresh_seconds)

    uvi_config = uvicorn.Config(
        app,
        host="0.0.0.0",
        port=config.http_port,
        log_level=config.log_level.lower(),
    )
    server = uvicorn.Server(uvi_config)

    # uvicorn owns SIGINT/SIGTERM; the scheduler follows the server down.
    async def _serve():
        try:
            await server.serve()
        finally:
            logger.info("Server stopped — stopping refresh scheduler.")
            scheduler.stop()

    logger.info("Analysis API available at http://localhost:%d", config.http_port)
    results = await asyncio.gather(
        _serve(),
        scheduler.run(),
        return_exceptions=True,
    )
    logger.info("FxPulse stopped. Results: %s", results)


if __name__ == "__main__":
    _run_cli()
