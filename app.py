#!/usr/bin/env python3
"""
Main entry point for the short link service.

Concurrency: one process serves many connections through async I/O
(FastAPI + redis.asyncio / threaded file I/O). The mapping store is built once
in the lifespan and shared by every request. The memory and file backends are
per-process; run one instance per data file.

Usage:
    python app.py

Environment variables:
    STORAGE_BACKEND - memory, file or redis (default: redis if REDIS_URL is set, else memory)
    REDIS_URL - Redis connection URL
    DATA_DIR - Directory for the file backend
    PUBLIC_HOST - Public base URL or host used in short URLs
    PORT - Port to listen on
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import Config, load_config
from shortlinks.service import ShortLinkService
from shortlinks.slug import SlugGenerator
from shortlinks.storage.factory import create_store
from shortlinks.common.logging_config import setup_logging
from web_app import create_app


def build_lifespan(config: Config, logger):
    """Lifespan that owns the store and service for the app's lifetime."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting short link service...")

        store = create_store(config, logger=logger)
        service = ShortLinkService(
            store=store,
            slug_generator=SlugGenerator(length=config.slug_length),
            base_url=config.public_host,
            max_attempts=config.max_slug_attempts,
            logger=logger,
        )
        app.state.service = service

        if not await store.health_check():
            logger.warning(f"{store.name} storage backend is not reachable yet")

        logger.info("Service started successfully")

        try:
            yield
        finally:
            logger.info("Shutting down short link service...")
            await service.close()
            logger.info("Service stopped")

    return lifespan


def main():
    """Main entry point."""
    config = load_config()

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("Short Link Service")
    logger.info(f"Configuration: {config.model_dump(exclude={'redis_url'})}")

    app = create_app(
        service_instance=None,  # Built in lifespan
        config=config,
        lifespan=build_lifespan(config, logger),
    )

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
        access_log=False,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
