"""
Main entry point for the Pillora drug-information assistant.

Starts the FastAPI chat service under Uvicorn with production settings:
- Graceful shutdown handling (SIGTERM/SIGINT)
- Port taken from the PORT env var
"""

from __future__ import annotations

import sys
import signal

import uvicorn

from config import logger, PORT, ENVIRONMENT
from http_service import app


def build_server(port: int = PORT) -> uvicorn.Server:
    config = uvicorn.Config(
        app,
        host="0.0.0.0",
        port=port,
        log_level="info",
        access_log=ENVIRONMENT != "production",  # Reduce noise in production logs
    )
    return uvicorn.Server(config)


def run():
    logger.info("[INIT] Initializing Server...")
    server = build_server()

    # Our own handlers so shutdown is logged before Uvicorn drains connections
    server.install_signal_handlers = lambda: None

    def handle_signal(signum, frame):
        sig_name = signal.Signals(signum).name
        logger.info(f"[SIGNAL] Received {sig_name}. Initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGTERM, handle_signal)
    signal.signal(signal.SIGINT, handle_signal)

    logger.info(f"[HTTP] Starting FastAPI server on port {PORT}")
    try:
        server.run()
    except Exception as e:
        logger.error(f"[HTTP] Server failed: {e}")
        sys.exit(1)

    logger.info("[SHUTDOWN] Process exiting.")


if __name__ == "__main__":
    run()
