#!/usr/bin/env python
"""
Server Entry Point

Usage:
    Development:  python run_server.py --dev
    Production:   python run_server.py --workers 4
    Seed data:    python run_server.py --seed
"""

import argparse
import asyncio
import os


def run_dev_server(port: int):
    """Run development server with auto-reload."""
    import uvicorn

    uvicorn.run(
        "orderdesk.main:app",
        host="127.0.0.1",
        port=port,
        reload=True,
        reload_dirs=["orderdesk"],
        log_level="debug",
    )


def run_prod_server(port: int, workers: int):
    """Run production server with Uvicorn workers."""
    import uvicorn

    uvicorn.run(
        "orderdesk.main:app",
        host=os.getenv("API_HOST", "0.0.0.0"),
        port=port,
        workers=workers,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
        proxy_headers=True,
        server_header=False,
    )


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Order Desk API Server")
    parser.add_argument(
        "--dev",
        action="store_true",
        help="Run in development mode with auto-reload"
    )
    parser.add_argument(
        "--seed",
        action="store_true",
        help="Create the schema and seed reference data, then exit"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("API_PORT", 8000)),
        help="Port to run on (default: 8000)"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=int(os.getenv("WORKERS", 1)),
        help="Uvicorn worker processes (production only)"
    )

    args = parser.parse_args()

    if args.seed:
        from orderdesk.ingestion.seed_db import main as seed_main
        asyncio.run(seed_main())
    elif args.dev:
        run_dev_server(args.port)
    else:
        run_prod_server(args.port, args.workers)
