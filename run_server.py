#!/usr/bin/env python
"""
Gateway Server Entry Point

Usage:
    Development:  python run_server.py --dev
    Production:   python run_server.py

    Or with Gunicorn:
    gunicorn apre.main:app -c gunicorn.conf.py
"""

import argparse
import os
import subprocess

import uvicorn

from apre.config import get_settings

settings = get_settings()


def run_dev_server(port: int):
    """Run development server with auto-reload."""
    uvicorn.run(
        "apre.main:app",
        host=settings.api_host,
        port=port,
        reload=True,
        reload_dirs=["apre"],
        log_level="debug",
        access_log=True,
    )


def run_prod_server(port: int):
    """Run production server with Uvicorn directly."""
    uvicorn.run(
        "apre.main:app",
        host=settings.api_host,
        port=port,
        workers=settings.api_workers,
        log_level=settings.monitoring.log_level.lower(),
        access_log=True,
        proxy_headers=True,
        forwarded_allow_ips="*",
        server_header=False,
        date_header=True,
    )


def run_gunicorn():
    """Run with Gunicorn."""
    subprocess.run(["gunicorn", "apre.main:app", "-c", "gunicorn.conf.py"], check=False)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="APRE Reporting API Server")
    parser.add_argument(
        "--dev",
        action="store_true",
        help="Run in development mode with auto-reload"
    )
    parser.add_argument(
        "--gunicorn",
        action="store_true",
        help="Run with Gunicorn (production)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.api_port,
        help=f"Port to run on (default: {settings.api_port})"
    )

    args = parser.parse_args()
    os.environ["API_PORT"] = str(args.port)

    if args.dev:
        run_dev_server(args.port)
    elif args.gunicorn:
        run_gunicorn()
    else:
        run_prod_server(args.port)
