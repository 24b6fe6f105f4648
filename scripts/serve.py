#!/usr/bin/env python3
"""
Run the Filmorate API with uvicorn.

Usage:
  python scripts/serve.py [--host 0.0.0.0] [--port 8000] [--reload]
"""
from __future__ import annotations

import argparse
import os

import uvicorn


def main() -> None:
    ap = argparse.ArgumentParser(description="Run the Filmorate API")
    ap.add_argument("--host", default=os.getenv("HOST", "127.0.0.1"), help="Bind address")
    ap.add_argument("--port", type=int, default=int(os.getenv("PORT", "8000")), help="Bind port")
    ap.add_argument("--reload", action="store_true", help="Reload on code changes (dev only)")
    args = ap.parse_args()

    # single worker: stores are in-memory and per-process
    uvicorn.run("filmorate.app_factory:app", host=args.host, port=args.port, reload=args.reload, workers=1)


if __name__ == "__main__":
    main()
