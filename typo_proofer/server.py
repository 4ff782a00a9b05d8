"""HTTP server for the formatting API.

Run:
  python -m typo_proofer.server --port 18080
Then:
  curl -s localhost:18080/api/v1/format -H 'content-type: application/json' \\
       -d '{"text": "Vraiment ?", "transforms": ["format_french"]}'
"""

from __future__ import annotations

import argparse
import sys

import uvicorn


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="typo_proofer.server", add_help=True)
    parser.add_argument("--host", default="127.0.0.1", help="Bind host (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=18080, help="Bind port (default: 18080)")
    parser.add_argument("--log-level", default="info", help="Uvicorn log level (default: info)")
    parser.add_argument("--reload", action="store_true", help="Auto-reload on code changes (dev only)")

    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    uvicorn.run(
        "typo_proofer.api:app",
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        reload=bool(args.reload),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
