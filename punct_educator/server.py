"""HTTP server for punct-educator.

Run:
  python -m punct_educator.server
Then:
  curl -s http://127.0.0.1:18080/api/v1/educate -H 'content-type: application/json' \
       -d '{"text": "\"fun\" -- really..."}'
"""

from __future__ import annotations

import argparse
import sys

import uvicorn


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="punct_educator.server", add_help=True)
    parser.add_argument("--host", default="127.0.0.1", help="Bind host (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=18080, help="Bind port (default: 18080)")
    parser.add_argument("--log-level", default="info", help="uvicorn log level (default: info)")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes (development only)")

    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    uvicorn.run(
        "punct_educator.api:app",
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        reload=args.reload,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
