"""
Command-line entry point: python -m snippetbox [--addr :4000] [--static-dir DIR] [--dsn URL]

Flags override the environment settings; everything else (session secret,
TLS file paths, log level) comes from the environment or .env.
"""

import argparse
import sys
from typing import List, Optional

import uvicorn

from snippetbox.config import apply_overrides, settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="snippetbox", description="Run the Snippetbox web server")
    parser.add_argument("--addr", default=None, help="HTTP network address, e.g. :4000")
    parser.add_argument("--static-dir", default=None, help="Path to static assets")
    parser.add_argument("--dsn", default=None, help="Database connection URL")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        apply_overrides(settings, addr=args.addr, static_dir=args.static_dir, dsn=args.dsn)
    except ValueError as e:
        print(f"snippetbox: {e}", file=sys.stderr)
        return 2

    options = {}
    if settings.tls_enabled:
        options.update(
            ssl_certfile=settings.tls_cert_file,
            ssl_keyfile=settings.tls_key_file,
            ssl_ciphers=settings.tls_ciphers,
        )

    # Imported by path so the app is built after the overrides are applied
    uvicorn.run(
        "snippetbox.main:app",
        host=settings.host,
        port=settings.port,
        timeout_keep_alive=60,
        log_config=None,
        **options,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
