#!/usr/bin/env python3
"""
frontdoor - shared-secret password gate for a single-tenant web app.
"""

import argparse
import logging
import sys

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", stream=sys.stderr
)


def check_config() -> int:
    """Report whether the gate can authenticate anyone. Never prints the secret itself."""
    from frontdoor.auth.config import load_gate_config

    cfg = load_gate_config()
    print(f"environment:     {cfg.environment}")
    print(f"password set:    {'yes' if cfg.password_configured else 'NO (UI_PASSWORD missing)'}")
    print(f"secure cookie:   {'yes' if cfg.cookie_secure else 'no'}")
    print(f"signed sessions: {'yes' if cfg.signing_enabled else 'no'}")
    return 0 if cfg.password_configured else 1


def main() -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Password gate for the web UI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Start the server
  UI_PASSWORD=... python main.py --serve --port 8080

  # Check configuration without starting anything
  python main.py --check-config
        """,
    )
    parser.add_argument("--serve", action="store_true", help="Run the HTTP server")
    parser.add_argument("--check-config", action="store_true", help="Validate gate configuration and exit")
    parser.add_argument("--host", default="0.0.0.0", help="Server bind host (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8080, help="Server listen port (default: 8080)")
    args = parser.parse_args()

    if args.check_config:
        return check_config()

    if args.serve:
        from frontdoor.api.server import run

        run(host=args.host, port=args.port)
        return 0

    parser.print_help()
    return 2


if __name__ == "__main__":
    sys.exit(main())
