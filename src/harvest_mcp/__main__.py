"""
Harvest MCP CLI entry point.

Usage:
    python -m harvest_mcp install                     # Install to Claude Desktop
    python -m harvest_mcp install --access-token T --account-id A
    python -m harvest_mcp install --remove            # Remove from Claude Desktop
    python -m harvest_mcp serve                       # Run MCP server
"""

import argparse
import sys


def main():
    parser = argparse.ArgumentParser(
        prog="harvest-mcp",
        description="Harvest time tracking MCP server"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # install command
    install_parser = subparsers.add_parser("install", help="Add to Claude Desktop")
    install_parser.add_argument(
        "--remove", "-r",
        action="store_true",
        dest="uninstall",
        help="Remove from Claude Desktop"
    )
    install_parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Overwrite existing entry"
    )
    install_parser.add_argument(
        "--name", "-n",
        default="harvest",
        help="Server name in config (default: harvest)"
    )
    install_parser.add_argument(
        "--access-token",
        help="Store HARVEST_ACCESS_TOKEN in the server entry"
    )
    install_parser.add_argument(
        "--account-id",
        help="Store HARVEST_ACCOUNT_ID in the server entry"
    )

    # serve command
    subparsers.add_parser("serve", help="Run MCP server")

    args = parser.parse_args()

    if args.command == "install":
        from harvest_mcp.cli.install import run_install
        sys.exit(run_install(
            uninstall=args.uninstall,
            force=args.force,
            name=args.name,
            access_token=args.access_token,
            account_id=args.account_id,
        ))

    elif args.command in ("serve", None):
        # Default to serve if no command given
        from harvest_mcp.server import serve
        serve()

    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
