"""
Install CLI command.

Adds harvest-mcp to Claude Desktop configuration, running the server with
the current Python interpreter.
"""

import json
import sys
from pathlib import Path
from typing import Optional


def get_claude_config_path() -> Path:
    """Get Claude Desktop config path for current OS."""
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "Claude" / "claude_desktop_config.json"
    elif sys.platform == "win32":
        return Path.home() / "AppData" / "Roaming" / "Claude" / "claude_desktop_config.json"
    else:
        # Linux
        return Path.home() / ".config" / "Claude" / "claude_desktop_config.json"


def load_claude_config() -> dict:
    """Load existing Claude Desktop config or return empty structure."""
    config_path = get_claude_config_path()

    if config_path.exists():
        try:
            return json.loads(config_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, IOError):
            return {}

    return {}


def save_claude_config(config: dict) -> None:
    """Save Claude Desktop config."""
    config_path = get_claude_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(json.dumps(config, indent=2), encoding="utf-8")


def build_server_entry(access_token: Optional[str] = None, account_id: Optional[str] = None) -> dict:
    """Server entry launching 'python -m harvest_mcp serve'."""
    entry = {
        "command": sys.executable,
        "args": ["-m", "harvest_mcp", "serve"],
    }

    env = {}
    if access_token:
        env["HARVEST_ACCESS_TOKEN"] = access_token
    if account_id:
        env["HARVEST_ACCOUNT_ID"] = account_id
    if env:
        entry["env"] = env

    return entry


def install_to_claude(
    name: str = "harvest",
    force: bool = False,
    access_token: Optional[str] = None,
    account_id: Optional[str] = None,
) -> bool:
    """
    Add harvest-mcp to Claude Desktop configuration.

    Merges into existing config, preserving all other servers.

    Returns True if installed, False if an entry exists and force is off.
    """
    config = load_claude_config()
    servers = config.setdefault("mcpServers", {})

    if name in servers and not force:
        return False

    servers[name] = build_server_entry(access_token, account_id)
    save_claude_config(config)
    return True


def uninstall_from_claude(name: str = "harvest") -> bool:
    """
    Remove harvest-mcp from Claude Desktop configuration.

    Returns True if removed, False if not found.
    """
    config = load_claude_config()

    if name not in config.get("mcpServers", {}):
        return False

    del config["mcpServers"][name]
    save_claude_config(config)
    return True


def check_installed(name: str = "harvest") -> bool:
    """Check if harvest-mcp is installed in Claude Desktop."""
    config = load_claude_config()
    return name in config.get("mcpServers", {})


def run_install(
    uninstall: bool = False,
    force: bool = False,
    name: str = "harvest",
    access_token: Optional[str] = None,
    account_id: Optional[str] = None,
) -> int:
    """
    Main install command entry point.

    Returns exit code (0 = success, 1 = error).
    """
    config_path = get_claude_config_path()

    if uninstall:
        if uninstall_from_claude(name):
            print(f"✓ Removed '{name}' from Claude Desktop")
            print(f"  Config: {config_path}")
            print("\nRestart Claude Desktop to apply changes.")
            return 0
        print(f"✗ '{name}' not found in Claude Desktop config")
        return 1

    if check_installed(name) and not force:
        print(f"✗ '{name}' already installed in Claude Desktop")
        print("  Use --force to overwrite")
        return 1

    try:
        install_to_claude(name, force=force, access_token=access_token, account_id=account_id)
    except OSError as e:
        print(f"✗ Error: {e}")
        return 1

    print(f"✓ Installed '{name}' to Claude Desktop")
    print(f"  Config: {config_path}")
    print(f"  Python: {sys.executable}")
    if not (access_token and account_id):
        print("  Credentials: set HARVEST_ACCESS_TOKEN and HARVEST_ACCOUNT_ID, or pass them per tool call")
    print("\nRestart Claude Desktop to activate.")
    return 0
