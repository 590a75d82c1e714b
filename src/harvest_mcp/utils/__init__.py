"""
Utilities: date resolution.
"""

from harvest_mcp.utils.dates import resolve_date, today_iso

__all__ = ["resolve_date", "today_iso"]
