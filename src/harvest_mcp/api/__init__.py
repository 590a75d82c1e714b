"""
Harvest API access.
"""

from harvest_mcp.api.client import HarvestClient

__all__ = ["HarvestClient"]
