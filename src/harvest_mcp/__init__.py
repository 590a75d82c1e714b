"""
Harvest MCP - Harvest time tracking tools for AI agents.
"""

__version__ = "0.1.0"
