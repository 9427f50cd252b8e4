"""MCP (Model Context Protocol) server module for transit directions.

This module provides an MCP server that exposes route request building and
directions response decoding through the Model Context Protocol.
"""

from .server import TransitDirectionsMCPServer, main

__all__ = ["TransitDirectionsMCPServer", "main"]
