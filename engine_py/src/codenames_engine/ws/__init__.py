"""
WebSocket transport for Codenames rooms.
"""

from .server import ConnectionManager, websocket_endpoint

__all__ = ["ConnectionManager", "websocket_endpoint"]
