"""Port interfaces for external dependencies.

This module defines the protocols that logging and transport adapters
must implement.
"""

from .services import LoggerPort, TransportPort

__all__ = ["LoggerPort", "TransportPort"]
