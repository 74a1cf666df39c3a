"""Network module for RCache."""

from .connection import create_client

__all__ = ["create_client"]
