"""
API module - HTTP surface of the messaging gateway.

Routes live in their own modules and are attached to a fresh application by
``create_app``.
"""

from .shared import create_app, client_address

__all__ = [
    "create_app",
    "client_address",
]
