"""
Database entities.

Importing this package registers every table on ``SQLModel.metadata``.
"""

from .blocklist import Blocklist
from .media import Media
from .media_requests import MediaRequest
from .override_rules import OverrideRule
from .routing_rules import RoutingRule
from .users import User, UserType

__all__ = [
    "Blocklist",
    "Media",
    "MediaRequest",
    "OverrideRule",
    "RoutingRule",
    "User",
    "UserType",
]
