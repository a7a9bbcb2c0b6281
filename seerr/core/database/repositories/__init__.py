"""
Repositories for the database layer.

Each repository wraps one entity and an ``AsyncSession``.
"""

from .base import BaseRepository, QueryBuilder
from .blocklist import BlocklistRepository
from .media import MediaRepository
from .media_requests import REQUEST_FILTERS, MediaRequestRepository
from .override_rules import OverrideRuleRepository
from .routing_rules import RoutingRuleRepository
from .users import UserRepository

__all__ = [
    "REQUEST_FILTERS",
    "BaseRepository",
    "BlocklistRepository",
    "MediaRepository",
    "MediaRequestRepository",
    "OverrideRuleRepository",
    "QueryBuilder",
    "RoutingRuleRepository",
    "UserRepository",
]
