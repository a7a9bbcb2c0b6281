"""
I/O models for API requests and responses.

This package contains Pydantic-based I/O schemas that define the contract
between API endpoints and clients. These models are separate from database
entities to allow independent evolution of API contracts.

Modules:
- common: camelCase base model and paging
- users: User I/O models
- media_requests: Media and media request I/O models
- routing_rules: Routing rule I/O models
- override_rules: Override rule I/O models
- blocklist: Blocklist I/O models
- settings: Settings request bodies and status
"""

from .blocklist import BlocklistCreate, BlocklistFilter, BlocklistRead
from .common import ApiModel, MessageResponse, Page, PageInfo
from .media_requests import MediaRead, MediaRequestCreate, MediaRequestDecline, MediaRequestRead
from .override_rules import AdvancedRequestQuery, OverrideRuleRead, OverrideRulesResultRead, OverrideRuleWrite
from .routing_rules import RoutingRuleCreate, RoutingRuleRead, RoutingRuleReorder, RoutingRuleUpdate
from .settings import MetadataSettingsUpdate, StatusRead
from .users import UserCreate, UserRead, UserUpdate

__all__ = [
    "AdvancedRequestQuery",
    "ApiModel",
    "BlocklistCreate",
    "BlocklistFilter",
    "BlocklistRead",
    "MediaRead",
    "MediaRequestCreate",
    "MediaRequestDecline",
    "MediaRequestRead",
    "MessageResponse",
    "MetadataSettingsUpdate",
    "OverrideRuleRead",
    "OverrideRulesResultRead",
    "OverrideRuleWrite",
    "Page",
    "PageInfo",
    "RoutingRuleCreate",
    "RoutingRuleRead",
    "RoutingRuleReorder",
    "RoutingRuleUpdate",
    "StatusRead",
    "UserCreate",
    "UserRead",
    "UserUpdate",
]
