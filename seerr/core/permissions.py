"""
User permission flags and checks.

Permissions are stored on the user as a single integer bitmask. The values are
part of the public API (clients send and receive the raw integer) and must not
be renumbered.
"""

from __future__ import annotations

from enum import IntFlag
from typing import Iterable, Literal, Union


class Permission(IntFlag):
    """Bit flags granted to a user."""

    NONE = 0
    ADMIN = 2
    MANAGE_SETTINGS = 4
    MANAGE_USERS = 8
    MANAGE_REQUESTS = 16
    REQUEST = 32
    VOTE = 64
    AUTO_APPROVE = 128
    AUTO_APPROVE_MOVIE = 256
    AUTO_APPROVE_TV = 512
    REQUEST_4K = 1024
    REQUEST_4K_MOVIE = 2048
    REQUEST_4K_TV = 4096
    REQUEST_ADVANCED = 8192
    REQUEST_VIEW = 16384
    AUTO_APPROVE_4K = 32768
    AUTO_APPROVE_4K_MOVIE = 65536
    AUTO_APPROVE_4K_TV = 131072
    REQUEST_MOVIE = 262144
    REQUEST_TV = 524288
    MANAGE_ISSUES = 1048576
    VIEW_ISSUES = 2097152
    CREATE_ISSUES = 4194304
    AUTO_REQUEST = 8388608
    AUTO_REQUEST_MOVIE = 16777216
    AUTO_REQUEST_TV = 33554432
    RECENT_VIEW = 67108864
    WATCHLIST_VIEW = 134217728
    MANAGE_BLOCKLIST = 268435456
    VIEW_BLOCKLIST = 1073741824


AUTO_APPROVE_PERMISSIONS = frozenset(
    {
        Permission.AUTO_APPROVE,
        Permission.AUTO_APPROVE_MOVIE,
        Permission.AUTO_APPROVE_TV,
        Permission.AUTO_APPROVE_4K,
        Permission.AUTO_APPROVE_4K_MOVIE,
        Permission.AUTO_APPROVE_4K_TV,
    }
)

CheckType = Literal["and", "or"]


def is_auto_approve_permission(permission: Union[Permission, int]) -> bool:
    """Return True for any of the auto-approve flags."""
    return Permission(permission) in AUTO_APPROVE_PERMISSIONS


def has_permission(
    permissions: Union[Permission, int, Iterable[Union[Permission, int]]],
    value: int,
    check_type: CheckType = "and",
) -> bool:
    """
    Check a user's permission bitmask against one or more permissions.

    ADMIN satisfies every check except those that involve an auto-approve
    permission, so administrators can still opt out of automatic approval.

    Args:
        permissions: A single permission or a list of permissions to check.
        value: The user's permission bitmask.
        check_type: "and" requires every permission, "or" requires at least one.

    Returns:
        True if the check passes.
    """
    if isinstance(permissions, int):
        required = [Permission(permissions)]
    else:
        required = [Permission(p) for p in permissions]

    if not required or required == [Permission.NONE]:
        return True

    involves_auto_approve = any(is_auto_approve_permission(p) for p in required)
    if value & Permission.ADMIN and not involves_auto_approve:
        return True

    if check_type == "or":
        return any(value & p for p in required)
    return all(value & p for p in required)
