"""Unit tests for API key authentication and permission dependencies."""

import pytest

from seerr.core.permissions import Permission
from seerr.server.services.auth import OWNER_USER_ID, AuthError, get_current_user, require_permission

pytestmark = pytest.mark.asyncio


class TestGetCurrentUser:
    async def test_valid_key_acts_as_owner(self, session, store, admin_user):
        user = await get_current_user(session, store, x_api_key=store.main.api_key, x_api_user=None)
        assert user.id == OWNER_USER_ID

    async def test_api_user_header_selects_user(self, session, store, admin_user, make_user):
        other = await make_user()

        user = await get_current_user(session, store, x_api_key=store.main.api_key, x_api_user=str(other.id))

        assert user.id == other.id

    @pytest.mark.parametrize("key", [None, "", "wrong"])
    async def test_bad_key(self, session, store, admin_user, key):
        with pytest.raises(AuthError) as exc_info:
            await get_current_user(session, store, x_api_key=key, x_api_user=None)
        assert exc_info.value.status_code == 401

    async def test_unset_server_key_rejects_everything(self, session, store, admin_user):
        store.main.api_key = ""
        with pytest.raises(AuthError):
            await get_current_user(session, store, x_api_key="", x_api_user=None)

    async def test_non_numeric_user_header(self, session, store, admin_user):
        with pytest.raises(AuthError, match="Invalid X-Api-User header"):
            await get_current_user(session, store, x_api_key=store.main.api_key, x_api_user="-1")

    async def test_unknown_user(self, session, store):
        with pytest.raises(AuthError) as exc_info:
            await get_current_user(session, store, x_api_key=store.main.api_key, x_api_user=None)
        assert exc_info.value.status_code == 401


class TestRequirePermission:
    async def test_passes_and_returns_user(self, make_user):
        user = await make_user(int(Permission.REQUEST | Permission.VOTE))
        dependency = require_permission(Permission.VOTE)

        assert await dependency(user) is user

    async def test_missing_permission_is_403(self, make_user):
        user = await make_user(int(Permission.REQUEST))
        dependency = require_permission([Permission.MANAGE_USERS, Permission.MANAGE_REQUESTS])

        with pytest.raises(AuthError) as exc_info:
            await dependency(user)
        assert exc_info.value.status_code == 403

    async def test_or_check(self, make_user):
        user = await make_user(int(Permission.VIEW_BLOCKLIST))
        dependency = require_permission(
            [Permission.MANAGE_BLOCKLIST, Permission.VIEW_BLOCKLIST], check_type="or"
        )

        assert await dependency(user) is user

    async def test_admin_passes(self, admin_user):
        assert await require_permission(Permission.MANAGE_SETTINGS)(admin_user) is admin_user
