"""Unit tests for routing rule resolution."""

import pytest

from seerr.core.database.entities import RoutingRule
from seerr.core.database.repositories import RoutingRuleRepository
from seerr.lib.routing_resolver import (
    NoDefaultServiceError,
    RouteParams,
    matches_all_conditions,
    parse_id_list,
    parse_language_list,
    resolve_route,
)


def _rule(**fields) -> RoutingRule:
    defaults = {"name": "rule", "service_type": "radarr", "target_service_id": 0, "priority": 10}
    defaults.update(fields)
    return RoutingRule(**defaults)


def _params(**fields) -> RouteParams:
    defaults = {"service_type": "radarr", "is_4k": False, "user_id": 5, "genres": [28, 12], "language": "en", "keywords": [9]}
    defaults.update(fields)
    return RouteParams(**defaults)


class TestParsing:
    def test_parse_id_list(self):
        assert parse_id_list("1, 2,,abc,3") == [1, 2, 3]
        assert parse_id_list(None) == []
        assert parse_id_list("") == []

    def test_parse_language_list(self):
        assert parse_language_list("en|ja| ") == ["en", "ja"]
        assert parse_language_list(None) == []


class TestMatchesAllConditions:
    def test_fallback_always_matches(self):
        assert matches_all_conditions(_rule(is_fallback=True, users="99"), _params())

    def test_rule_without_conditions_matches(self):
        assert matches_all_conditions(_rule(), _params())

    def test_users_condition(self):
        assert matches_all_conditions(_rule(users="4,5"), _params())
        assert not matches_all_conditions(_rule(users="4,6"), _params())

    def test_genres_any_overlap(self):
        assert matches_all_conditions(_rule(genres="16,28"), _params())
        assert not matches_all_conditions(_rule(genres="16,35"), _params())

    def test_languages_membership(self):
        assert matches_all_conditions(_rule(languages="fr|en"), _params())
        assert not matches_all_conditions(_rule(languages="fr|de"), _params())
        assert not matches_all_conditions(_rule(languages="en"), _params(language=None))

    def test_keywords_any_overlap(self):
        assert matches_all_conditions(_rule(keywords="9,210024"), _params())
        assert not matches_all_conditions(_rule(keywords="210024"), _params())

    def test_conditions_are_anded(self):
        assert matches_all_conditions(_rule(users="5", genres="28"), _params())
        assert not matches_all_conditions(_rule(users="5", genres="35"), _params())


@pytest.mark.asyncio
class TestResolveRoute:
    async def test_highest_priority_match_wins(self, session, store):
        repo = RoutingRuleRepository(session)
        await repo.create(_rule(name="low", genres="28", priority=10, target_service_id=0, root_folder="/low"))
        high = await repo.create(
            _rule(name="high", genres="28", priority=20, target_service_id=0, root_folder="/high", tags="1,2")
        )

        route = await resolve_route(session, store, _params())

        assert route.rule_id == high.id
        assert route.root_folder == "/high"
        assert route.tags == [1, 2]

    async def test_unmatched_rules_fall_through_to_fallback(self, session, store):
        repo = RoutingRuleRepository(session)
        await repo.create(_rule(name="anime", keywords="210024", priority=20, target_service_id=0))
        fallback = await repo.create(
            _rule(
                name="Radarr Default Route",
                is_fallback=True,
                priority=0,
                target_service_id=0,
                active_profile_id=1,
                root_folder="/movies",
                minimum_availability="released",
            )
        )

        route = await resolve_route(session, store, _params())

        assert route.rule_id == fallback.id
        assert route.profile_id == 1
        assert route.minimum_availability == "released"

    async def test_rules_for_other_quality_are_ignored(self, session, store):
        await RoutingRuleRepository(session).create(_rule(genres="28", is_4k=True, target_service_id=1))

        route = await resolve_route(session, store, _params())

        assert route.rule_id is None
        assert route.service_id == 0

    async def test_defaults_to_settings_default_instance(self, session, store):
        route = await resolve_route(session, store, _params(is_4k=True))
        assert route.service_id == 1
        assert route.rule_id is None

    async def test_no_default_instance_raises(self, session, store):
        store.sonarr = []
        with pytest.raises(NoDefaultServiceError) as exc_info:
            await resolve_route(session, store, _params(service_type="sonarr"))
        assert "No default sonarr instance configured for non-4K content." in str(exc_info.value)
