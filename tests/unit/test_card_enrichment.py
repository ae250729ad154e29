import unittest
from datetime import datetime, timedelta, timezone

from catalog.services.card_constants import (
    BadgeKey,
    ListContext,
    PrimaryCta,
    TrendDelta,
    UserMediaState,
)
from catalog.services.card_enrichment import (
    CardEnrichmentService,
    MediaSnapshot,
    MediaType,
    UserMediaEntry,
    UserStateSnapshot,
)
from catalog.services.card_selectors import ContinuePoint
from catalog.services.rating_aggregator import ExternalRating, ExternalRatings
from catalog.services.release_status import ReleaseStatus
from catalog.services.verdict_types import (
    MovieVerdictMessageKey,
    ShowStatusHintKey,
    ShowVerdictMessageKey,
    VerdictType,
)

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


def ago(days):
    return NOW - timedelta(days=days)


def movie(id="1", **kw):
    return MediaSnapshot(id=id, media_type=MediaType.MOVIE, title=f"Movie {id}", **kw)


def show(id="10", **kw):
    return MediaSnapshot(id=id, media_type=MediaType.SHOW, title=f"Show {id}", **kw)


HIT_RATINGS = ExternalRatings(imdb=ExternalRating(8.2, 4000), tmdb=ExternalRating(7.9, 900))


class TestSignals(unittest.TestCase):
    def setUp(self):
        self.service = CardEnrichmentService()

    def test_anonymous_signals(self):
        s = self.service.build_signals(movie(release_date=ago(3), trend_delta=TrendDelta.UP, is_trending=True), None, NOW)
        self.assertFalse(s.has_user_entry)
        self.assertIsNone(s.user_state)
        self.assertTrue(s.is_new_release)
        self.assertEqual(s.trend_delta, TrendDelta.UP)
        self.assertTrue(s.is_trending)
        self.assertFalse(s.has_new_episode)

    def test_hit_signal_uses_mean(self):
        self.assertTrue(self.service.build_signals(movie(external_ratings=HIT_RATINGS), None, NOW).is_hit)

    def test_new_episode_only_for_shows(self):
        self.assertTrue(self.service.build_signals(show(last_air_date=ago(2)), None, NOW).has_new_episode)
        self.assertFalse(self.service.build_signals(show(last_air_date=ago(8)), None, NOW).has_new_episode)
        self.assertFalse(self.service.build_signals(movie(last_air_date=ago(2)), None, NOW).has_new_episode)

    def test_window_is_configurable(self):
        service = CardEnrichmentService(new_release_window_days=30, new_episode_days=10)
        self.assertTrue(service.build_signals(movie(release_date=ago(20)), None, NOW).is_new_release)
        self.assertTrue(service.build_signals(show(last_air_date=ago(9)), None, NOW).has_new_episode)

    def test_user_signals(self):
        state = UserStateSnapshot(media_id="10", state=UserMediaState.WATCHING, progress={"seasons": {"1": 10, "2": 4}})
        s = self.service.build_signals(show(), state, NOW)
        self.assertTrue(s.has_user_entry)
        self.assertEqual(s.user_state, UserMediaState.WATCHING)
        self.assertEqual(s.continue_point, ContinuePoint(2, 4))


class TestEnrichCatalogItems(unittest.TestCase):
    def setUp(self):
        self.service = CardEnrichmentService()

    def test_uses_batched_states_by_id(self):
        items = [movie("1"), movie("2"), movie("3", external_ratings=HIT_RATINGS)]
        states = {
            "2": UserStateSnapshot(media_id="2", state=UserMediaState.PLANNED),
        }
        out = self.service.enrich_catalog_items(items, ListContext.TRENDING_LIST, states, NOW)
        self.assertEqual([e.item.id for e in out], ["1", "2", "3"])
        self.assertEqual(out[0].card.badge_key, BadgeKey.TRENDING)
        self.assertEqual(out[0].card.primary_cta, PrimaryCta.SAVE)
        self.assertEqual(out[1].card.badge_key, BadgeKey.IN_WATCHLIST)
        self.assertEqual(out[1].card.primary_cta, PrimaryCta.OPEN)
        self.assertIs(out[1].user_state, states["2"])
        self.assertEqual(out[2].card.badge_key, BadgeKey.HIT)

    def test_no_states(self):
        out = self.service.enrich_catalog_items([movie()], ListContext.IN_THEATERS_LIST, None, NOW)
        self.assertEqual(out[0].card.badge_key, BadgeKey.IN_THEATERS)
        self.assertIsNone(out[0].user_state)

    def test_new_releases_context(self):
        out = self.service.enrich_catalog_items(
            [movie("1", digital_release_date=ago(2)), movie("2", release_date=ago(40))],
            ListContext.NEW_RELEASES_LIST,
            {},
            NOW,
        )
        self.assertEqual(out[0].card.badge_key, BadgeKey.NEW_RELEASE)
        self.assertIsNone(out[1].card.badge_key)

    def test_planned_with_progress_has_no_continue(self):
        state = UserStateSnapshot(media_id="10", state=UserMediaState.PLANNED, progress={"seasons": {"1": 2}})
        out = self.service.enrich_catalog_items([show()], ListContext.DEFAULT, {"10": state}, NOW)
        self.assertIsNone(out[0].card.continue_point)

    def test_idempotent(self):
        items = [movie("1", external_ratings=HIT_RATINGS, release_date=ago(1)), show(last_air_date=ago(1))]
        first = self.service.enrich_catalog_items(items, ListContext.DEFAULT, {}, NOW)
        second = self.service.enrich_catalog_items(items, ListContext.DEFAULT, {}, NOW)
        self.assertEqual(first, second)


class TestEnrichUserMedia(unittest.TestCase):
    def setUp(self):
        self.service = CardEnrichmentService()

    def test_continue_list(self):
        entries = [
            UserMediaEntry(
                user_state=UserStateSnapshot("10", UserMediaState.WATCHING, {"seasons": {"1": 3}}),
                item=show("10", last_air_date=ago(1), is_trending=True),
            ),
            UserMediaEntry(
                user_state=UserStateSnapshot("11", UserMediaState.WATCHING, {"seasons": {"2": 6}}),
                item=show("11", last_air_date=ago(40)),
            ),
            UserMediaEntry(
                user_state=UserStateSnapshot("1", UserMediaState.COMPLETED, None),
                item=movie("1", is_trending=True),
            ),
        ]
        out = self.service.enrich_user_media(entries, ListContext.CONTINUE_LIST, NOW)
        self.assertEqual(out[0].card.badge_key, BadgeKey.NEW_EPISODE)
        self.assertEqual(out[0].card.primary_cta, PrimaryCta.CONTINUE)
        self.assertEqual(out[1].card.badge_key, BadgeKey.CONTINUE)
        self.assertEqual(out[1].card.continue_point, ContinuePoint(2, 6))
        self.assertIsNone(out[2].card.badge_key)
        self.assertEqual(out[2].card.primary_cta, PrimaryCta.OPEN)

    def test_user_library_hides_watchlist_badge(self):
        entries = [UserMediaEntry(UserStateSnapshot("1", UserMediaState.PLANNED), movie("1"))]
        out = self.service.enrich_user_media(entries, ListContext.USER_LIBRARY, NOW)
        self.assertIsNone(out[0].card.badge_key)
        self.assertEqual(out[0].card.primary_cta, PrimaryCta.OPEN)


class TestDetails(unittest.TestCase):
    def setUp(self):
        self.service = CardEnrichmentService()

    def test_upcoming_movie(self):
        detail = self.service.enrich_movie_detail(movie(release_date=ago(-20), popularity=120.0), None, NOW)
        self.assertEqual(detail.release_status, ReleaseStatus.UPCOMING)
        self.assertEqual(detail.verdict.type, VerdictType.RELEASE)
        self.assertEqual(detail.verdict.message_key, MovieVerdictMessageKey.UPCOMING_HIT)
        self.assertIsNone(detail.consensus.value)

    def test_poor_movie(self):
        item = movie(external_ratings=ExternalRatings(imdb=ExternalRating(4.5, 500)), release_date=ago(400))
        detail = self.service.enrich_movie_detail(item, None, NOW)
        self.assertEqual(detail.release_status, ReleaseStatus.RELEASED)
        self.assertEqual(detail.verdict.type, VerdictType.WARNING)
        self.assertEqual(detail.verdict.message_key, MovieVerdictMessageKey.POOR_RATINGS)
        self.assertEqual(detail.consensus.total_votes, 500)

    def test_hit_movie_badge_feeds_verdict(self):
        detail = self.service.enrich_movie_detail(movie(external_ratings=HIT_RATINGS, release_date=ago(400)), None, NOW)
        self.assertEqual(detail.card.badge_key, BadgeKey.HIT)
        self.assertEqual(detail.verdict.message_key, MovieVerdictMessageKey.CRITICS_LOVED)

    def test_unrated_movie_in_theaters(self):
        detail = self.service.enrich_movie_detail(movie(theatrical_release_date=ago(20)), None, NOW)
        self.assertEqual(detail.release_status, ReleaseStatus.IN_THEATERS)
        self.assertEqual(detail.verdict.message_key, MovieVerdictMessageKey.JUST_RELEASED)

    def test_cancelled_show(self):
        item = show(status="Canceled", external_ratings=HIT_RATINGS, last_air_date=ago(2))
        state = UserStateSnapshot("10", UserMediaState.WATCHING, {"seasons": {"3": 1}})
        detail = self.service.enrich_show_detail(item, state, NOW)
        self.assertEqual(detail.verdict.verdict.type, VerdictType.WARNING)
        self.assertEqual(detail.verdict.verdict.message_key, ShowVerdictMessageKey.CANCELLED)
        self.assertIsNone(detail.verdict.status_hint)
        self.assertEqual(detail.card.badge_key, BadgeKey.NEW_EPISODE)
        self.assertIs(detail.user_state, state)

    def test_returning_show_new_season(self):
        item = show(
            status="Returning Series",
            external_ratings=ExternalRatings(imdb=ExternalRating(7.4, 800)),
            last_air_date=ago(10),
        )
        detail = self.service.enrich_show_detail(item, None, NOW)
        self.assertEqual(detail.verdict.verdict.message_key, ShowVerdictMessageKey.STRONG_RATINGS)
        self.assertEqual(detail.verdict.status_hint.message_key, ShowStatusHintKey.NEW_SEASON)


def test_media_summary():
    summary = movie("7", slug="movie-7", release_date=datetime(2026, 1, 2)).summary()
    assert summary == {
        "id": "7",
        "type": "movie",
        "title": "Movie 7",
        "slug": "movie-7",
        "poster": None,
        "releaseDate": "2026-01-02T00:00:00+00:00",
    }
    assert movie("8").summary()["releaseDate"] is None
