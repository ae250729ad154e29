import unittest

from catalog.services.rating_aggregator import (
    ConsensusRating,
    ExternalRating,
    ExternalRatings,
    RatingSource,
    aggregate_ratings,
    format_rating_context,
)


def ratings(imdb=None, trakt=None, tmdb=None):
    def _r(pair):
        if pair is None:
            return None
        return ExternalRating(rating=pair[0], vote_count=pair[1])
    return ExternalRatings(imdb=_r(imdb), trakt=_r(trakt), tmdb=_r(tmdb))


class TestAggregateRatings(unittest.TestCase):
    def test_no_sources_is_empty_consensus(self):
        c = aggregate_ratings(ratings())
        self.assertIsNone(c.value)
        self.assertEqual(c.spread, 0)
        self.assertEqual(c.source_count, 0)
        self.assertEqual(c.total_votes, 0)
        self.assertIsNone(c.best_source)
        self.assertFalse(c.has_any_rating)

    def test_none_input(self):
        self.assertEqual(aggregate_ratings(None), ConsensusRating())

    def test_two_sources_median_is_mean_of_middle(self):
        c = aggregate_ratings(ratings(imdb=(6.0, 100), tmdb=(8.0, 50)))
        self.assertEqual(c.value, 7.0)
        self.assertEqual(c.spread, 2.0)
        self.assertEqual(c.source_count, 2)
        self.assertEqual(c.total_votes, 150)

    def test_three_sources_median(self):
        c = aggregate_ratings(ratings(imdb=(8.0, 10), trakt=(6.0, 10), tmdb=(7.0, 10)))
        self.assertEqual(c.value, 7.0)
        self.assertEqual(c.spread, 2.0)

    def test_zero_rating_counts_as_absent(self):
        c = aggregate_ratings(ratings(imdb=(0, 5000), trakt=(7.2, 300)))
        self.assertEqual(c.source_count, 1)
        self.assertEqual(c.value, 7.2)
        self.assertEqual(c.total_votes, 300)
        self.assertEqual(c.best_source, RatingSource.TRAKT)

    def test_missing_vote_count_is_zero(self):
        c = aggregate_ratings(ratings(imdb=(7.0, None)))
        self.assertEqual(c.total_votes, 0)
        self.assertEqual(c.best_source, RatingSource.IMDB)

    def test_best_source_most_votes(self):
        c = aggregate_ratings(ratings(imdb=(7.0, 100), trakt=(7.5, 900), tmdb=(6.9, 300)))
        self.assertEqual(c.best_source, RatingSource.TRAKT)

    def test_best_source_tie_keeps_source_order(self):
        c = aggregate_ratings(ratings(trakt=(7.0, 500), tmdb=(7.5, 500)))
        self.assertEqual(c.best_source, RatingSource.TRAKT)
        c = aggregate_ratings(ratings(imdb=(7.0, 500), trakt=(7.5, 500)))
        self.assertEqual(c.best_source, RatingSource.IMDB)

    def test_spread_is_rounded(self):
        c = aggregate_ratings(ratings(imdb=(7.3, 600), tmdb=(6.3, 600)))
        self.assertEqual(c.spread, 1.0)

    def test_to_dict_uses_client_keys(self):
        c = aggregate_ratings(ratings(imdb=(7.0, 100)))
        self.assertEqual(
            c.to_dict(),
            {"value": 7.0, "spread": 0.0, "totalVotes": 100, "sourceCount": 1, "bestSource": "IMDb"},
        )


class TestUnusableRatings(unittest.TestCase):
    def test_non_finite_ratings_are_absent(self):
        for bad in (float("nan"), float("inf"), float("-inf")):
            c = aggregate_ratings(ratings(imdb=(bad, 500), tmdb=(7.0, 100)))
            self.assertEqual(c.source_count, 1)
            self.assertEqual(c.value, 7.0)
            self.assertEqual(c.total_votes, 100)
            self.assertEqual(c.best_source, RatingSource.TMDB)

    def test_out_of_scale_ratings_are_absent(self):
        c = aggregate_ratings(ratings(imdb=(-3.0, 500), trakt=(11.0, 500), tmdb=(10.0, 20)))
        self.assertEqual(c.source_count, 1)
        self.assertEqual(c.value, 10.0)

    def test_only_nan_is_empty_consensus(self):
        c = aggregate_ratings(ratings(imdb=(float("nan"), 500)))
        self.assertEqual(c, ConsensusRating())

    def test_bad_vote_counts_count_as_zero(self):
        c = aggregate_ratings(ratings(imdb=(7.0, float("nan")), trakt=(8.0, -5), tmdb=(6.0, 40)))
        self.assertEqual(c.total_votes, 40)
        self.assertEqual(c.best_source, RatingSource.TMDB)


def test_format_rating_context():
    assert format_rating_context(7.46) == "IMDb: 7.5"
    assert format_rating_context(6.0, RatingSource.TMDB) == "TMDB: 6.0"
    assert format_rating_context(None) is None
    assert format_rating_context(8.2, None) == "IMDb: 8.2"


if __name__ == "__main__":
    unittest.main()
