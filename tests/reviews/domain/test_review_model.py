"""Tests for the Review aggregate and its field rules."""

import pytest
from protean.exceptions import ValidationError
from storefront.review.review import Review, clean_comment, clean_rating


class TestRating:
    @pytest.mark.parametrize("rating", [1, 3, 5])
    def test_whole_stars_in_range(self, rating):
        assert clean_rating(rating) == rating

    @pytest.mark.parametrize("rating", [0, 6, -1, 4.5, "4", True])
    def test_everything_else_rejected(self, rating):
        with pytest.raises(ValidationError) as exc_info:
            clean_rating(rating)
        assert "rating" in exc_info.value.messages


class TestComment:
    def test_trimmed(self):
        assert clean_comment("  Great fit  ") == "Great fit"

    @pytest.mark.parametrize("comment", [None, "", "   "])
    def test_blank_becomes_none(self, comment):
        assert clean_comment(comment) is None


class TestWrite:
    def test_builds_review(self):
        review = Review.write("alice", "p1", 4, " Solid ")

        assert review.user_id == "alice"
        assert review.product_id == "p1"
        assert review.rating == 4
        assert review.comment == "Solid"
        assert review.created_at is not None

    def test_invalid_rating(self):
        with pytest.raises(ValidationError):
            Review.write("alice", "p1", 7)
