"""Tests for submitting and removing reviews and the product rating they drive."""

import pytest
from protean import current_domain
from protean.exceptions import ValidationError
from storefront.product.queries import get_product
from storefront.review.rating import list_reviews, rating_summary
from storefront.review.removal import RemoveReview
from storefront.review.submission import SubmitReview
from storefront.shared.errors import ConflictError, NotFound


def _submit(product_id, user_id="alice", rating=5, comment=None):
    return current_domain.process(
        SubmitReview(user_id=user_id, product_id=product_id, rating=rating, comment=comment),
        asynchronous=False,
    )


def _remove(review_id, user_id="alice"):
    return current_domain.process(RemoveReview(user_id=user_id, review_id=review_id), asynchronous=False)


class TestSubmitReview:
    def test_updates_product_rating(self, make_product):
        product = make_product()

        _submit(product.id, "alice", 5)
        _submit(product.id, "bob", 2)

        refreshed = get_product(product.id)
        assert refreshed.rating == 3.5
        assert refreshed.review_count == 2

    def test_one_review_per_user_and_product(self, make_product):
        product = make_product()
        _submit(product.id, "alice", 5)

        with pytest.raises(ConflictError):
            _submit(product.id, "alice", 1)

        assert len(list_reviews(product.id)) == 1
        assert get_product(product.id).rating == 5.0

    def test_unknown_product(self):
        with pytest.raises(NotFound):
            _submit("missing")

    def test_invalid_rating(self, make_product):
        product = make_product()
        with pytest.raises(ValidationError):
            _submit(product.id, rating=0)
        assert get_product(product.id).review_count == 0

    def test_newest_first(self, make_product):
        product = make_product()
        first = _submit(product.id, "alice")
        second = _submit(product.id, "bob")

        assert [review.id for review in list_reviews(product.id)] == [second, first]


class TestRemoveReview:
    def test_author_removes_and_rating_is_recomputed(self, make_product):
        product = make_product()
        review_id = _submit(product.id, "alice", 5)
        _submit(product.id, "bob", 1)

        assert _remove(review_id, "alice") is True

        refreshed = get_product(product.id)
        assert refreshed.rating == 1.0
        assert refreshed.review_count == 1

    def test_last_review_resets_rating(self, make_product):
        product = make_product()
        review_id = _submit(product.id)

        _remove(review_id)

        refreshed = get_product(product.id)
        assert refreshed.rating == 0.0
        assert refreshed.review_count == 0

    def test_someone_elses_review_is_untouched(self, make_product):
        product = make_product()
        review_id = _submit(product.id, "alice")

        assert _remove(review_id, "bob") is False
        assert len(list_reviews(product.id)) == 1

    def test_missing_review(self):
        assert _remove("missing") is False

    def test_author_may_review_again_after_removal(self, make_product):
        product = make_product()
        _remove(_submit(product.id, "alice", 2))

        _submit(product.id, "alice", 4)

        assert get_product(product.id).rating == 4.0


class TestRatingSummary:
    def test_distribution_includes_every_star(self, make_product):
        product = make_product()
        _submit(product.id, "alice", 5)
        _submit(product.id, "bob", 4)
        _submit(product.id, "carol", 4)

        summary = rating_summary(product.id)

        assert summary["average_rating"] == 4.33
        assert summary["total_reviews"] == 3
        assert summary["rating_distribution"] == {"1": 0, "2": 0, "3": 0, "4": 2, "5": 1}

    def test_no_reviews(self, make_product):
        product = make_product()
        summary = rating_summary(product.id)
        assert summary["average_rating"] == 0.0
        assert summary["total_reviews"] == 0

    def test_unknown_product(self):
        with pytest.raises(NotFound):
            rating_summary("missing")
