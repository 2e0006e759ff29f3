"""Review aggregate: one rating per customer per product."""

from uuid import uuid4

from protean import Index
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, Integer, Text

from storefront.domain import storefront
from storefront.shared.clock import utcnow
from storefront.utils.db import dialect_insert

MIN_RATING = 1
MAX_RATING = 5


def clean_rating(value):
    if isinstance(value, bool) or not isinstance(value, int) or not MIN_RATING <= value <= MAX_RATING:
        raise ValidationError({"rating": [f"Rating must be a whole number from {MIN_RATING} to {MAX_RATING}"]})
    return value


def clean_comment(value):
    if value is None:
        return None
    return str(value).strip() or None


@storefront.aggregate(indexes=[Index("user_id", "product_id", unique=True)])
class Review:
    product_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True, min_value=MIN_RATING, max_value=MAX_RATING)
    comment = Text()
    created_at = DateTime(default=utcnow)

    @classmethod
    def write(cls, user_id, product_id, rating, comment=None):
        return cls(
            user_id=user_id,
            product_id=product_id,
            rating=clean_rating(rating),
            comment=clean_comment(comment),
        )


@storefront.repository(part_of=Review)
class ReviewRepository:
    def add_unless_reviewed(self, review):
        """Insert ``review`` unless its author already reviewed the product.

        Returns ``True`` when the review was written.
        """
        dao = self._dao
        table = dao.database_model_cls.__table__
        session = dao._get_session()

        stmt = (
            dialect_insert(session, table)
            .values(
                id=str(review.id or uuid4()),
                product_id=review.product_id,
                user_id=review.user_id,
                rating=review.rating,
                comment=review.comment,
                created_at=review.created_at or utcnow(),
                _version=0,
            )
            .on_conflict_do_nothing(index_elements=["user_id", "product_id"])
        )
        return session.execute(stmt).rowcount > 0

    def by_author(self, review_id, user_id):
        return self.query.filter(id=review_id, user_id=user_id).first

    def for_product(self, product_id):
        """Newest first."""
        return self.query.filter(product_id=product_id).order_by("-created_at").limit(None).all().items

    def star_counts(self, product_id):
        """Number of reviews per star, every star from one to five included."""
        return {
            star: self.query.filter(product_id=product_id, rating=star).count()
            for star in range(MIN_RATING, MAX_RATING + 1)
        }
