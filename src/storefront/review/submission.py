"""Submit a product review.

One review per customer per product, enforced by the unique index on
(user, product). The product's rating and review count are recomputed in
the same unit of work as the insert.
"""

from protean import current_domain, handle
from protean.fields import Identifier, Integer, Text

from storefront.domain import logger, storefront
from storefront.product.queries import get_product
from storefront.review.rating import refresh_product_rating
from storefront.review.review import Review
from storefront.shared.errors import ConflictError
from storefront.shared.identity import require_user


@storefront.command(part_of="Review")
class SubmitReview:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    rating = Integer(required=True)
    comment = Text()


@storefront.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        user_id = require_user(command.user_id)
        review = Review.write(user_id, command.product_id, command.rating, command.comment)
        get_product(command.product_id)

        if not current_domain.repository_for(Review).add_unless_reviewed(review):
            raise ConflictError("You have already reviewed this product")

        product = refresh_product_rating(command.product_id)

        logger.info(
            "review_submitted",
            review_id=str(review.id),
            product_id=command.product_id,
            user_id=user_id,
            rating=review.rating,
            product_rating=product.rating,
        )
        return str(review.id)
