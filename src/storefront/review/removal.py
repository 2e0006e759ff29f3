"""Remove a review.

Only the author can remove their review. Removing a review that does not
exist, or belongs to someone else, changes nothing.
"""

from protean import Q, current_domain, handle
from protean.fields import Identifier

from storefront.domain import logger, storefront
from storefront.review.rating import refresh_product_rating
from storefront.review.review import Review
from storefront.shared.identity import require_user


@storefront.command(part_of="Review")
class RemoveReview:
    user_id = Identifier(required=True)
    review_id = Identifier(required=True)


@storefront.command_handler(part_of=Review)
class RemoveReviewHandler:
    @handle(RemoveReview)
    def remove_review(self, command):
        user_id = require_user(command.user_id)
        repo = current_domain.repository_for(Review)

        review = repo.by_author(command.review_id, user_id)
        if review is None:
            return False

        repo._dao._delete_all(Q(id=review.id, user_id=user_id))
        refresh_product_rating(review.product_id)

        logger.info("review_removed", review_id=command.review_id, product_id=review.product_id, user_id=user_id)
        return True
