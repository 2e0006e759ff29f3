"""Product rating kept in step with the reviews, and the read side of reviews."""

from protean import current_domain

from storefront.domain import logger
from storefront.product.product import Product
from storefront.product.queries import get_product
from storefront.review.review import Review


def _average(star_counts):
    total = sum(star_counts.values())
    if not total:
        return 0.0, 0
    weighted = sum(star * count for star, count in star_counts.items())
    return round(weighted / total, 2), total


def refresh_product_rating(product_id):
    """Recompute ``rating`` and ``review_count`` of a product from its reviews.

    Runs inside the caller's unit of work. A concurrent recompute of the same
    product loses on the product's version and surfaces as a conflict.
    """
    average, count = _average(current_domain.repository_for(Review).star_counts(product_id))

    product = get_product(product_id)
    product.record_rating(average, count)
    current_domain.repository_for(Product).add(product)

    logger.debug("product_rating_refreshed", product_id=product_id, rating=average, review_count=count)
    return product


def rating_summary(product_id):
    """Average, count and per-star distribution of a product's reviews."""
    get_product(product_id)
    star_counts = current_domain.repository_for(Review).star_counts(product_id)
    average, count = _average(star_counts)
    return {
        "product_id": product_id,
        "average_rating": average,
        "total_reviews": count,
        "rating_distribution": {str(star): star_counts[star] for star in sorted(star_counts)},
    }


def list_reviews(product_id):
    """Reviews of a product, newest first."""
    return current_domain.repository_for(Review).for_product(product_id)
