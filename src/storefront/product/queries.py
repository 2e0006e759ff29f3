"""Catalogue read side: product filtering, sorting and storefront listings.

Search is a case-insensitive "contains" on name or description, bounds are
inclusive, and no pagination is applied. Every sort ends with the creation
time so ties keep catalogue insertion order.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from protean import Q, current_domain
from protean.exceptions import ValidationError

from storefront.product.product import Product
from storefront.shared.errors import NotFound
from storefront.shared.money import to_decimal


class SortKey(Enum):
    RELEVANCE = "relevance"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    RATING_DESC = "rating-desc"
    NEWEST = "newest"

    @classmethod
    def parse(cls, value):
        """Unknown or missing keys fall back to relevance (name order)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.RELEVANCE


_ORDERINGS = {
    SortKey.RELEVANCE: ["name", "created_at"],
    SortKey.PRICE_ASC: ["price", "created_at"],
    SortKey.PRICE_DESC: ["-price", "created_at"],
    SortKey.RATING_DESC: ["-rating", "created_at"],
    SortKey.NEWEST: ["-created_at"],
}


@dataclass(frozen=True)
class ProductFilter:
    search: str | None = None
    category: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    min_rating: float | None = None
    sort: str | SortKey = SortKey.RELEVANCE

    def __post_init__(self):
        if self.min_price is not None:
            object.__setattr__(self, "min_price", to_decimal(self.min_price, field="min_price"))
        if self.max_price is not None:
            object.__setattr__(self, "max_price", to_decimal(self.max_price, field="max_price"))
        if self.min_rating is not None:
            try:
                object.__setattr__(self, "min_rating", float(self.min_rating))
            except (TypeError, ValueError):
                raise ValidationError({"min_rating": ["min_rating must be a number"]}) from None
        object.__setattr__(self, "sort", SortKey.parse(self.sort))


def _products():
    return current_domain.repository_for(Product).query


def build_query(product_filter):
    query = _products()

    search = (product_filter.search or "").strip()
    if search:
        query = query.filter(Q(name__icontains=search) | Q(description__icontains=search))

    if product_filter.category:
        category = str(product_filter.category)
        query = query.filter(Q(category=category) | Q(category_id=category))

    if product_filter.min_price is not None:
        query = query.filter(price__gte=product_filter.min_price)
    if product_filter.max_price is not None:
        query = query.filter(price__lte=product_filter.max_price)
    if product_filter.min_rating is not None:
        query = query.filter(rating__gte=product_filter.min_rating)

    return query.order_by(_ORDERINGS[product_filter.sort]).limit(None)


def query_products(product_filter=None):
    """Return every product matching ``product_filter``, sorted."""
    return build_query(product_filter or ProductFilter()).all().items


def get_product(product_id):
    product = current_domain.repository_for(Product).get_or_none(product_id)
    if product is None:
        raise NotFound(f"Product {product_id} not found")
    return product


def products_by_id(product_ids):
    """Live products for ``product_ids``, keyed by id; missing ids are left out."""
    product_ids = list(dict.fromkeys(product_ids))
    if not product_ids:
        return {}
    products = _products().filter(id__in=product_ids).limit(None).all().items
    return {product.id: product for product in products}


def featured_products(limit=8):
    return _products().filter(featured=True).order_by(["-rating", "created_at"]).limit(limit).all().items


def newest_products(limit=6):
    return _products().order_by(_ORDERINGS[SortKey.NEWEST]).limit(limit).all().items


def popular_products(limit=4):
    return _products().order_by(["-review_count", "created_at"]).limit(limit).all().items


def related_products(product_id, limit=4):
    """Other products from the same category."""
    product = get_product(product_id)

    if product.category_id:
        query = _products().filter(category_id=product.category_id)
    elif product.category:
        query = _products().filter(category=product.category)
    else:
        return []

    return query.exclude(id=product.id).order_by("created_at").limit(limit).all().items


def category_names():
    """Distinct category slugs in use, alphabetically."""
    products = _products().filter(category__isnull=False).limit(None).all().items
    return sorted({product.category for product in products})
