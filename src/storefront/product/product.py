"""Product aggregate: the catalogue entry every other part of the store reads.

``rating`` and ``review_count`` are owned by the reviews: they are recomputed
from the product's reviews whenever a review is submitted or removed, and
are not editable through catalogue administration.
"""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text
from protean.fields import Decimal as DecimalField

from storefront.domain import storefront
from storefront.shared.clock import utcnow
from storefront.shared.errors import OutOfStock
from storefront.shared.money import round2, to_decimal

MAX_RATING = 5.0

# Fields an administrator may edit; rating and review_count follow the reviews.
EDITABLE_FIELDS = frozenset(
    {
        "name",
        "description",
        "price",
        "stock_quantity",
        "category",
        "category_id",
        "featured",
        "image_url",
    }
)

# Editable fields that cannot be cleared.
NON_NULLABLE_FIELDS = frozenset({"name", "price", "stock_quantity", "featured"})


def clean_name(value):
    if value is None or not str(value).strip():
        raise ValidationError({"name": ["Product name is required"]})
    return str(value).strip()


def clean_price(value):
    if value is None:
        raise ValidationError({"price": ["Price is required"]})
    price = to_decimal(value, field="price")
    if not price.is_finite() or price < 0:
        raise ValidationError({"price": ["Price must be a non-negative number"]})
    return round2(price)


def clean_stock_quantity(value):
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValidationError({"stock_quantity": ["Stock quantity must be a non-negative whole number"]})
    return value


_CLEANERS = {
    "name": clean_name,
    "price": clean_price,
    "stock_quantity": clean_stock_quantity,
}


@storefront.aggregate
class Product:
    name: String(required=True, max_length=255)
    description: Text()
    price: DecimalField(required=True, min_value=0, precision=10, scale=2)
    stock_quantity: Integer(default=0, min_value=0)
    category: String(max_length=100)
    category_id: Identifier()
    featured: Boolean(default=False)
    image_url: String(max_length=500)
    rating: Float(default=0.0, min_value=0.0, max_value=MAX_RATING)
    review_count: Integer(default=0, min_value=0)
    created_at: DateTime(default=utcnow)
    updated_at: DateTime(default=utcnow)

    @invariant.post
    def name_must_not_be_blank(self):
        if not (self.name or "").strip():
            raise ValidationError({"name": ["Product name is required"]})

    @classmethod
    def create(
        cls,
        name,
        price,
        description=None,
        stock_quantity=0,
        category=None,
        category_id=None,
        featured=False,
        image_url=None,
    ):
        return cls(
            name=clean_name(name),
            price=clean_price(price),
            description=description,
            stock_quantity=clean_stock_quantity(stock_quantity if stock_quantity is not None else 0),
            category=category,
            category_id=category_id,
            featured=bool(featured),
            image_url=image_url,
            rating=0.0,
            review_count=0,
        )

    def update_details(self, **changes):
        """Apply a partial update of editable fields.

        Unknown or read-only fields are rejected, and so is ``None`` for a
        field that cannot be cleared.
        """
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError({field: ["Field cannot be edited"] for field in sorted(unknown)})

        cleared = {field for field, value in changes.items() if value is None and field in NON_NULLABLE_FIELDS}
        if cleared:
            raise ValidationError({field: ["Field cannot be null"] for field in sorted(cleared)})

        for field, value in changes.items():
            cleaner = _CLEANERS.get(field)
            setattr(self, field, cleaner(value) if cleaner else value)
        self.updated_at = utcnow()

    def record_rating(self, average, count):
        """Store the rating recomputed from this product's reviews."""
        self.rating = float(average) if count else 0.0
        self.review_count = count
        self.updated_at = utcnow()

    @property
    def in_stock(self):
        return self.stock_quantity > 0

    def ensure_in_stock(self):
        if not self.in_stock:
            raise OutOfStock(f"Product {self.id} is out of stock")
