"""Pydantic request/response schemas for the Storefront API.

These are external contracts, kept separate from the aggregates they are
read from.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Catalogue requests
# ---------------------------------------------------------------------------
class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Classic Black T-Shirt",
                    "description": "Premium cotton crew-neck tee in black.",
                    "price": "20.00",
                    "stock_quantity": 25,
                    "category": "apparel",
                    "featured": True,
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    price: Decimal
    description: str | None = None
    stock_quantity: int = 0
    category: str | None = Field(None, max_length=100)
    category_id: str | None = None
    featured: bool = False
    image_url: str | None = Field(None, max_length=500)


class UpdateProductRequest(BaseModel):
    """Partial update: only the fields present in the body are applied."""

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "price": "18.50",
                    "stock_quantity": 40,
                }
            ]
        }
    }

    name: str | None = Field(None, max_length=255)
    price: Decimal | None = None
    description: str | None = None
    stock_quantity: int | None = None
    category: str | None = Field(None, max_length=100)
    category_id: str | None = None
    featured: bool | None = None
    image_url: str | None = Field(None, max_length=500)


class CreateCategoryRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Apparel",
                    "slug": "apparel",
                    "description": "Clothing and accessories",
                }
            ]
        }
    }

    name: str = Field(..., max_length=100)
    slug: str = Field(..., max_length=100)
    description: str | None = None
    image_url: str | None = Field(None, max_length=500)
    parent_id: str | None = None


# ---------------------------------------------------------------------------
# Catalogue responses
# ---------------------------------------------------------------------------
class ProductSummary(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    name: str
    price: Decimal
    image_url: str | None = None
    in_stock: bool


class ProductResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    name: str
    description: str | None = None
    price: Decimal
    stock_quantity: int
    in_stock: bool
    category: str | None = None
    category_id: str | None = None
    featured: bool
    image_url: str | None = None
    rating: float
    review_count: int
    created_at: datetime | None = None


class CategoryResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    name: str
    slug: str
    description: str | None = None
    image_url: str | None = None
    parent_id: str | None = None


# ---------------------------------------------------------------------------
# Cart and wishlist
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = 1


class UpdateCartQuantityRequest(BaseModel):
    quantity: int


class CartLineResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    product_id: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal
    product: ProductSummary


class CartResponse(BaseModel):
    lines: list[CartLineResponse]
    item_count: int
    subtotal: Decimal
    tax: Decimal
    shipping: Decimal
    total: Decimal


class WishlistRequest(BaseModel):
    product_id: str


class MoveToCartRequest(BaseModel):
    quantity: int = 1


class WishlistEntryResponse(BaseModel):
    model_config = {"from_attributes": True}

    product_id: str
    added_at: datetime
    product: ProductSummary


class WishlistStatusResponse(BaseModel):
    product_id: str
    in_wishlist: bool


# ---------------------------------------------------------------------------
# Orders and checkout
# ---------------------------------------------------------------------------
class CheckoutRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"shipping_address": "221B Baker Street, London NW1 6XE"}]
        }
    }

    shipping_address: str = Field(..., max_length=1000)


class UpdateOrderStatusRequest(BaseModel):
    status: str


class OrderLineResponse(BaseModel):
    model_config = {"from_attributes": True}

    product_id: str
    product_name: str | None = None
    quantity: int
    price: Decimal
    line_total: Decimal


class OrderResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    user_id: str
    status: str
    subtotal: Decimal
    tax_amount: Decimal
    shipping_fee: Decimal
    total_amount: Decimal
    shipping_address: str
    payment_reference: str | None = None
    created_at: datetime
    lines: list[OrderLineResponse] = Field(validation_alias="ordered_lines")


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------
class SubmitReviewRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"rating": 5, "comment": "Fits perfectly and washes well."}]
        }
    }

    rating: int
    comment: str | None = Field(None, max_length=5000)


class ReviewResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    product_id: str
    user_id: str
    rating: int
    comment: str | None = None
    created_at: datetime


class RatingSummaryResponse(BaseModel):
    product_id: str
    average_rating: float
    total_reviews: int
    rating_distribution: dict[str, int]


class StatusResponse(BaseModel):
    status: str = "ok"
