"""FastAPI endpoints for browsing the catalogue."""

from decimal import Decimal

from fastapi import APIRouter

from storefront.api.schemas import CategoryResponse, ProductResponse
from storefront.category.management import get_category, list_categories
from storefront.product.queries import (
    ProductFilter,
    category_names,
    featured_products,
    get_product,
    newest_products,
    popular_products,
    query_products,
    related_products,
)

product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])


# --- Product endpoints ---


@product_router.get("", response_model=list[ProductResponse])
async def list_products(
    search: str | None = None,
    category: str | None = None,
    min_price: Decimal | None = None,
    max_price: Decimal | None = None,
    min_rating: float | None = None,
    sort: str = "relevance",
):
    product_filter = ProductFilter(
        search=search,
        category=category,
        min_price=min_price,
        max_price=max_price,
        min_rating=min_rating,
        sort=sort,
    )
    return query_products(product_filter)


@product_router.get("/featured", response_model=list[ProductResponse])
async def list_featured(limit: int = 8):
    return featured_products(limit)


@product_router.get("/newest", response_model=list[ProductResponse])
async def list_newest(limit: int = 6):
    return newest_products(limit)


@product_router.get("/popular", response_model=list[ProductResponse])
async def list_popular(limit: int = 4):
    return popular_products(limit)


@product_router.get("/category-names", response_model=list[str])
async def list_category_names():
    return category_names()


@product_router.get("/{product_id}", response_model=ProductResponse)
async def product_detail(product_id: str):
    return get_product(product_id)


@product_router.get("/{product_id}/related", response_model=list[ProductResponse])
async def list_related(product_id: str, limit: int = 4):
    return related_products(product_id, limit)


# --- Category endpoints ---


@category_router.get("", response_model=list[CategoryResponse])
async def categories(limit: int | None = None):
    return list_categories(limit)


@category_router.get("/{slug}", response_model=CategoryResponse)
async def category_detail(slug: str):
    return get_category(slug)
