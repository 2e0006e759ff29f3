"""FastAPI endpoints for store administration. Every route needs the admin key."""

from fastapi import APIRouter, Depends
from protean import current_domain

from storefront.api.dependencies import require_admin
from storefront.api.schemas import (
    CategoryResponse,
    CreateCategoryRequest,
    CreateProductRequest,
    OrderResponse,
    ProductResponse,
    StatusResponse,
    UpdateOrderStatusRequest,
    UpdateProductRequest,
)
from storefront.category.management import CreateCategory, DeleteCategory, get_category
from storefront.order.management import UpdateOrderStatus, get_order, list_all_orders
from storefront.product.management import CreateProduct, DeleteProduct, UpdateProduct
from storefront.product.queries import get_product

admin_router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


# --- Products ---


@admin_router.post("/products", status_code=201, response_model=ProductResponse)
async def create_product(body: CreateProductRequest):
    command = CreateProduct(
        name=body.name,
        price=body.price,
        description=body.description,
        stock_quantity=body.stock_quantity,
        category=body.category,
        category_id=body.category_id,
        featured=body.featured,
        image_url=body.image_url,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return get_product(product_id)


@admin_router.patch("/products/{product_id}", response_model=ProductResponse)
async def update_product(product_id: str, body: UpdateProductRequest):
    command = UpdateProduct(
        product_id=product_id,
        changes=body.model_dump(exclude_unset=True, mode="json"),
    )
    current_domain.process(command, asynchronous=False)
    return get_product(product_id)


@admin_router.delete("/products/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str):
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


# --- Categories ---


@admin_router.post("/categories", status_code=201, response_model=CategoryResponse)
async def create_category(body: CreateCategoryRequest):
    command = CreateCategory(
        name=body.name,
        slug=body.slug,
        description=body.description,
        image_url=body.image_url,
        parent_id=body.parent_id,
    )
    current_domain.process(command, asynchronous=False)
    return get_category(body.slug)


@admin_router.delete("/categories/{category_id}", response_model=StatusResponse)
async def delete_category(category_id: str):
    current_domain.process(DeleteCategory(category_id=category_id), asynchronous=False)
    return StatusResponse()


# --- Orders ---


@admin_router.get("/orders", response_model=list[OrderResponse])
async def list_orders(status: str | None = None):
    return list_all_orders(status)


@admin_router.patch("/orders/{order_id}/status", response_model=OrderResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest):
    current_domain.process(UpdateOrderStatus(order_id=order_id, status=body.status), asynchronous=False)
    return get_order(order_id)
