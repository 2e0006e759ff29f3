"""FastAPI endpoints for checkout and order history."""

from fastapi import APIRouter, Depends
from protean import current_domain

from storefront.api.cart import cart_response
from storefront.api.dependencies import current_user
from storefront.api.schemas import CartResponse, CheckoutRequest, OrderResponse
from storefront.cart.items import cart_totals
from storefront.checkout.checkout import Checkout
from storefront.order.management import get_order, list_orders, status_counts
from storefront.pricing.pricing import PricingContext

checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])
order_router = APIRouter(prefix="/orders", tags=["orders"])


@checkout_router.get("", response_model=CartResponse)
async def checkout_summary(user_id: str = Depends(current_user)):
    """Cart priced with shipping, as it will be charged."""
    return cart_response(cart_totals(user_id, PricingContext.CHECKOUT))


@checkout_router.post("", status_code=201, response_model=OrderResponse)
async def place_checkout(body: CheckoutRequest, user_id: str = Depends(current_user)):
    command = Checkout(user_id=user_id, shipping_address=body.shipping_address)
    order_id = current_domain.process(command, asynchronous=False)
    return get_order(order_id, user_id=user_id)


@order_router.get("", response_model=list[OrderResponse])
async def order_history(status: str | None = None, user_id: str = Depends(current_user)):
    return list_orders(user_id, status)


@order_router.get("/status-counts", response_model=dict[str, int])
async def order_status_counts(user_id: str = Depends(current_user)):
    return status_counts(user_id)


@order_router.get("/{order_id}", response_model=OrderResponse)
async def order_detail(order_id: str, user_id: str = Depends(current_user)):
    return get_order(order_id, user_id=user_id)
