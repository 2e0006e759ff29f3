"""FastAPI endpoints for the cart and the wishlist.

Every route acts on behalf of the user in the ``X-User-Id`` header.
"""

from fastapi import APIRouter, Depends
from protean import current_domain

from storefront.api.dependencies import current_user
from storefront.api.schemas import (
    AddToCartRequest,
    CartLineResponse,
    CartResponse,
    MoveToCartRequest,
    StatusResponse,
    UpdateCartQuantityRequest,
    WishlistEntryResponse,
    WishlistRequest,
    WishlistStatusResponse,
)
from storefront.cart.items import (
    AddToCart,
    ClearCart,
    RemoveFromCart,
    UpdateCartQuantity,
    cart_item,
    cart_totals,
)
from storefront.wishlist.management import (
    AddToWishlist,
    MoveToCart,
    RemoveFromWishlist,
    get_wishlist,
    is_in_wishlist,
)

cart_router = APIRouter(prefix="/cart", tags=["cart"])
wishlist_router = APIRouter(prefix="/wishlist", tags=["wishlist"])


def cart_response(totals):
    return CartResponse(
        lines=[CartLineResponse.model_validate(item) for item in totals.items],
        item_count=totals.item_count,
        **totals.breakdown.as_dict(),
    )


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
@cart_router.get("", response_model=CartResponse)
async def view_cart(user_id: str = Depends(current_user)):
    return cart_response(cart_totals(user_id))


@cart_router.post("/items", status_code=201, response_model=CartLineResponse)
async def add_cart_item(body: AddToCartRequest, user_id: str = Depends(current_user)):
    command = AddToCart(user_id=user_id, product_id=body.product_id, quantity=body.quantity)
    line_id = current_domain.process(command, asynchronous=False)
    return cart_item(user_id, line_id)


@cart_router.patch("/items/{line_id}", response_model=CartResponse)
async def update_cart_item(line_id: str, body: UpdateCartQuantityRequest, user_id: str = Depends(current_user)):
    command = UpdateCartQuantity(user_id=user_id, line_id=line_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return cart_response(cart_totals(user_id))


@cart_router.delete("/items/{line_id}", response_model=CartResponse)
async def remove_cart_item(line_id: str, user_id: str = Depends(current_user)):
    current_domain.process(RemoveFromCart(user_id=user_id, line_id=line_id), asynchronous=False)
    return cart_response(cart_totals(user_id))


@cart_router.delete("", response_model=StatusResponse)
async def clear_cart(user_id: str = Depends(current_user)):
    current_domain.process(ClearCart(user_id=user_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Wishlist
# ---------------------------------------------------------------------------
@wishlist_router.get("", response_model=list[WishlistEntryResponse])
async def view_wishlist(user_id: str = Depends(current_user)):
    return get_wishlist(user_id)


@wishlist_router.post("", status_code=201, response_model=WishlistStatusResponse)
async def add_wishlist_item(body: WishlistRequest, user_id: str = Depends(current_user)):
    current_domain.process(AddToWishlist(user_id=user_id, product_id=body.product_id), asynchronous=False)
    return WishlistStatusResponse(product_id=body.product_id, in_wishlist=True)


@wishlist_router.get("/{product_id}", response_model=WishlistStatusResponse)
async def wishlist_status(product_id: str, user_id: str = Depends(current_user)):
    return WishlistStatusResponse(product_id=product_id, in_wishlist=is_in_wishlist(user_id, product_id))


@wishlist_router.delete("/{product_id}", response_model=WishlistStatusResponse)
async def remove_wishlist_item(product_id: str, user_id: str = Depends(current_user)):
    current_domain.process(RemoveFromWishlist(user_id=user_id, product_id=product_id), asynchronous=False)
    return WishlistStatusResponse(product_id=product_id, in_wishlist=False)


@wishlist_router.post("/{product_id}/move-to-cart", response_model=CartLineResponse)
async def move_wishlist_item(
    product_id: str,
    body: MoveToCartRequest | None = None,
    user_id: str = Depends(current_user),
):
    quantity = body.quantity if body is not None else 1
    command = MoveToCart(user_id=user_id, product_id=product_id, quantity=quantity)
    line_id = current_domain.process(command, asynchronous=False)
    return cart_item(user_id, line_id)
