"""FastAPI endpoints for product reviews."""

from fastapi import APIRouter, Depends
from protean import current_domain

from storefront.api.dependencies import current_user
from storefront.api.schemas import RatingSummaryResponse, ReviewResponse, StatusResponse, SubmitReviewRequest
from storefront.review.rating import list_reviews, rating_summary
from storefront.review.removal import RemoveReview
from storefront.review.review import Review
from storefront.review.submission import SubmitReview

product_review_router = APIRouter(prefix="/products", tags=["reviews"])
review_router = APIRouter(prefix="/reviews", tags=["reviews"])


@product_review_router.get("/{product_id}/reviews", response_model=list[ReviewResponse])
async def product_reviews(product_id: str):
    return list_reviews(product_id)


@product_review_router.get("/{product_id}/rating", response_model=RatingSummaryResponse)
async def product_rating(product_id: str):
    return rating_summary(product_id)


@product_review_router.post("/{product_id}/reviews", status_code=201, response_model=ReviewResponse)
async def create_review(product_id: str, body: SubmitReviewRequest, user_id: str = Depends(current_user)):
    command = SubmitReview(user_id=user_id, product_id=product_id, rating=body.rating, comment=body.comment)
    review_id = current_domain.process(command, asynchronous=False)
    return current_domain.repository_for(Review).get(review_id)


@review_router.delete("/{review_id}", response_model=StatusResponse)
async def delete_review(review_id: str, user_id: str = Depends(current_user)):
    current_domain.process(RemoveReview(user_id=user_id, review_id=review_id), asynchronous=False)
    return StatusResponse()
