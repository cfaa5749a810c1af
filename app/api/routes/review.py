# app/api/routes/review.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.security import require_auth
from app.db.base import get_db
from app.db.models.user import User
from app.schemas.common import ApiResponse
from app.schemas.review import ReviewCreate, ReviewResponse
from app.services import ratings

router = APIRouter(prefix="/api/reviews", tags=["reviews"])


@router.post("", response_model=ApiResponse[ReviewResponse], status_code=status.HTTP_201_CREATED)
def create_review(
    review_in: ReviewCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_auth),
):
    review = ratings.submit(
        db,
        sitter_id=review_in.sitter_id,
        owner=current_user,
        rating=review_in.rating,
        comment=review_in.comment,
    )
    return ApiResponse(message="Review submitted!", data=ReviewResponse.model_validate(review))
