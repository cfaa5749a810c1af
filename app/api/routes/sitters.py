# app/api/routes/sitters.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.security import require_role
from app.db.base import get_db
from app.db.models.user import ROLE_SITTER, User
from app.schemas.common import ApiResponse
from app.schemas.review import ReviewResponse
from app.schemas.sitter import SitterDetailResponse, SitterProfileUpdate, SitterResponse, SitterSearchCriteria
from app.services import sitters

router = APIRouter(prefix="/api/sitters", tags=["sitters"])


@router.get("", response_model=ApiResponse[List[SitterResponse]])
def search_sitters(
    borough: Optional[str] = Query(None, description="Borough name, or 'all'"),
    min_rate: Optional[float] = Query(None, ge=0.0, alias="minRate"),
    max_rate: Optional[float] = Query(None, ge=0.0, alias="maxRate"),
    specialty: Optional[str] = Query(None, description="Substring of a specialty, or 'all'"),
    min_rating: Optional[float] = Query(None, ge=0.0, le=5.0, alias="minRating"),
    search: Optional[str] = Query(None, description="Matches name, neighborhood, bio or borough"),
    available: Optional[bool] = Query(None),
    db: Session = Depends(get_db),
):
    """Sitters matching every given filter, best rated first."""
    criteria = SitterSearchCriteria(
        borough=borough,
        min_rate=min_rate,
        max_rate=max_rate,
        specialty=specialty,
        min_rating=min_rating,
        search=search,
        available=available,
    )
    return ApiResponse(data=[SitterResponse.model_validate(s) for s in sitters.search(db, criteria)])


# declared before /{sitter_id} so "profile" is not taken for an id
@router.put("/profile", response_model=ApiResponse[SitterResponse])
def update_my_sitter_profile(
    payload: SitterProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_role(ROLE_SITTER)),
):
    sitter = sitters.update_own_profile(db, current_user, **payload.model_dump(exclude_unset=True))
    return ApiResponse(message="Profile updated!", data=SitterResponse.model_validate(sitter))


@router.get("/{sitter_id}", response_model=ApiResponse[SitterDetailResponse])
def get_sitter(sitter_id: str, db: Session = Depends(get_db)):
    sitter = sitters.get_by_id(db, sitter_id)
    detail = SitterDetailResponse.model_validate(sitter)
    detail.reviews = [ReviewResponse.model_validate(r) for r in sitters.list_reviews(db, sitter.id)]
    return ApiResponse(data=detail)
