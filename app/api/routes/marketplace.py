# app/api/routes/marketplace.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import asc, desc
from sqlalchemy.orm import Session
from typing import Optional, List

from app.db.base import get_db
from app.db.models.resource import RESOURCE_CATEGORIES, Resource
from app.db.models.user import User
from app.schemas.marketplace import ResourceCreate, ResourceResponse
from app.core.security import get_current_user

router = APIRouter(prefix="/marketplace", tags=["marketplace"])


@router.get("/resources", response_model=List[ResourceResponse])
def list_resources(
    category: Optional[str] = Query(None, description="notes | template | toolkit | guide | code | all"),
    sort: str = Query("popular", description="popular | rating | price-low | price-high"),
    db: Session = Depends(get_db),
):
    q = db.query(Resource)

    if category and category != "all":
        if category not in RESOURCE_CATEGORIES:
            raise HTTPException(status_code=400, detail=f"Unknown category '{category}'")
        q = q.filter(Resource.category == category)

    # Sorting; id keeps equal keys in insertion order
    if sort == "rating":
        q = q.order_by(desc(Resource.rating), asc(Resource.id))
    elif sort == "price-low":
        q = q.order_by(asc(Resource.price), asc(Resource.id))
    elif sort == "price-high":
        q = q.order_by(desc(Resource.price), asc(Resource.id))
    elif sort == "popular":
        q = q.order_by(desc(Resource.downloads), asc(Resource.id))
    else:
        raise HTTPException(status_code=400, detail=f"Unknown sort '{sort}'")

    return q.all()


# Tutor lists a resource

@router.post("/resources", response_model=ResourceResponse, status_code=201)
def create_resource(
    payload: ResourceCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    resource = Resource(
        tutor_id=current_user.id,
        tutor_name=current_user.name,
        title=payload.title,
        description=payload.description,
        category=payload.category,
        price=payload.price,
        preview_image=payload.preview_image,
        file_size_mb=payload.file_size_mb,
        tags=payload.tags,
    )
    db.add(resource)
    db.commit()
    db.refresh(resource)
    return resource


@router.post("/resources/{resource_id}/download", response_model=ResourceResponse)
def download_resource(
    resource_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    resource = db.query(Resource).filter(Resource.id == resource_id).first()
    if not resource:
        raise HTTPException(status_code=404, detail="Resource not found")

    if resource.price > 0:
        raise HTTPException(
            status_code=402,
            detail=f"Purchase flow for \"{resource.title}\" is not available yet",
        )

    resource.downloads = Resource.downloads + 1
    db.commit()
    db.refresh(resource)
    return resource
