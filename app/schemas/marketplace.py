# app/schemas/marketplace.py
from pydantic import BaseModel, Field
from typing import List, Literal, Optional
from datetime import datetime


class ResourceCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    category: Literal["notes", "template", "toolkit", "guide", "code"]
    price: float = Field(0, ge=0)
    preview_image: Optional[str] = None
    file_size_mb: Optional[float] = Field(default=None, ge=0)
    tags: List[str] = []


class ResourceResponse(BaseModel):
    id: int
    tutor_id: int
    tutor_name: Optional[str]
    title: str
    description: Optional[str]
    category: str
    price: float
    preview_image: Optional[str]
    file_size_mb: Optional[float]
    downloads: int
    rating: float
    reviews: int
    tags: List[str]
    created_at: Optional[datetime]

    class Config:
        from_attributes = True


class AffiliateToolResponse(BaseModel):
    id: str
    name: str
    description: str
    logo_url: str
    category: str
    affiliate_link: str
    bonus: int

    class Config:
        from_attributes = True
