# app/db/models/resource.py
from sqlalchemy import JSON, CheckConstraint, Column, DateTime, Float, ForeignKey, Integer, String, func
from sqlalchemy.orm import relationship
from app.db.base import Base

RESOURCE_CATEGORIES = ("notes", "template", "toolkit", "guide", "code")


class Resource(Base):
    __tablename__ = "resources"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_resources_price_non_negative"),
    )

    id = Column(Integer, primary_key=True, index=True)
    tutor_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    tutor_name = Column(String, nullable=True)

    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    category = Column(String, nullable=False)

    # Pricing, in INR; 0 means free
    price = Column(Float, nullable=False, default=0)

    preview_image = Column(String, nullable=True)
    file_size_mb = Column(Float, nullable=True)
    downloads = Column(Integer, nullable=False, default=0)
    rating = Column(Float, nullable=False, default=0)
    reviews = Column(Integer, nullable=False, default=0)
    tags = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    tutor = relationship("User", foreign_keys=[tutor_id])
