from sqlalchemy import Column, String, ForeignKey, CheckConstraint, Index
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base

MAX_CHIRP_LENGTH = 140


class Chirp(BaseModel, Base):
    __tablename__ = "chirps"

    body = Column(String(MAX_CHIRP_LENGTH), nullable=False)
    # Deleting a user removes their chirps
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    user = relationship("User", back_populates="chirps")

    __table_args__ = (
        CheckConstraint("length(body) > 0", name="ck_chirps_body_not_empty"),
        Index("ix_chirps_created_at", "created_at"),
    )
