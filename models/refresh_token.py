"""
RefreshToken model: stores opaque refresh tokens so they can be redeemed and revoked.
Fields:
- token (unique, 64 hex chars) - the value handed to the client
- user_id (String(36)) - FK to users.id
- expires_at
- revoked_at (null while the token is active)
- created_at, updated_at
"""
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base


class RefreshToken(BaseModel, Base):
    __tablename__ = "refresh_tokens"

    token = Column(String(64), unique=True, index=True, nullable=False)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    revoked_at = Column(DateTime(timezone=True), nullable=True)

    user = relationship("User", back_populates="refresh_tokens")

    def __repr__(self):
        return f"<RefreshToken user={self.user_id} revoked={self.revoked_at is not None}>"
