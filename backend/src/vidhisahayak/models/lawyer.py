"""
Lawyer profile model for VidhiSahayak.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, ForeignKey, JSON
from sqlalchemy.orm import relationship

from vidhisahayak.models.base import Base


class LawyerProfile(Base):
    """
    Public listing for an advocate. Profiles start as 'pending' and are only
    listed once an admin marks them 'verified'.
    """
    __tablename__ = "lawyer_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=True, unique=True)
    full_name = Column(String(100), nullable=True)
    practices = Column(JSON, nullable=False, default=list)
    experience_years = Column(Integer, nullable=True)
    office_location = Column(String(100), nullable=True, index=True)
    fee = Column(Integer, nullable=True)  # per session, INR
    license_number = Column(String(100), nullable=True)
    education = Column(Text, nullable=True)
    practicing_court = Column(String(255), nullable=True)
    contact_info = Column(String(255), nullable=True)
    verification_status = Column(String(20), nullable=False, default="pending", index=True)
    created_at = Column(String, nullable=True, default=lambda: datetime.utcnow().isoformat())
    updated_at = Column(String, nullable=True, default=lambda: datetime.utcnow().isoformat())

    user = relationship("User", back_populates="lawyer_profile")

    def __repr__(self):
        return f"<LawyerProfile(id={self.id}, name='{self.full_name}', status='{self.verification_status}')>"
