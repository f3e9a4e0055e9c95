"""
Lawyer directory for VidhiSahayak.

Verified profiles come from the database. When no database is configured, or
the query fails, a small built-in sample directory is filtered instead.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session

from vidhisahayak.core.constants import VERIFICATION_STATUSES, VERIFICATION_VERIFIED
from vidhisahayak.models.lawyer import LawyerProfile
from vidhisahayak.schemas import LawyerResponse

logger = logging.getLogger(__name__)

ALL = "all"
SOURCE_DATABASE = "database"
SOURCE_SAMPLE = "sample"


@dataclass(frozen=True)
class SampleLawyer:
    id: str
    name: str
    practices: Tuple[str, ...]
    experience_years: int
    location: str
    fee: int  # per session, INR


LAWYERS: Tuple[SampleLawyer, ...] = (
    SampleLawyer("l1", "Adv. Aditi Rao", ("Civil", "Property", "Contracts"), 7, "Hyderabad", 1500),
    SampleLawyer("l2", "Adv. Karthik Menon", ("Criminal", "Cyber"), 5, "Bengaluru", 2000),
    SampleLawyer("l3", "Adv. Nisha Sharma", ("IPR", "Design Patents", "Trademarks"), 9, "Mumbai", 2500),
    SampleLawyer("l4", "Adv. Rohan Gupta", ("Family", "Rental", "Civil"), 6, "Delhi", 1200),
    SampleLawyer("l5", "Adv. Priya Desai", ("Corporate", "MOU", "Agreements"), 8, "Pune", 1800),
)


def _sample_response(lawyer: SampleLawyer) -> LawyerResponse:
    return LawyerResponse(
        id=lawyer.id,
        name=lawyer.name,
        practices=list(lawyer.practices),
        experience_years=lawyer.experience_years,
        location=lawyer.location,
        fee=lawyer.fee,
    )


def profile_response(profile: LawyerProfile) -> LawyerResponse:
    return LawyerResponse(
        id=str(profile.id),
        name=profile.full_name or "(Unnamed)",
        practices=list(profile.practices or []),
        experience_years=profile.experience_years or 0,
        location=profile.office_location or "",
        fee=profile.fee or 0,
    )


def _is_set(value: Optional[str]) -> bool:
    return bool(value) and value != ALL


def filter_sample(
    q: str = "",
    practice: Optional[str] = ALL,
    location: Optional[str] = ALL,
    max_fee: Optional[int] = None,
) -> List[LawyerResponse]:
    """Filter the built-in directory. `q` matches name, location or any practice."""
    needle = (q or "").strip().lower()
    items = []
    for lawyer in LAWYERS:
        if needle and needle not in " ".join((lawyer.name, lawyer.location) + lawyer.practices).lower():
            continue
        if _is_set(practice) and practice not in lawyer.practices:
            continue
        if _is_set(location) and lawyer.location != location:
            continue
        if max_fee and lawyer.fee > max_fee:
            continue
        items.append(_sample_response(lawyer))
    return items


class LawyerService:
    """Lists and manages lawyer profiles."""

    def __init__(self, db: Optional[Session] = None):
        self.db = db

    def _query_verified(
        self, q: str, practice: Optional[str], location: Optional[str], max_fee: Optional[int]
    ) -> List[LawyerResponse]:
        query = self.db.query(LawyerProfile).filter(
            LawyerProfile.verification_status == VERIFICATION_VERIFIED
        )

        needle = (q or "").strip()
        if needle:
            pattern = f"%{needle}%"
            query = query.filter(or_(
                LawyerProfile.full_name.ilike(pattern),
                LawyerProfile.office_location.ilike(pattern),
            ))
        if _is_set(location):
            query = query.filter(LawyerProfile.office_location == location)
        if max_fee:
            query = query.filter(LawyerProfile.fee <= max_fee)

        profiles = query.order_by(LawyerProfile.id.asc()).all()

        # JSON containment differs per backend, so practices are filtered here
        if _is_set(practice):
            profiles = [p for p in profiles if practice in (p.practices or [])]

        return [profile_response(p) for p in profiles]

    def list_lawyers(
        self,
        q: str = "",
        practice: Optional[str] = ALL,
        location: Optional[str] = ALL,
        max_fee: Optional[int] = None,
    ) -> Tuple[List[LawyerResponse], str]:
        """Return (items, source) where source is 'database' or 'sample'."""
        if self.db is not None:
            try:
                return self._query_verified(q, practice, location, max_fee), SOURCE_DATABASE
            except Exception as e:
                logger.error(f"Lawyer query failed, serving sample directory: {e}")
                self.db.rollback()

        return filter_sample(q, practice, location, max_fee), SOURCE_SAMPLE

    def get_lawyer(self, lawyer_id: str) -> Optional[LawyerResponse]:
        """Find a lawyer by database id or sample id."""
        if self.db is not None and lawyer_id.isdigit():
            try:
                profile = self.db.query(LawyerProfile).filter(
                    LawyerProfile.id == int(lawyer_id),
                    LawyerProfile.verification_status == VERIFICATION_VERIFIED
                ).first()
                if profile:
                    return profile_response(profile)
            except Exception as e:
                logger.error(f"Error loading lawyer {lawyer_id}: {e}")
                self.db.rollback()

        for lawyer in LAWYERS:
            if lawyer.id == lawyer_id:
                return _sample_response(lawyer)
        return None

    def set_verification_status(self, lawyer_id: int, status: str) -> Optional[LawyerProfile]:
        """Mark a profile pending, verified or rejected. Returns None if the profile does not exist."""
        if status not in VERIFICATION_STATUSES:
            raise ValueError(f"Invalid verification status: {status}")

        profile = self.db.query(LawyerProfile).filter(LawyerProfile.id == lawyer_id).first()
        if not profile:
            return None

        try:
            profile.verification_status = status
            profile.updated_at = datetime.utcnow().isoformat()
            self.db.commit()
            self.db.refresh(profile)
        except Exception as e:
            logger.error(f"Error updating verification for lawyer {lawyer_id}: {e}")
            self.db.rollback()
            raise

        logger.info(f"Lawyer {lawyer_id} verification set to {status}")
        return profile

    def practice_options(self) -> List[str]:
        """Distinct practice areas for the filter dropdown."""
        items, _ = self.list_lawyers()
        return sorted({p for item in items for p in item.practices})

    def location_options(self) -> List[str]:
        """Distinct office locations for the filter dropdown."""
        items, _ = self.list_lawyers()
        return sorted({item.location for item in items if item.location})
