"""
Guardian, education and support-needs services.

All three hang off a PWD record. Guardian and education allow one row
per record (a second create is a Conflict); support needs allow many.
"""
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List, Dict, Any
import logging

from pwd_registry.exceptions import NotFoundError, ConflictError
from pwd_registry.models.pwd_record import PwdRecord
from pwd_registry.models.satellites import PwdGuardian, PwdEducation, PwdSupportNeed

logger = logging.getLogger(__name__)


class SatelliteService:
    model = None
    label = "Record"
    one_per_pwd = False
    # API field name -> model attribute
    fields = {}

    def __init__(self, db: Session):
        self.db = db

    def to_dict(self, row) -> Dict[str, Any]:
        data = {"id": row.id, "pwd_id": row.pwd_id}
        for api_name, attr in self.fields.items():
            data[api_name] = getattr(row, attr)
        return data

    def _require_pwd(self, pwd_id: int) -> None:
        if self.db.get(PwdRecord, pwd_id) is None:
            raise NotFoundError("PWD record", pwd_id)

    def get_by_pwd(self, pwd_id: int) -> List[Dict[str, Any]]:
        self._require_pwd(pwd_id)
        rows = self.db.query(self.model).filter(self.model.pwd_id == pwd_id).order_by(self.model.id).all()
        return [self.to_dict(r) for r in rows]

    def get_row(self, record_id: int):
        row = self.db.get(self.model, record_id)
        if row is None:
            raise NotFoundError(self.label, record_id)
        return row

    def get(self, record_id: int) -> Dict[str, Any]:
        return self.to_dict(self.get_row(record_id))

    def create(self, pwd_id: int, fields: Dict[str, Any]) -> Dict[str, Any]:
        self._require_pwd(pwd_id)

        if self.one_per_pwd:
            existing = self.db.query(self.model.id).filter(self.model.pwd_id == pwd_id).first()
            if existing is not None:
                raise ConflictError(f"PWD record {pwd_id} already has a {self.label.lower()} entry")

        row = self.model(pwd_id=pwd_id, **{
            attr: fields.get(api_name) for api_name, attr in self.fields.items()
        })
        self.db.add(row)
        try:
            self.db.commit()
        except IntegrityError:
            # unique(pwd_id) caught a concurrent create
            self.db.rollback()
            raise ConflictError(f"PWD record {pwd_id} already has a {self.label.lower()} entry")

        logger.info("Created %s %s for PWD record %s", self.label.lower(), row.id, pwd_id)
        return self.to_dict(row)

    def update(self, record_id: int, fields: Dict[str, Any]) -> Dict[str, Any]:
        row = self.get_row(record_id)
        for api_name, attr in self.fields.items():
            if api_name in fields:
                setattr(row, attr, fields[api_name])
        self.db.commit()
        logger.info("Updated %s %s", self.label.lower(), record_id)
        return self.to_dict(row)

    def delete(self, record_id: int) -> None:
        row = self.get_row(record_id)
        self.db.delete(row)
        self.db.commit()
        logger.info("Deleted %s %s", self.label.lower(), record_id)


class GuardianService(SatelliteService):
    model = PwdGuardian
    label = "Guardian"
    one_per_pwd = True
    fields = {
        "name": "name",
        "occupation": "occupation",
        "phone": "phone",
        "relationship": "relationship_to_pwd",
    }


class EducationService(SatelliteService):
    model = PwdEducation
    label = "Education"
    one_per_pwd = True
    fields = {
        "education_level": "education_level",
        "school_name": "school_name",
    }

    def level_distribution(self) -> List[Dict[str, Any]]:
        """Number of PWDs per education level."""
        rows = (
            self.db.query(PwdEducation.education_level, func.count(PwdEducation.id).label("count"))
            .group_by(PwdEducation.education_level)
            .order_by(func.count(PwdEducation.id).desc(), PwdEducation.education_level)
            .all()
        )
        return [{"education_level": r.education_level, "count": int(r.count)} for r in rows]


class SupportNeedService(SatelliteService):
    model = PwdSupportNeed
    label = "Support need"
    fields = {"assistance_needed": "assistance_needed"}

    def to_dict(self, row) -> Dict[str, Any]:
        data = super().to_dict(row)
        data["pwd_name"] = row.pwd.full_name if row.pwd else None
        return data

    def search(self, term: str) -> List[Dict[str, Any]]:
        term = term.strip().lower()
        rows = (
            self.db.query(PwdSupportNeed)
            .filter(func.lower(PwdSupportNeed.assistance_needed).contains(term, autoescape=True))
            .order_by(PwdSupportNeed.id)
            .all()
        )
        return [self.to_dict(r) for r in rows]
