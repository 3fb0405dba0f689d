"""
PWD record SQLAlchemy model.
Core beneficiary record: one row per registered person with disability.
"""
from sqlalchemy import Column, Integer, String, Date, DateTime, Text, JSON, ForeignKey, Enum, Index
from sqlalchemy.orm import relationship
from datetime import datetime
from pwd_registry.database import Base
from pwd_registry.utils.constants import Quarter, PwdStatus, enum_values


class PwdRecord(Base):
    """
    PWD record table model.

    Registered per (quarter, year). Category/type/community/gender and
    the assistance type needed are foreign keys into the reference tables.
    """
    __tablename__ = "pwd_records"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Period
    quarter = Column(Enum(Quarter, name="quarter", values_callable=enum_values), nullable=False)
    year = Column(Integer, nullable=False)

    # Person
    gender_id = Column(Integer, ForeignKey("genders.id"), nullable=False)
    full_name = Column(String(150), nullable=False)
    occupation = Column(String(100))
    contact = Column(String(20))
    dob = Column(Date)
    age = Column(Integer)
    gh_card_number = Column(String(50))
    nhis_number = Column(String(50))
    profile_image = Column(String(255))

    # Disability and location
    disability_category_id = Column(Integer, ForeignKey("disability_categories.id"), nullable=False, index=True)
    disability_type_id = Column(Integer, ForeignKey("disability_types.id"), nullable=False, index=True)
    community_id = Column(Integer, ForeignKey("communities.id"), nullable=False, index=True)

    # Support
    assistance_type_needed_id = Column(Integer, ForeignKey("assistance_types.id"), index=True)
    support_needs = Column(Text)
    supporting_documents = Column(JSON)

    status = Column(
        Enum(PwdStatus, name="pwd_status", values_callable=enum_values),
        nullable=False,
        default=PwdStatus.PENDING,
    )
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)

    registered_by = relationship("User")
    gender = relationship("Gender")
    community = relationship("Community")
    disability_category = relationship("DisabilityCategory")
    disability_type = relationship("DisabilityType")
    assistance_type_needed = relationship("AssistanceType")

    __table_args__ = (
        Index("idx_pwd_period", "year", "quarter"),
    )

    def __repr__(self):
        return f"<PwdRecord(id={self.id}, full_name={self.full_name}, status={self.status})>"
