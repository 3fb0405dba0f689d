"""
Assistance request SQLAlchemy model.
"""
from sqlalchemy import Column, Integer, Numeric, Text, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from datetime import datetime
from pwd_registry.database import Base
from pwd_registry.utils.constants import RequestStatus, enum_values


class AssistanceRequest(Base):
    """
    A request for assistance on behalf of a registered PWD (the beneficiary).

    Moves pending -> review -> ready_to_access -> assessed, or to declined.
    """
    __tablename__ = "assistance_requests"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    assistance_type_id = Column(Integer, ForeignKey("assistance_types.id"), nullable=False, index=True)
    beneficiary_id = Column(Integer, ForeignKey("pwd_records.id"), nullable=False, index=True)
    requested_by = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    description = Column(Text)
    amount_value_cost = Column(Numeric(12, 2, asdecimal=False))
    admin_review_notes = Column(Text)
    status = Column(
        Enum(RequestStatus, name="request_status", values_callable=enum_values),
        nullable=False,
        default=RequestStatus.PENDING,
        index=True,
    )
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)

    assistance_type = relationship("AssistanceType")
    beneficiary = relationship("PwdRecord")
    requester = relationship("User")

    def __repr__(self):
        return f"<AssistanceRequest(id={self.id}, beneficiary_id={self.beneficiary_id}, status={self.status})>"
