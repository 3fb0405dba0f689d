"""
Audit trail of state-changing calls.
"""
from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from pwd_registry.database import Base


class ActivityLog(Base):
    """
    One recorded action by an authenticated user.

    Entries outlive the account that wrote them; deleting a user
    clears `user_id` instead of dropping the history.
    """
    __tablename__ = "activity_logs"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), index=True)
    activity = Column(Text, nullable=False)
    timestamp = Column(DateTime, nullable=False, default=datetime.now, index=True)

    user = relationship("User")

    def __repr__(self):
        return f"<ActivityLog(id={self.id}, user_id={self.user_id}, timestamp={self.timestamp})>"
