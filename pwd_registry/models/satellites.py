"""
PWD satellite tables: guardian, education and support needs.
"""
from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from pwd_registry.database import Base


class PwdGuardian(Base):
    """At most one guardian per PWD (unique pwd_id)."""
    __tablename__ = "pwd_guardians"

    id = Column(Integer, primary_key=True, autoincrement=True)
    pwd_id = Column(Integer, ForeignKey("pwd_records.id"), nullable=False, unique=True)
    name = Column(String(150))
    occupation = Column(String(100))
    phone = Column(String(20))
    relationship_to_pwd = Column("relationship", String(50))

    pwd = relationship("PwdRecord")


class PwdEducation(Base):
    """At most one education row per PWD (unique pwd_id)."""
    __tablename__ = "pwd_education"

    id = Column(Integer, primary_key=True, autoincrement=True)
    pwd_id = Column(Integer, ForeignKey("pwd_records.id"), nullable=False, unique=True)
    education_level = Column(String(100))
    school_name = Column(String(150))

    pwd = relationship("PwdRecord")


class PwdSupportNeed(Base):
    __tablename__ = "pwd_support_needs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    pwd_id = Column(Integer, ForeignKey("pwd_records.id"), nullable=False, index=True)
    assistance_needed = Column(Text, nullable=False)

    pwd = relationship("PwdRecord")
