"""
Reference (lookup) tables: genders, communities, disability
categories and types, assistance types.
"""
from sqlalchemy import Column, Integer, String, ForeignKey, Index, func
from sqlalchemy.orm import Session, relationship
from pwd_registry.database import Base
from pwd_registry.utils.constants import GENDER_NAMES


class Gender(Base):
    __tablename__ = "genders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(20), nullable=False, unique=True)

    __table_args__ = (
        Index("uq_genders_name_lower", func.lower(name), unique=True),
    )

    def __repr__(self):
        return f"<Gender(id={self.id}, name={self.name})>"


class Community(Base):
    __tablename__ = "communities"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(150), nullable=False, unique=True)

    __table_args__ = (
        Index("uq_communities_name_lower", func.lower(name), unique=True),
    )

    def __repr__(self):
        return f"<Community(id={self.id}, name={self.name})>"


class DisabilityCategory(Base):
    __tablename__ = "disability_categories"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(100), nullable=False, unique=True)

    __table_args__ = (
        Index("uq_disability_categories_name_lower", func.lower(name), unique=True),
    )

    types = relationship("DisabilityType", back_populates="category")

    def __repr__(self):
        return f"<DisabilityCategory(id={self.id}, name={self.name})>"


class DisabilityType(Base):
    """A disability type always belongs to exactly one category."""
    __tablename__ = "disability_types"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    category_id = Column(Integer, ForeignKey("disability_categories.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False, unique=True)

    __table_args__ = (
        Index("uq_disability_types_name_lower", func.lower(name), unique=True),
    )

    category = relationship("DisabilityCategory", back_populates="types")

    def __repr__(self):
        return f"<DisabilityType(id={self.id}, category_id={self.category_id}, name={self.name})>"


class AssistanceType(Base):
    __tablename__ = "assistance_types"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(100), nullable=False, unique=True)

    __table_args__ = (
        Index("uq_assistance_types_name_lower", func.lower(name), unique=True),
    )

    def __repr__(self):
        return f"<AssistanceType(id={self.id}, name={self.name})>"


def seed_genders(db: Session) -> None:
    """Insert the fixed gender rows that are not present yet."""
    existing = {name for (name,) in db.query(Gender.name).all()}
    missing = [name for name in GENDER_NAMES if name not in existing]
    if missing:
        db.add_all([Gender(name=name) for name in missing])
        db.commit()
