"""
PWD Registry - Test Configuration and Fixtures
"""
import os

# Set testing environment before the app reads its settings
os.environ['DATABASE_PATH'] = ':memory:'
os.environ['USE_POSTGRES'] = 'false'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['SMTP_USER'] = ''
os.environ['SMTP_PASSWORD'] = ''

from datetime import datetime
from typing import Generator
import pytest
from faker import Faker
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from pwd_registry.database import Base, create_db_engine, get_db, init_db
from pwd_registry.dependencies import get_otp_notifier
from pwd_registry.main import app
from pwd_registry.models import (
    User,
    Gender,
    Community,
    DisabilityCategory,
    DisabilityType,
    AssistanceType,
    PwdRecord,
    AssistanceRequest,
)
from pwd_registry.security import get_password_hash, create_access_token
from pwd_registry.utils.constants import Quarter, PwdStatus, RequestStatus, UserRole

fake = Faker()

API = "/api/v1"
ADMIN_PASSWORD = "adminpassword123"
OFFICER_PASSWORD = "officerpassword123"


class CapturingNotifier:
    """Records reset codes instead of emailing them."""

    def __init__(self):
        self.sent = []

    async def send_otp(self, to_email, username, code, ttl_minutes):
        self.sent.append({"to": to_email, "username": username, "code": code, "ttl": ttl_minutes})
        return True

    @property
    def last_code(self):
        return self.sent[-1]["code"] if self.sent else None


@pytest.fixture(scope='function')
def db_session() -> Generator[Session, None, None]:
    """Fresh in-memory database for each test"""
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    init_db(bind=engine)

    TestSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def notifier() -> CapturingNotifier:
    return CapturingNotifier()


@pytest.fixture
def client(db_session: Session, notifier: CapturingNotifier) -> Generator[TestClient, None, None]:
    """Test client with database and notifier overrides"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_otp_notifier] = lambda: notifier

    yield TestClient(app)

    app.dependency_overrides.clear()


def _make_user(db: Session, role: UserRole, password: str) -> User:
    user = User(
        username=fake.unique.user_name(),
        email=fake.unique.email(),
        password_hash=get_password_hash(password),
        role=role,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def admin_user(db_session: Session) -> User:
    """Create an admin test user"""
    return _make_user(db_session, UserRole.ADMIN, ADMIN_PASSWORD)


@pytest.fixture
def officer_user(db_session: Session) -> User:
    """Create an officer test user"""
    return _make_user(db_session, UserRole.OFFICER, OFFICER_PASSWORD)


def _headers(user: User) -> dict:
    token = create_access_token({'sub': str(user.id), 'role': user.role.value})
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def admin_headers(admin_user: User) -> dict:
    """Generate authentication headers for admin user"""
    return _headers(admin_user)


@pytest.fixture
def officer_headers(officer_user: User) -> dict:
    """Generate authentication headers for officer user"""
    return _headers(officer_user)


@pytest.fixture
def reference_data(db_session: Session) -> dict:
    """
    Two categories with their types, two communities, two assistance types.

    "Visual Impairment" owns Blindness and Low Vision; "Physical Disability"
    owns Amputation.
    """
    visual = DisabilityCategory(name="Visual Impairment")
    physical = DisabilityCategory(name="Physical Disability")
    db_session.add_all([visual, physical])
    db_session.flush()

    blindness = DisabilityType(name="Blindness", category_id=visual.id)
    low_vision = DisabilityType(name="Low Vision", category_id=visual.id)
    amputation = DisabilityType(name="Amputation", category_id=physical.id)
    accra = Community(name="Accra Central")
    tema = Community(name="Tema")
    wheelchair = AssistanceType(name="Wheelchair")
    school_fees = AssistanceType(name="School Fees")
    db_session.add_all([blindness, low_vision, amputation, accra, tema, wheelchair, school_fees])
    db_session.commit()

    genders = {g.name: g.id for g in db_session.query(Gender).all()}
    return {
        "visual": visual.id,
        "physical": physical.id,
        "blindness": blindness.id,
        "low_vision": low_vision.id,
        "amputation": amputation.id,
        "accra": accra.id,
        "tema": tema.id,
        "wheelchair": wheelchair.id,
        "school_fees": school_fees.id,
        "male": genders["male"],
        "female": genders["female"],
    }


@pytest.fixture
def make_record(db_session: Session, reference_data: dict, officer_user: User):
    """Factory inserting PWD records directly through the ORM"""
    def _make(**overrides) -> PwdRecord:
        fields = {
            "user_id": officer_user.id,
            "quarter": Quarter.Q1,
            "year": 2024,
            "gender_id": reference_data["female"],
            "full_name": fake.name(),
            "contact": fake.numerify("024#######"),
            "disability_category_id": reference_data["visual"],
            "disability_type_id": reference_data["blindness"],
            "community_id": reference_data["accra"],
            "status": PwdStatus.PENDING,
        }
        fields.update(overrides)
        record = PwdRecord(**fields)
        db_session.add(record)
        db_session.commit()
        return record
    return _make


@pytest.fixture
def make_request(db_session: Session, reference_data: dict, officer_user: User):
    """Factory inserting assistance requests directly through the ORM"""
    def _make(beneficiary: PwdRecord, **overrides) -> AssistanceRequest:
        fields = {
            "assistance_type_id": reference_data["wheelchair"],
            "beneficiary_id": beneficiary.id,
            "requested_by": officer_user.id,
            "description": fake.sentence(),
            "status": RequestStatus.PENDING,
            "created_at": datetime.now(),
        }
        fields.update(overrides)
        request = AssistanceRequest(**fields)
        db_session.add(request)
        db_session.commit()
        return request
    return _make
