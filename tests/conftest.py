import os
import tempfile

# Set environment variables BEFORE any imports that might use settings
# Use a temporary directory for test database to avoid permission issues
_test_db_dir = tempfile.mkdtemp()
_test_db_path = os.path.join(_test_db_dir, "test_marketplace.db")
os.environ["DATABASE_URL"] = f"sqlite:///{_test_db_path}"
os.environ["SECRET_KEY"] = "test-secret-key-min-32-characters-long-for-testing"
os.environ["ALGORITHM"] = "HS256"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["FIRST_ADMIN_EMAIL"] = "admin@test.example.com"
os.environ["FIRST_ADMIN_PASSWORD"] = "AdminTest123!"
os.environ["CART_TAX_RATE"] = "0"
os.environ["RENT_DEPOSIT_MONTHS"] = "2"

import pytest
from alembic import command
from alembic.config import Config
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session

from app.main import app
from app.core.security import create_access_token, get_password_hash
from app.db.models.apartment import Apartment as ApartmentModel
from app.db.models.role import Role as RoleModel
from app.db.models.user import User as UserModel
from app.domain.enums import ApartmentStatus, ApartmentType


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test and run migrations."""
    # Use a temporary file for SQLite database
    temp_db_dir = tempfile.mkdtemp()
    test_db_path = os.path.join(temp_db_dir, "test.db")
    test_db_url = f"sqlite:///{test_db_path}"

    # Create test engine and session with proper SQLite settings
    test_engine = create_engine(
        test_db_url,
        connect_args={"check_same_thread": False},
    )

    # Enable WAL mode to reduce locking issues
    @event.listens_for(test_engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=test_engine
    )

    # Run Alembic migrations to set up the database schema and seed data
    alembic_cfg = Config("alembic.ini")
    alembic_cfg.set_main_option("sqlalchemy.url", test_db_url)
    command.upgrade(alembic_cfg, "head")

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        # Dispose the engine to close all connections
        test_engine.dispose()

        # Clean up - remove test database file and directory
        for suffix in ["", "-wal", "-shm"]:
            path = f"{test_db_path}{suffix}"
            if os.path.exists(path):
                os.remove(path)
        if os.path.exists(temp_db_dir):
            os.rmdir(temp_db_dir)


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database dependency override."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    from app.api.deps import get_db

    app.dependency_overrides[get_db] = override_get_db

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def db(db_session):
    """Alias for db_session to match test naming conventions."""
    return db_session


# ============================================================================
# USERS AND TOKENS
# ============================================================================


def create_test_user(
    db: Session,
    email: str,
    role_name: str,
    password: str = "UserPass123!",
    first_name: str = "Test",
    last_name: str = "User",
) -> dict:
    """Insert a user with the given role and return its identifying fields."""
    role = db.query(RoleModel).filter(RoleModel.name == role_name).first()
    if not role:
        raise RuntimeError(f"Role {role_name} not found")

    user = UserModel(
        email=email,
        password_hash=get_password_hash(password),
        first_name=first_name,
        last_name=last_name,
        role_id=role.id,
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    return {
        "id": user.id,
        "email": user.email,
        "password": password,
        "role_id": user.role_id,
    }


@pytest.fixture(scope="function")
def make_user(db: Session):
    """Factory for extra users: make_user(email, role_name, **kwargs)."""

    def _make(email: str, role_name: str, **kwargs) -> dict:
        return create_test_user(db, email, role_name, **kwargs)

    return _make


@pytest.fixture(scope="function")
def admin_user(db: Session) -> dict:
    """The admin user seeded by migration 002."""
    from app.repositories.user import get_user_by_email
    from app.core.config import settings

    user = get_user_by_email(db, settings.first_admin_email)
    if not user:
        raise RuntimeError("Admin user not found. Check migration 002.")

    return {
        "id": user.id,
        "email": user.email,
        "password": settings.first_admin_password,  # Plaintext password from env
        "role_id": user.role_id,
    }


@pytest.fixture(scope="function")
def admin_token(admin_user: dict) -> str:
    return create_access_token(admin_user["id"])


@pytest.fixture(scope="function")
def manager_user_dict(db: Session) -> dict:
    return create_test_user(
        db, "manager@example.com", "building_manager", first_name="Mary", last_name="Manager"
    )


@pytest.fixture(scope="function")
def manager_token(manager_user_dict: dict) -> str:
    return create_access_token(manager_user_dict["id"])


@pytest.fixture(scope="function")
def user_dict(db: Session) -> dict:
    return create_test_user(db, "user@example.com", "user", first_name="Uma", last_name="Visitor")


@pytest.fixture(scope="function")
def user_token(user_dict: dict) -> str:
    return create_access_token(user_dict["id"])


@pytest.fixture(scope="function")
def resident_user_dict(db: Session) -> dict:
    return create_test_user(
        db, "resident@example.com", "resident", first_name="Rita", last_name="Resident"
    )


@pytest.fixture(scope="function")
def resident_token(resident_user_dict: dict) -> str:
    return create_access_token(resident_user_dict["id"])


@pytest.fixture(scope="function")
def owner_user_dict(db: Session) -> dict:
    return create_test_user(db, "owner@example.com", "owner", first_name="Otto", last_name="Owner")


@pytest.fixture(scope="function")
def owner_token(owner_user_dict: dict) -> str:
    return create_access_token(owner_user_dict["id"])


# ============================================================================
# APARTMENTS
# ============================================================================


@pytest.fixture(scope="function")
def make_apartment(db: Session):
    """Factory for apartments listed for both rent and sale unless overridden."""
    counter = {"n": 0}

    def _make(**overrides) -> ApartmentModel:
        counter["n"] += 1
        fields = {
            "apartment_number": f"A-{counter['n']:02d}",
            "building": "Tower 1",
            "floor": 1,
            "type": ApartmentType.TWO_BHK,
            "area": 75,
            "bedrooms": 2,
            "bathrooms": 1,
            "balconies": 1,
            "parking_slots": 1,
            "monthly_rent": 1000,
            "sale_price": 200000,
            "is_listed_for_rent": True,
            "is_listed_for_sale": True,
            "maintenance_fee": 50,
            "status": ApartmentStatus.FOR_RENT,
            "amenities": ["gym", "pool"],
        }
        fields.update(overrides)
        apartment = ApartmentModel(**fields)
        db.add(apartment)
        db.commit()
        db.refresh(apartment)
        return apartment

    return _make
