"""
Pytest fixtures for storeadmin backend tests.

Provides test database setup, seeded roles, sample locations/registers,
authenticated users and a test client.
"""

import base64

import pytest
from storeadmin import create_app
from storeadmin.extensions import db
from storeadmin.services import location_service, register_service, role_service, user_service


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'BCRYPT_ROUNDS': 4,
    })

    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def db_session(app):
    """Create fresh database for each test."""
    with app.app_context():
        # Clear all data but keep schema
        meta = db.metadata
        for table in reversed(meta.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()

        yield db.session

        # Cleanup after test
        db.session.rollback()


@pytest.fixture(scope='function')
def setup_roles(db_session):
    """Seed the default roles (admin_role, cashier_role)."""
    role_service.ensure_default_roles()


@pytest.fixture(scope='function')
def setup_brands(db_session):
    register_service.ensure_default_brands()


@pytest.fixture(scope='function')
def warehouse(db_session):
    return location_service.create_location("W1", "WAREHOUSE", location_id="w1")


@pytest.fixture(scope='function')
def store(db_session, warehouse):
    """Store S1 linked to warehouse W1."""
    return location_service.create_location("S1", "STORE", [warehouse.id], location_id="s1")


@pytest.fixture(scope='function')
def other_store(db_session):
    return location_service.create_location("S2", "STORE", location_id="s2")


@pytest.fixture(scope='function')
def register(db_session, store, setup_brands):
    return register_service.create_register(
        "Kassa 1", store.id, brand="Epson", ip_address="10.0.0.5", register_id="r1",
    )


@pytest.fixture(scope='function')
def admin_user(db_session, setup_roles):
    """Administrator with every permission."""
    return user_service.create_user(
        username="admin",
        first_name="Ada",
        password="Password123!",
        role_id="admin_role",
    )


@pytest.fixture(scope='function')
def cashier_user(db_session, setup_roles):
    """Cashier: no view_admin, no manage_users."""
    return user_service.create_user(
        username="cashier",
        first_name="Carl",
        password="Password123!",
        role_id="cashier_role",
    )


def basic_auth(username, password):
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {token}"}


@pytest.fixture(scope='function')
def admin_headers(admin_user):
    return basic_auth("admin", "Password123!")


@pytest.fixture(scope='function')
def cashier_headers(cashier_user):
    return basic_auth("cashier", "Password123!")
