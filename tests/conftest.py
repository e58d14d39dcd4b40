import os

# Must be set before storefront.database builds its engine
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_KEY"] = "test-secret"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.config import Settings, get_settings
from storefront.database import get_db
from storefront.main import app
from storefront.models import Base, Category, Customer, Product
from storefront.auth import get_password_hash

TEST_SETTINGS = Settings(database_url="sqlite://", jwt_key="test-secret")


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: TEST_SETTINGS
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def settings():
    return TEST_SETTINGS


@pytest.fixture
def seed(session_factory):
    """Insert rows through a short-lived session and commit them."""

    def _seed(*rows):
        session = session_factory()
        try:
            session.add_all(rows)
            session.commit()
        finally:
            session.close()

    return _seed


@pytest.fixture
def catalog(seed):
    """Two categories, five products and one customer (id 1)."""
    seed(
        Category(category_name="tools", category_description="Hand tools"),
        Category(category_name="paint", category_description="Paints and brushes"),
    )
    seed(
        Product(id=1, product_name="Hammer", price=Decimal("12.50"), image_url="hammer.png", category="tools", amount=10),
        Product(id=2, product_name="Saw", price=Decimal("20.00"), image_url="saw.png", category="tools", amount=4),
        Product(id=3, product_name="Brush", price=Decimal("3.00"), image_url="brush.png", category="paint", amount=0),
        Product(id=4, product_name="Primer", price=Decimal("8.00"), image_url=None, category="paint", amount=2),
        Product(id=5, product_name="Chisel", price=Decimal("7.50"), image_url="chisel.png", category="tools", amount=1),
    )
    seed(
        Customer(id=1, first_name="Aino", last_name="Virtanen", username="aino", pw=get_password_hash("secret1")),
    )
