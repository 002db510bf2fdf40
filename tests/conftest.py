"""Pytest configuration and fixtures."""

import os

# Point the application at SQLite unless a database is provided (e.g. in Docker)
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from homestock.database import Base, get_db  # noqa: E402
from homestock.main import app  # noqa: E402
from homestock.models.enums import Site  # noqa: E402
from homestock.models.pantry import PantryItem  # noqa: E402
from homestock.models.recipe import Recipe, RecipeIngredient  # noqa: E402

if "postgresql" in os.environ["DATABASE_URL"]:
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.environ["DATABASE_URL"].replace("/homestock", "/homestock_test")
else:
    SQLALCHEMY_DATABASE_URL = os.environ["DATABASE_URL"]

connect_args = {"check_same_thread": False} if "sqlite" in SQLALCHEMY_DATABASE_URL else {}
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=connect_args)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def add_pantry(db):
    """Factory for pantry records."""

    def _add(name, quantity, unit="each", location="Pantry", site=Site.JACKSON):
        item = PantryItem(
            name=name, quantity=quantity, unit=unit, location=location, site=Site(site).value
        )
        db.add(item)
        db.commit()
        db.refresh(item)
        return item

    return _add


@pytest.fixture
def make_recipe(db):
    """Factory for recipes; ingredients are (name, quantity, unit[, location]) tuples."""

    def _make(name, ingredients):
        recipe = Recipe(name=name)
        for position, line in enumerate(ingredients):
            ingredient_name, quantity, unit, *rest = line
            recipe.ingredients.append(
                RecipeIngredient(
                    ingredient_name=ingredient_name,
                    quantity=quantity,
                    unit=unit,
                    location=rest[0] if rest else "Pantry",
                    position=position,
                )
            )
        db.add(recipe)
        db.commit()
        db.refresh(recipe)
        return recipe

    return _make
