import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("ADMIN_PASSWORD", "test-admin")

from decimal import Decimal

import httpx
import pytest
from sqlalchemy import insert
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from main import app
from services.catalog_service.models import Category, Grade, Product, Subject
from shared.config.database import Base, get_db
from shared.config.settings import Settings, get_settings
from shared.security import limiter

ADMIN_PASSWORD = "test-admin"

TEST_SETTINGS = Settings(
    database_url="sqlite+aiosqlite://",
    admin_password=ADMIN_PASSWORD,
    delivery_fee=Decimal("200"),
)

GRADES = [{"id": i, "name": f"Grade {i}"} for i in range(1, 9)]
SUBJECTS = [
    {"id": 1, "name": "Mathematics"},
    {"id": 2, "name": "English"},
    {"id": 3, "name": "Kiswahili"},
]
CATEGORIES = [
    {"id": 1, "name": "Textbooks"},
    {"id": 2, "name": "Revision"},
]


def make_product(id, price, grade_id=None, subject_id=None, category_id=None, **extra):
    product = {
        "id": id,
        "title": f"Book {id}",
        "price": Decimal(str(price)),
        "isbn": f"978-0-{id:05d}",
        "publisher": "KLB",
        "description": None,
        "image": None,
        "stock": 10,
        "grade_id": grade_id,
        "subject_id": subject_id,
        "category_id": category_id,
    }
    product.update(extra)
    return product


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'bookstore.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def seed(session_factory):
    """Insert lookups and the given product rows."""
    async def _seed(products=()):
        async with session_factory() as session:
            async with session.begin():
                await session.execute(insert(Grade), GRADES)
                await session.execute(insert(Subject), SUBJECTS)
                await session.execute(insert(Category), CATEGORIES)
                if products:
                    await session.execute(insert(Product), list(products))
    return _seed


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: TEST_SETTINGS
    limiter.enabled = False

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http:
        yield http

    app.dependency_overrides.clear()
    limiter.enabled = True


@pytest.fixture
def admin_headers():
    return {"X-Admin-Password": ADMIN_PASSWORD}
