# tests/conftest.py

from dataclasses import dataclass
from typing import Dict, List

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from app.core.database import Base, get_db
from app.models import Brand, Category, SubCategory, Segment, Sku, Product
from app.services.pricing_profile_repository import PricingProfileRepository
from app.services.pricing_profile_service import PricingProfileService
from app.services.product_repository import ProductRepository


# ==============================================================================
# 1. Database fixtures
# ==============================================================================

@pytest.fixture
def engine():
    """A fresh in-memory SQLite database per test."""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(test_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def db_session(engine):
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


# ==============================================================================
# 2. Catalog seeding
# ==============================================================================

@dataclass
class Catalog:
    """Ids of the seeded products, keyed by a short label."""
    products: Dict[str, int]

    def ids(self, *labels: str) -> List[int]:
        return [self.products[label] for label in labels]


@pytest.fixture
def catalog(db_session) -> Catalog:
    """
    Seeds one brand/category/sub-category/segment and four products:
    - wine (100.00), beer (200.00), cider (50.00): priceable
    - sample (0.00): not priceable
    """
    brand = Brand(name="High Garden")
    other_brand = Brand(name="Koyama Wines")
    category = Category(name="Alcoholic Beverage")
    sub_category = SubCategory(name="Wine")
    segment = Segment(name="Red")
    skus = [Sku(sku_code=code) for code in ("HGVPIN216", "KOYBRUNOIR", "HGCIDER01", "SAMPLE-000")]
    db_session.add_all([brand, other_brand, category, sub_category, segment, *skus])
    db_session.flush()

    rows = [
        ("wine", "High Garden Pinot Noir 2021", skus[0], brand, 100.0),
        ("beer", "Koyama Methode Brut Nature", skus[1], other_brand, 200.0),
        ("cider", "High Garden Apple Cider", skus[2], brand, 50.0),
        ("sample", "Tasting Sample", skus[3], brand, 0.0),
    ]

    products = {}
    for label, title, sku, product_brand, price in rows:
        product = Product(
            title=title,
            sku_id=sku.id,
            brand_id=product_brand.id,
            category_id=category.id,
            sub_category_id=sub_category.id,
            segment_id=segment.id if label != "cider" else None,
            global_wholesale_price=price,
            quantity=10,
        )
        db_session.add(product)
        db_session.flush()
        products[label] = product.id

    db_session.commit()
    return Catalog(products=products)


# ==============================================================================
# 3. Service and API fixtures
# ==============================================================================

@pytest.fixture
def profile_repository(db_session) -> PricingProfileRepository:
    return PricingProfileRepository(db_session)


@pytest.fixture
def pricing_service(db_session, profile_repository) -> PricingProfileService:
    return PricingProfileService(ProductRepository(db_session), profile_repository)


@pytest.fixture
def client(db_session):
    """TestClient whose requests share the test session."""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
