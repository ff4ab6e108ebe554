import pytest

from product_service import ProductStore, create_app


@pytest.fixture
def store():
    return ProductStore.seeded()


@pytest.fixture
def app(store):
    app = create_app(store)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    with app.test_client() as c:
        yield c


@pytest.fixture
def mouse():
    """A valid create payload."""
    return {"name": "Mouse", "price": 1500, "stock": 30}
