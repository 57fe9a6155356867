import pytest

from contenthash_api import _cached_encode, app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    _cached_encode.cache_clear()
    with app.test_client() as client:
        yield client


@pytest.fixture
def max_batch_size():
    original = app.config["MAX_BATCH_SIZE"]
    yield app.config
    app.config["MAX_BATCH_SIZE"] = original
