import pytest
from django.core.cache import cache


@pytest.fixture(autouse=True)
def clear_cache():
    """Each test starts with an empty cache."""
    cache.clear()
    yield
    cache.clear()
