import pytest
from multidict import CIMultiDict


@pytest.fixture
def headers():
    """Empty response header container."""
    return CIMultiDict()


@pytest.fixture
def request_headers():
    """Build a request header container carrying a Cookie header."""
    def _build(cookie: str) -> CIMultiDict:
        return CIMultiDict({"Cookie": cookie})
    return _build
