import pytest

from tbox_aes import build_tables


@pytest.fixture(scope="session")
def tables():
    return build_tables()
