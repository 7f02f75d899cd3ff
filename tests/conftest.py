import pytest

from cube_engine.pattern_db import build_corner_database

# depth 4 keeps the pure-Python build to a couple of seconds; unreached
# entries hold 5, which is still a lower bound
SMALL_BUILD_DEPTH = 4


@pytest.fixture(scope="session")
def small_corner_db():
    return build_corner_database(SMALL_BUILD_DEPTH)
