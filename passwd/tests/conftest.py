import pytest

from passwd.hasher import Hasher
from passwd.schemas import HashParameters

# Cheap enough to run hundreds of times per test session.
FAST = HashParameters(time_cost=1, memory_cost=64, parallelism=1, salt_len=16, key_len=32)

@pytest.fixture
def fast_params():
    return FAST

@pytest.fixture
def hasher():
    return Hasher(FAST)
