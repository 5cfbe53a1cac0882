# tests/conftest.py

import pytest

from msgseal_core.keys import generate_keypair


@pytest.fixture(scope="session")
def keypair():
    """A 2048-bit keypair shared across the session (generation is slow)."""
    return generate_keypair()


@pytest.fixture(scope="session")
def second_keypair():
    """A second, independent keypair."""
    return generate_keypair()
