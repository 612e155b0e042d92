"""Test configuration and fixtures."""

import pytest
from imgtool import keygens


@pytest.fixture(scope="session")
def p256_der():
    return keygens.generate("ecdsa-p256")


@pytest.fixture(scope="session")
def p224_der():
    return keygens.generate("ecdsa-p224")


@pytest.fixture(scope="session")
def rsa_der():
    """RSA generation is slow, so one key is shared by all tests."""
    return keygens.generate("rsa-2048")


@pytest.fixture
def fixed_randfunc():
    """Deterministic random source returning the same bytes every call."""
    def randfunc(n):
        return bytes(range(1, n + 1))
    return randfunc
