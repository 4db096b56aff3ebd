"""
Pytest Configuration and Shared Fixtures

Provides fixtures shared by all tests:
- Recipient key pairs on every supported curve
- Scheme parameters for cipher mode and XOR keystream mode
- A fresh logger cache per test (logger tests replace handlers)

Set ECIES_TEST_ALL_SCHEMES=0 to run the scheme matrix on the default
scheme only.
"""

import os
import sys

import pytest
from cryptography.hazmat.primitives.asymmetric import ec

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ecies.config import ECIES_SCHEMES, get_default_parameters
from ecies.core.types import HashAlgorithm, SymmetricCipher
from ecies.messages.types import ECIESParameters


def _all_schemes():
    """Scheme names to parametrize over"""
    if os.environ.get("ECIES_TEST_ALL_SCHEMES", "1") == "0":
        return ["x963-sha256-aes128cbc-hmac-sha256"]
    return sorted(ECIES_SCHEMES)


@pytest.fixture(scope="session")
def recipient_key():
    """
    Static recipient key on P-256.
    Scope: session (generated once for all tests).
    """
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session")
def other_key():
    """Second P-256 key, never the intended recipient"""
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="session", params=["secp256r1", "secp384r1", "secp521r1", "secp256k1"])
def curve_key(request):
    """Recipient key on each supported curve"""
    curves = {
        "secp256r1": ec.SECP256R1,
        "secp384r1": ec.SECP384R1,
        "secp521r1": ec.SECP521R1,
        "secp256k1": ec.SECP256K1,
    }
    return ec.generate_private_key(curves[request.param]())


@pytest.fixture(params=_all_schemes())
def scheme_params(request):
    """Every named scheme"""
    return ECIES_SCHEMES[request.param]


@pytest.fixture
def cipher_params():
    """Default cipher-mode parameters (AES-128-CBC, HMAC-SHA256)"""
    return get_default_parameters()


@pytest.fixture
def xor_params():
    """XOR keystream parameters (explicit legacy opt-in)"""
    return ECIESParameters(
        kdf_md=HashAlgorithm.SHA256,
        mac_md=HashAlgorithm.SHA256,
        sym_cipher=None,
        allow_keystream=True,
    )


@pytest.fixture
def ctr_params():
    """AES-256-CTR parameters (no padding)"""
    return ECIESParameters(
        kdf_md=HashAlgorithm.SHA384,
        mac_md=HashAlgorithm.SHA384,
        sym_cipher=SymmetricCipher.AES_256_CTR,
    )


@pytest.fixture(autouse=True)
def isolated_logger_cache():
    """Restore the logger cache after each test"""
    from ecies.utils.logger import ECIESLogger

    saved = dict(ECIESLogger._loggers)
    yield
    ECIESLogger._loggers.clear()
    ECIESLogger._loggers.update(saved)
