"""
ECIES Configuration - defaults and named schemes

Centralizes the default algorithm choices and the registry of named
ECIES schemes. Changing a default here applies to every one-shot call
that does not pass explicit parameters.

Environment overrides (read once at import):
    ECIES_LOG_LEVEL       logging level name for the "ECIES" logger (default WARNING)
    ECIES_LOG_DIR         directory for ECIES.log (default: no file output)
    ECIES_DEFAULT_SCHEME  scheme name used by get_default_parameters()

Usage:
    from ecies.config import get_scheme_parameters

    params = get_scheme_parameters("x963-sha256-aes128cbc-hmac-sha256")
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from ecies.core.types import HashAlgorithm, SymmetricCipher
from ecies.messages.types import ECIESParameters
from ecies.utils.logger import ECIESLogger, LevelSpec, parse_level


def _env_log_level(variable: str, default: int) -> int:
    """Parse a level name such as "DEBUG" from the environment."""
    try:
        return parse_level(os.environ.get(variable), default)
    except ValueError:
        return default


@dataclass(frozen=True)
class ECIESConstants:
    """
    Default settings for the ECIES toolkit.

    Attributes:
        DEFAULT_CURVE: Curve used when callers ask for a fresh recipient key
        DEFAULT_SCHEME: Scheme name used when no parameters are supplied
        LOGGER_NAME: Name of the toolkit logger
        LOG_LEVEL: Level of the toolkit logger
        LOG_DIR: Directory for the toolkit log file, None for console only
    """
    DEFAULT_CURVE: str = "secp256r1"
    DEFAULT_SCHEME: str = os.environ.get(
        "ECIES_DEFAULT_SCHEME", "x963-sha256-aes128cbc-hmac-sha256"
    )

    LOGGER_NAME: str = "ECIES"
    LOG_LEVEL: int = _env_log_level("ECIES_LOG_LEVEL", logging.WARNING)
    LOG_DIR: Optional[str] = os.environ.get("ECIES_LOG_DIR") or None


# Global singleton instance
ECIES_CONSTANTS = ECIESConstants()


# Named schemes: x963-<kdf hash>-<cipher>-hmac-<mac hash>
ECIES_SCHEMES = {
    "x963-sha256-aes128cbc-hmac-sha256": ECIESParameters(
        kdf_md=HashAlgorithm.SHA256,
        mac_md=HashAlgorithm.SHA256,
        sym_cipher=SymmetricCipher.AES_128_CBC,
    ),
    "x963-sha256-aes256cbc-hmac-sha256": ECIESParameters(
        kdf_md=HashAlgorithm.SHA256,
        mac_md=HashAlgorithm.SHA256,
        sym_cipher=SymmetricCipher.AES_256_CBC,
    ),
    "x963-sha256-aes128ctr-hmac-sha256": ECIESParameters(
        kdf_md=HashAlgorithm.SHA256,
        mac_md=HashAlgorithm.SHA256,
        sym_cipher=SymmetricCipher.AES_128_CTR,
    ),
    "x963-sha384-aes256cbc-hmac-sha384": ECIESParameters(
        kdf_md=HashAlgorithm.SHA384,
        mac_md=HashAlgorithm.SHA384,
        sym_cipher=SymmetricCipher.AES_256_CBC,
    ),
    "x963-sha512-aes256ctr-hmac-sha512": ECIESParameters(
        kdf_md=HashAlgorithm.SHA512,
        mac_md=HashAlgorithm.SHA512,
        sym_cipher=SymmetricCipher.AES_256_CTR,
    ),
    # Legacy keystream profiles
    "x963-sha1-xor-hmac-sha1": ECIESParameters(
        kdf_md=HashAlgorithm.SHA1,
        mac_md=HashAlgorithm.SHA1,
        sym_cipher=None,
        allow_keystream=True,
    ),
    "x963-sha256-xor-hmac-sha256": ECIESParameters(
        kdf_md=HashAlgorithm.SHA256,
        mac_md=HashAlgorithm.SHA256,
        sym_cipher=None,
        allow_keystream=True,
    ),
}


def get_scheme_parameters(name: str) -> ECIESParameters:
    """
    Look up a named scheme.

    Args:
        name: Scheme name (case-insensitive), see ECIES_SCHEMES

    Returns:
        ECIESParameters: shared, immutable parameters

    Examples:
        >>> get_scheme_parameters("x963-sha256-xor-hmac-sha256").is_keystream_mode
        True
    """
    params = ECIES_SCHEMES.get(name.lower())
    if params is None:
        raise ValueError(f"Unknown ECIES scheme: {name}. Known: {sorted(ECIES_SCHEMES)}")
    return params


def get_default_parameters() -> ECIESParameters:
    """Parameters used by the one-shot API when none are given."""
    return get_scheme_parameters(ECIES_CONSTANTS.DEFAULT_SCHEME)


def configure_logging(
    level: Optional[LevelSpec] = None,
    log_dir: Optional[str] = None,
    console_output: bool = True,
) -> logging.Logger:
    """
    Reconfigure the toolkit logger at runtime.

    Replaces the handlers set up from ECIES_LOG_LEVEL / ECIES_LOG_DIR at
    import; loggers already held by library modules pick up the change.

    Args:
        level: int or level name, None keeps the current level
        log_dir: Directory for ECIES.log, None for no file output
        console_output: Also write to stderr

    Example:
        >>> configure_logging("debug", log_dir="./logs")
    """
    return ECIESLogger.configure(
        ECIES_CONSTANTS.LOGGER_NAME,
        level=level,
        log_dir=log_dir,
        console_output=console_output,
    )


def set_log_level(level: LevelSpec) -> int:
    """Change the toolkit log level only. Returns the resolved level."""
    return ECIESLogger.set_level(ECIES_CONSTANTS.LOGGER_NAME, level)
