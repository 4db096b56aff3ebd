"""
Test suite for configuration, parameters, logging and the error taxonomy
"""

import dataclasses
import logging

import pytest

import ecies.security.ecies as ecies_module
from ecies.config import (
    ECIES_CONSTANTS,
    ECIES_SCHEMES,
    configure_logging,
    get_default_parameters,
    get_scheme_parameters,
    set_log_level,
)
from ecies.config.ecies_config import _env_log_level
from ecies.core.types import HashAlgorithm, SymmetricCipher
from ecies.errors import (
    AllocationFailed,
    BufferTooSmall,
    DecryptionFailed,
    ECIESError,
    EncryptionFailed,
    ErrorReason,
    KeyAgreementFailed,
    KeyGenerationFailed,
    MacComputationFailed,
    MacVerificationFailed,
    MalformedEnvelope,
    MalformedPoint,
)
from ecies.messages.types import DerivedKeyMaterial, ECIESParameters
from ecies.security.ecies import ecies_decrypt_envelope, ecies_do_encrypt
from ecies.utils.logger import ECIESLogger, parse_level


class TestParameters:
    """ECIESParameters validation"""

    def test_defaults(self):
        params = ECIESParameters()

        assert params.kdf_md is HashAlgorithm.SHA256
        assert params.mac_md is HashAlgorithm.SHA256
        assert params.sym_cipher is SymmetricCipher.AES_128_CBC
        assert not params.is_keystream_mode

    def test_keystream_requires_opt_in(self):
        with pytest.raises(ValueError):
            ECIESParameters(sym_cipher=None)

        params = ECIESParameters(sym_cipher=None, allow_keystream=True)
        assert params.is_keystream_mode

    def test_key_lengths(self):
        cipher = ECIESParameters(mac_md=HashAlgorithm.SHA512, sym_cipher=SymmetricCipher.AES_256_CBC)
        keystream = ECIESParameters(sym_cipher=None, allow_keystream=True)

        assert cipher.enc_key_length(1000) == 32
        assert cipher.mac_key_length == 64
        assert cipher.mac_tag_length == 64
        assert keystream.enc_key_length(2) == 2
        assert keystream.enc_key_length(0) == 0

    @pytest.mark.parametrize("kwargs", [
        {"kdf_md": "sha256"},
        {"mac_md": None},
        {"sym_cipher": "aes128-cbc"},
    ])
    def test_type_checks(self, kwargs):
        with pytest.raises(TypeError):
            ECIESParameters(**kwargs)

    def test_frozen(self):
        params = ECIESParameters()
        with pytest.raises(dataclasses.FrozenInstanceError):
            params.sym_cipher = None

    def test_describe(self):
        assert ECIESParameters().describe() == "x963-sha256/aes128-cbc/hmac-sha256"
        assert "xor" in ECIESParameters(sym_cipher=None, allow_keystream=True).describe()


class TestDerivedKeyMaterial:
    """Positional split and wiping"""

    def test_split(self):
        material = DerivedKeyMaterial(bytearray(range(48)), 16, 32)

        assert bytes(material.enc_key) == bytes(range(16))
        assert bytes(material.mac_key) == bytes(range(16, 48))

    def test_wiped_on_exit(self):
        with DerivedKeyMaterial(bytearray(b"\x01" * 48), 16, 32) as material:
            enc_key = material.enc_key
        assert material.buffer == bytearray(48)
        assert bytes(enc_key) == bytes(16)

    def test_wiped_on_exception(self):
        material = DerivedKeyMaterial(bytearray(b"\x01" * 48), 16, 32)
        with pytest.raises(RuntimeError):
            with material:
                raise RuntimeError("boom")
        assert material.buffer == bytearray(48)

    def test_length_mismatch(self):
        buffer = bytearray(b"\x01" * 10)
        with pytest.raises(ValueError):
            DerivedKeyMaterial(buffer, 16, 32)
        assert buffer == bytearray(10)

    def test_repr_hides_key(self):
        material = DerivedKeyMaterial(bytearray(b"\x7f" * 48), 16, 32)
        assert "127" not in repr(material)
        assert "x7f" not in repr(material)


class TestSchemeRegistry:
    """Named schemes and defaults"""

    def test_default_parameters(self):
        assert get_default_parameters() is get_scheme_parameters(ECIES_CONSTANTS.DEFAULT_SCHEME)

    def test_lookup_is_case_insensitive(self):
        assert get_scheme_parameters("X963-SHA256-XOR-HMAC-SHA256").is_keystream_mode

    def test_unknown_scheme(self):
        with pytest.raises(ValueError):
            get_scheme_parameters("rsa-oaep")

    def test_scheme_names_match_parameters(self):
        for name, params in ECIES_SCHEMES.items():
            kdf, cipher, mac = name.split("-")[1], name.split("-")[2], name.split("-")[-1]
            assert params.kdf_md.value == kdf
            assert params.mac_md.value == mac
            if cipher == "xor":
                assert params.is_keystream_mode
            else:
                assert params.sym_cipher.value.replace("-", "") == cipher

    def test_env_log_level(self, monkeypatch):
        monkeypatch.setenv("ECIES_TEST_LEVEL", "debug")
        assert _env_log_level("ECIES_TEST_LEVEL", logging.WARNING) == logging.DEBUG

        monkeypatch.setenv("ECIES_TEST_LEVEL", "not-a-level")
        assert _env_log_level("ECIES_TEST_LEVEL", logging.WARNING) == logging.WARNING

        monkeypatch.delenv("ECIES_TEST_LEVEL")
        assert _env_log_level("ECIES_TEST_LEVEL", logging.ERROR) == logging.ERROR


class TestLogger:
    """Toolkit logger configuration"""

    @pytest.fixture(autouse=True)
    def restore_toolkit_logger(self):
        yield
        configure_logging(level=ECIES_CONSTANTS.LOG_LEVEL, log_dir=ECIES_CONSTANTS.LOG_DIR)

    @pytest.fixture
    def mac_failure(self, recipient_key, other_key, cipher_params):
        """Run a decryption that fails MAC verification"""
        def _run():
            envelope = ecies_do_encrypt(cipher_params, b"do not log me", recipient_key.public_key())
            with pytest.raises(MacVerificationFailed):
                ecies_decrypt_envelope(envelope, cipher_params, other_key)
        return _run

    def test_cached(self):
        first = ECIESLogger.get_logger("ECIES_TEST_CACHE")
        second = ECIESLogger.get_logger("ECIES_TEST_CACHE", level=logging.DEBUG)

        assert first is second
        assert first.level == logging.WARNING
        assert not first.propagate

    def test_parse_level(self):
        assert parse_level(logging.ERROR, logging.WARNING) == logging.ERROR
        assert parse_level("debug", logging.WARNING) == logging.DEBUG
        assert parse_level(" Info ", logging.WARNING) == logging.INFO
        assert parse_level(None, logging.ERROR) == logging.ERROR
        assert parse_level("", logging.ERROR) == logging.ERROR
        with pytest.raises(ValueError):
            parse_level("verbose", logging.WARNING)

    def test_library_logger_follows_configure(self):
        configured = configure_logging(level="info", console_output=False)

        assert configured is ecies_module.logger
        assert ecies_module.logger.level == logging.INFO

    def test_failures_written_to_log_file(self, tmp_path, mac_failure):
        logger = configure_logging(level="INFO", log_dir=str(tmp_path), console_output=False)
        mac_failure()
        for handler in logger.handlers:
            handler.flush()

        content = (tmp_path / f"{ECIES_CONSTANTS.LOGGER_NAME}.log").read_text(encoding="utf-8")
        assert "[ECIES] [INFO] ECIES decryption failed (mac_verification_failed)" in content
        assert "do not log me" not in content

    def test_silent_at_default_level(self, tmp_path, mac_failure):
        configure_logging(level=logging.WARNING, log_dir=str(tmp_path), console_output=False)
        mac_failure()

        assert (tmp_path / f"{ECIES_CONSTANTS.LOGGER_NAME}.log").read_text(encoding="utf-8") == ""

    def test_reconfigure_closes_log_file(self, tmp_path):
        logger = configure_logging(log_dir=str(tmp_path), console_output=False)
        file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1

        configure_logging(console_output=False)

        assert file_handlers[0].stream is None
        assert [type(h) for h in logger.handlers] == [logging.NullHandler]

    def test_set_log_level(self, caplog, mac_failure):
        assert set_log_level("debug") == logging.DEBUG
        assert ecies_module.logger.level == logging.DEBUG

        ecies_module.logger.propagate = True
        try:
            with caplog.at_level(logging.DEBUG, logger=ECIES_CONSTANTS.LOGGER_NAME):
                mac_failure()
        finally:
            ecies_module.logger.propagate = False

        assert "Encrypted 13 bytes" in caplog.text
        assert "mac_verification_failed" in caplog.text
        assert "do not log me" not in caplog.text

    def test_set_log_level_rejects_unknown_name(self):
        with pytest.raises(ValueError):
            set_log_level("loud")


class TestErrorTaxonomy:
    """Structured errors"""

    ALL_ERRORS = [
        KeyGenerationFailed,
        KeyAgreementFailed,
        MalformedPoint,
        MalformedEnvelope,
        EncryptionFailed,
        DecryptionFailed,
        MacVerificationFailed,
        MacComputationFailed,
        AllocationFailed,
    ]

    def test_distinct_reasons(self):
        reasons = [error.reason for error in self.ALL_ERRORS] + [BufferTooSmall.reason]
        assert len(set(reasons)) == len(ErrorReason)

    @pytest.mark.parametrize("error", ALL_ERRORS)
    def test_terminal_errors(self, error):
        instance = error()

        assert isinstance(instance, ECIESError)
        assert isinstance(instance, ValueError)
        assert not instance.recoverable
        assert str(instance)

    def test_buffer_too_small(self):
        error = BufferTooSmall(required_length=48, available_length=16)

        assert error.recoverable
        assert error.required_length == 48
        assert "48" in str(error)
        assert error.reason is ErrorReason.BUFFER_TOO_SMALL
