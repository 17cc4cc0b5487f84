"""Tests for environment-driven configuration."""

import hashlib
import logging

import pytest

from modrinthpy.config import ModrinthConfig
from modrinthpy.routes import MODRINTHAPIURLS
from modrinthpy.utils import (
    DEFAULT_USER_AGENT,
    clamp,
    fingerprint_from_bytes,
    fingerprint_from_file,
    logger_setup,
)


class TestModrinthConfig:
    """ModrinthConfig.from_env()"""

    def test_defaults(self):
        config = ModrinthConfig.from_env({})
        assert config.token is None
        assert config.user_agent == DEFAULT_USER_AGENT
        assert config.base_url == MODRINTHAPIURLS.BASE_URL
        assert config.timeout == 15.0

    def test_reads_variables(self):
        config = ModrinthConfig.from_env({
            "MODRINTH_TOKEN": "mrp_abc",
            "MODRINTH_AGENT": "me/launcher/1.0",
            "MODRINTH_API_BASE": "https://staging-api.modrinth.com/v2/",
            "MODRINTH_TIMEOUT": "2.5",
        })
        assert config.token == "mrp_abc"
        assert config.user_agent == "me/launcher/1.0"
        assert config.base_url == "https://staging-api.modrinth.com/v2"
        assert config.timeout == 2.5

    def test_empty_values_are_ignored(self):
        assert ModrinthConfig.from_env({"MODRINTH_TOKEN": ""}).token is None


class TestUtils:
    """Small helpers shared across modules."""

    def test_fingerprint(self):
        assert fingerprint_from_bytes(b"abc") == "a9993e364706816aba3e25717850c26c9cd0d89d"
        assert len(fingerprint_from_bytes(b"abc", "SHA512")) == 128

    def test_fingerprint_from_file(self, tmp_path):
        jar = tmp_path / "sodium.jar"
        content = b"jar-bytes" * 20000
        jar.write_bytes(content)

        assert fingerprint_from_file(jar) == hashlib.sha1(content).hexdigest()
        assert fingerprint_from_file(str(jar), "sha512") == hashlib.sha512(content).hexdigest()
        assert fingerprint_from_file(jar, chunk_size=7) == fingerprint_from_bytes(content)

    def test_fingerprint_from_file_rejects_unknown_algorithm(self, tmp_path):
        jar = tmp_path / "a.jar"
        jar.write_bytes(b"x")
        with pytest.raises(ValueError):
            fingerprint_from_file(jar, "md5")

    def test_fingerprint_from_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            fingerprint_from_file(tmp_path / "missing.jar")

    def test_clamp(self):
        assert clamp(0, 1, 100) == 1
        assert clamp(250, 1, 100) == 100
        assert clamp(42, 1, 100) == 42

    def test_logger_setup_is_idempotent(self):
        logger = logger_setup("modrinthpy.tests.logging", level=logging.DEBUG)
        handlers = len(logger.handlers)
        assert logger_setup("modrinthpy.tests.logging") is logger
        assert len(logger.handlers) == handlers
