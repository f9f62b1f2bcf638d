"""Tests for configuration validation."""

import pytest
from pydantic import ValidationError

from image_translator.config import Config


class TestConfigValidators:
    """Tests for Config field validators."""

    def test_defaults(self):
        """Defaults need no environment."""
        cfg = Config()
        assert cfg.DEFAULT_TARGET_LANGUAGE == "es"
        assert cfg.HONOR_PREFERRED_PROVIDER is True
        assert cfg.HTTP_TIMEOUT_SEC is None
        assert cfg.OCR_LANGUAGES == "eng+spa+fra+deu+ita+por+rus+chi_sim+jpn+ara"

    def test_log_level_normalized(self):
        assert Config(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Config(LOG_LEVEL="LOUD")

    def test_environment_normalized(self):
        assert Config(ENVIRONMENT="Development").ENVIRONMENT == "development"

    def test_invalid_environment(self):
        with pytest.raises(ValidationError):
            Config(ENVIRONMENT="qa")

    def test_target_language_validated(self):
        assert Config(DEFAULT_TARGET_LANGUAGE="JA").DEFAULT_TARGET_LANGUAGE == "ja"
        with pytest.raises(ValidationError):
            Config(DEFAULT_TARGET_LANGUAGE="xx")

    @pytest.mark.parametrize("field", ["MAX_IMAGE_SIZE_MB", "SESSION_TTL_SECONDS", "MAX_SESSIONS"])
    def test_limits_must_be_positive(self, field):
        with pytest.raises(ValidationError):
            Config(**{field: 0})


class TestConfigProperties:
    """Tests for helper properties."""

    def test_max_image_bytes(self):
        assert Config(MAX_IMAGE_SIZE_MB=2).max_image_bytes == 2 * 1024 * 1024

    def test_tesseract_config_empty_by_default(self):
        assert Config().tesseract_config == ""

    def test_tesseract_config_options(self):
        cfg = Config(OCR_PAGE_SEG_MODE=7, OCR_CHAR_WHITELIST="0123456789")
        assert cfg.tesseract_config == "--psm 7 -c tessedit_char_whitelist=0123456789"
