"""
Tests for agency access and runtime configuration
"""

import pytest
from settlement.access import DenyAllAuthorizer, StaticPassphraseAuthorizer, build_authorizer
from settlement.config import Settings, load_settings


class TestStaticPassphraseAuthorizer:

    def test_matching_credential(self):
        assert StaticPassphraseAuthorizer("s3cret").has_elevated_access("s3cret") == True

    @pytest.mark.parametrize("credential", ["wrong", "", None, "s3cret "])
    def test_rejected_credentials(self, credential):
        assert StaticPassphraseAuthorizer("s3cret").has_elevated_access(credential) == False

    def test_empty_passphrase_denies(self):
        assert StaticPassphraseAuthorizer("").has_elevated_access("") == False


class TestBuildAuthorizer:

    def test_unset_passphrase(self):
        authorizer = build_authorizer("")

        assert isinstance(authorizer, DenyAllAuthorizer)
        assert authorizer.has_elevated_access("anything") == False

    def test_configured_passphrase(self):
        authorizer = build_authorizer("s3cret")

        assert authorizer.has_elevated_access("s3cret") == True


class TestLoadSettings:

    def test_defaults(self):
        assert load_settings({}) == Settings()

    def test_from_environment(self):
        settings = load_settings({
            "ENVIRONMENT": "prod",
            "PORT": "9000",
            "SETTLEMENT_POLICY": "volume_tiered",
            "AGENCY_PASSPHRASE": "s3cret",
            "LOG_LEVEL": "debug",
        })

        assert settings.environment == "prod"
        assert settings.port == 9000
        assert settings.default_policy == "volume_tiered"
        assert settings.agency_passphrase == "s3cret"
        assert settings.log_level == "DEBUG"
