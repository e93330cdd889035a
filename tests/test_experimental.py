"""Tests for the experimental utility endpoints."""

import pytest

from bento import (
    APIResponseError,
    BlacklistData,
    ErrorKind,
    InvalidContentError,
    InvalidEmailError,
    InvalidIPAddressError,
    InvalidNameError,
    InvalidRequestError,
    ValidationData,
    ValidationResponse,
)

from helpers import Recorder

MALFORMED_IPS = ["", "invalid-ip", "256.1.1.1", "1.2.3", "::g"]


class TestBlacklist:
    def test_domain_and_ip(self, make_client):
        recorder = Recorder({"query": "example.com", "results": {"spamhaus": False}})
        client = make_client(recorder)

        result = client.experimental.blacklist(BlacklistData(domain="example.com", ip_address="192.0.2.1"))

        assert result["results"] == {"spamhaus": False}
        assert recorder.last.method == "GET"
        assert recorder.last.url.path.endswith("/experimental/blacklist.json")
        assert recorder.last.url.params["domain"] == "example.com"
        assert recorder.last.url.params["ip"] == "192.0.2.1"

    def test_domain_only(self, make_client):
        recorder = Recorder({})
        client = make_client(recorder)

        client.experimental.blacklist(BlacklistData(domain="example.com"))

        assert "ip" not in recorder.last.url.params

    def test_requires_domain_or_ip(self, offline_client):
        with pytest.raises(InvalidRequestError, match="either domain or IP address"):
            offline_client.experimental.blacklist(BlacklistData())

    @pytest.mark.parametrize("ip", MALFORMED_IPS[1:])
    def test_invalid_ip(self, offline_client, ip):
        with pytest.raises(InvalidIPAddressError) as exc_info:
            offline_client.experimental.blacklist(BlacklistData(ip_address=ip))
        assert exc_info.value.kind is ErrorKind.INVALID_IP_ADDRESS


class TestValidateEmail:
    def test_validate(self, make_client):
        recorder = Recorder({"valid": True})
        client = make_client(recorder)

        result = client.experimental.validate_email(
            ValidationData(
                email_address="user@example.com",
                full_name="Jesse Hanley",
                user_agent="Mozilla/5.0",
                ip_address="2001:db8::1",
            )
        )

        assert result == ValidationResponse(valid=True)
        assert recorder.last.method == "POST"
        params = recorder.last.url.params
        assert params["email"] == "user@example.com"
        assert params["name"] == "Jesse Hanley"
        assert params["user_agent"] == "Mozilla/5.0"
        assert params["ip"] == "2001:db8::1"

    def test_optional_params_omitted(self, make_client):
        recorder = Recorder({"valid": False})
        client = make_client(recorder)

        result = client.experimental.validate_email(ValidationData(email_address="user@example.com"))

        assert result.valid is False
        assert set(recorder.last.url.params.keys()) == {"email", "site_uuid"}

    def test_invalid_email(self, offline_client):
        with pytest.raises(InvalidEmailError):
            offline_client.experimental.validate_email(ValidationData(email_address="invalid-email"))

    def test_invalid_ip(self, offline_client):
        with pytest.raises(InvalidIPAddressError):
            offline_client.experimental.validate_email(
                ValidationData(email_address="user@example.com", ip_address="invalid-ip")
            )

    @pytest.mark.parametrize("body", [{}, {"valid": "yes"}])
    def test_malformed_verdict(self, make_client, body):
        client = make_client(Recorder(body))

        with pytest.raises(APIResponseError):
            client.experimental.validate_email(ValidationData(email_address="user@example.com"))


class TestLookups:
    def test_content_moderation(self, make_client):
        recorder = Recorder({"flagged": False, "categories": {}})
        client = make_client(recorder)

        result = client.experimental.content_moderation("Hello there")

        assert result == {"flagged": False, "categories": {}}
        assert recorder.last.method == "POST"
        assert recorder.last.url.params["content"] == "Hello there"

    def test_content_moderation_requires_content(self, offline_client):
        with pytest.raises(InvalidContentError):
            offline_client.experimental.content_moderation("")

    def test_gender(self, make_client):
        recorder = Recorder({"gender": "male", "confidence": 0.93})
        client = make_client(recorder)

        assert client.experimental.gender("Jesse Hanley")["confidence"] == 0.93
        assert recorder.last.url.path.endswith("/experimental/gender")
        assert recorder.last.url.params["name"] == "Jesse Hanley"

    def test_gender_requires_name(self, offline_client):
        with pytest.raises(InvalidNameError):
            offline_client.experimental.gender("")

    def test_geolocate(self, make_client):
        recorder = Recorder({"city_name": "Sydney", "country_name": "Australia"})
        client = make_client(recorder)

        result = client.experimental.geolocate("203.0.113.7")

        assert result["city_name"] == "Sydney"
        assert recorder.last.method == "GET"
        assert recorder.last.url.params["ip"] == "203.0.113.7"

    @pytest.mark.parametrize("ip", MALFORMED_IPS)
    def test_geolocate_invalid_ip(self, offline_client, ip):
        with pytest.raises(InvalidIPAddressError):
            offline_client.experimental.geolocate(ip)
