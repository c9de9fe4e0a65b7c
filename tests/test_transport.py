"""
Tests for the transport guard
"""
import pytest

from edocument_gate.errors import TransportRejected
from edocument_gate.transport import check_transport, require_secure_transport


class TestCheckTransport:
    """Scheme comparison"""

    @pytest.mark.parametrize("scheme", ["https", "HTTPS", "Https", "hTTpS"])
    def test_any_casing_of_approved_scheme_passes(self, scheme):
        assert check_transport(scheme, "https") is True

    def test_approved_scheme_casing_is_irrelevant(self):
        assert check_transport("https", "HTTPS") is True

    @pytest.mark.parametrize("scheme", ["http", "ws", "httpss", "http s", "", " https"])
    def test_other_schemes_fail(self, scheme):
        assert check_transport(scheme, "https") is False

    def test_none_scheme_fails(self):
        assert check_transport(None, "https") is False

    def test_non_ascii_scheme_does_not_raise(self):
        assert check_transport("httpſ", "https") is False
        assert check_transport("ｈｔｔｐｓ", "https") is False

    def test_empty_approved_scheme_never_matches(self):
        assert check_transport("", "") is False


class TestRequireSecureTransport:
    """Raising variant used by the gate"""

    def test_passes_silently(self):
        assert require_secure_transport("HTTPS", "https") is None

    def test_rejection_carries_fixed_response(self):
        with pytest.raises(TransportRejected) as exc_info:
            require_secure_transport("http", "https")

        assert exc_info.value.status_code == 403
        assert exc_info.value.message == "TLS/SSL Requested"
        assert exc_info.value.request_scheme == "http"
        assert exc_info.value.approved_scheme == "https"
