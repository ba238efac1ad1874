"""Tests for operation requests, form encoding and voice calls."""

import pytest

from commgate.core.domain.errors import ValidationError
from commgate.core.domain.operations import (
    OperationRequest,
    ProviderResponse,
    VoiceCall,
    encode_form_fields,
)


class TestEncodeFormFields:
    def test_preserves_order_and_stringifies(self):
        pairs = encode_form_fields({"To": "+1555", "Body": "hi", "MaxPrice": 0.5})
        assert pairs == [("To", "+1555"), ("Body", "hi"), ("MaxPrice", "0.5")]

    def test_drops_none_values(self):
        assert encode_form_fields({"To": "+1555", "StatusCallback": None}) == [("To", "+1555")]

    def test_lowercases_booleans(self):
        assert encode_form_fields({"SmartEncoded": True, "Shorten": False}) == [
            ("SmartEncoded", "true"),
            ("Shorten", "false"),
        ]

    def test_lists_become_repeated_keys(self):
        pairs = encode_form_fields({"MediaUrl": ["https://a", "https://b"]})
        assert pairs == [("MediaUrl", "https://a"), ("MediaUrl", "https://b")]

    def test_nested_mapping_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            encode_form_fields({"Attributes": {"nested": True}})
        assert exc_info.value.details == {"field": "Attributes"}


class TestOperationRequest:
    def test_form_pairs(self):
        request = OperationRequest("create_conversation", {"FriendlyName": "Support"})
        assert request.form_pairs() == [("FriendlyName", "Support")]

    def test_empty_fields(self):
        assert OperationRequest("create_conversation").form_pairs() == []


class TestVoiceCall:
    def test_to_request(self):
        call = VoiceCall(to="+1555", from_="+1666", twiml="<Response/>")
        request = call.to_request()
        assert request.operation == "create_call"
        assert request.fields == {"To": "+1555", "From": "+1666", "Twiml": "<Response/>"}

    @pytest.mark.parametrize("field_name", ["to", "from_", "twiml"])
    def test_blank_field_rejected(self, field_name):
        values = {"to": "+1555", "from_": "+1666", "twiml": "<Response/>"}
        values[field_name] = "  "
        with pytest.raises(ValidationError):
            VoiceCall(**values)


class TestProviderResponse:
    def test_empty_when_no_payload(self):
        assert ProviderResponse(status_code=204).is_empty

    def test_not_empty_with_payload(self):
        assert not ProviderResponse(status_code=200, payload={"sid": "SM1"}).is_empty
