"""
test_properties.py - Property-based testing of the stamp codec with Hypothesis

Covers:
- Round-trip: parse(str(stamp)) == stamp for every variant
- Bit independence of the three properties flags
- Scheme strictness
- Tag exhaustiveness
- Length overflow rejection
- Decoder safety on arbitrary bytes

Run with:
    pytest tests/test_properties.py -v
    HYPOTHESIS_PROFILE=ci pytest tests/test_properties.py
"""

import base64

import pytest
from hypothesis import assume, given
from hypothesis import strategies as st

from dnsstamp import (
    DNSCrypt,
    DOH,
    DOT,
    ODOH,
    AnonymizedRelay,
    ODOHRelay,
    Plain,
    Properties,
    Protocol,
    DecodeError,
    EncodeError,
    UnsupportedProtocolError,
    ERR_FIELD_TOO_LONG,
    ERR_INVALID_SCHEME,
    decode_payload,
    from_bits,
    parse,
    to_bits,
)


# =============================================================================
# Strategies
# =============================================================================

# Surrogates cannot be UTF-8 encoded; exclude category Cs.
text_field = st.text(
    alphabet=st.characters(exclude_categories=("Cs",)),
    max_size=60,
)

hex_field = st.binary(max_size=255).map(bytes.hex)

properties = st.builds(Properties, st.booleans(), st.booleans(), st.booleans())

stamps = st.one_of(
    st.builds(DNSCrypt, addr=text_field, pk=hex_field,
              provider_name=text_field, props=properties),
    st.builds(DOH, addr=text_field, hash=hex_field, host_name=text_field,
              path=text_field, props=properties),
    st.builds(DOT, addr=text_field, hash=hex_field, host_name=text_field,
              props=properties),
    st.builds(Plain, addr=text_field, props=properties),
    st.builds(ODOH, host_name=text_field, path=text_field, props=properties),
    st.builds(AnonymizedRelay, addr=text_field),
    st.builds(ODOHRelay, addr=text_field, hash=hex_field, host_name=text_field,
              path=text_field, props=properties),
)

KNOWN_TAGS = {int(p) for p in Protocol}


# =============================================================================
# Round-trip
# =============================================================================

class TestRoundTrip:

    @given(stamps)
    def test_parse_inverts_encode(self, stamp):
        assert parse(str(stamp)) == stamp

    @given(stamps)
    def test_uri_alphabet(self, stamp):
        uri = str(stamp)
        assert uri.startswith("sdns://")
        body = uri[len("sdns://"):]
        assert set(body) <= set(
            "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_")


# =============================================================================
# Properties byte
# =============================================================================

class TestPropertiesBits:

    @given(properties)
    def test_bits_round_trip(self, props):
        assert from_bits(to_bits(props)) == props

    @given(properties)
    def test_reserved_bits_zero(self, props):
        assert to_bits(props) & 0xF8 == 0

    @given(st.integers(min_value=0, max_value=255))
    def test_from_bits_total(self, byte):
        assert to_bits(from_bits(byte)) == byte & 0x07


# =============================================================================
# Rejection properties
# =============================================================================

class TestRejection:

    @given(st.text(max_size=40))
    def test_scheme_strictness(self, text):
        assume(not text.startswith("sdns://"))
        with pytest.raises(DecodeError) as excinfo:
            parse(text)
        assert excinfo.value.code == ERR_INVALID_SCHEME

    @given(st.integers(min_value=0, max_value=255), st.binary(max_size=64))
    def test_unknown_tags(self, tag, rest):
        assume(tag not in KNOWN_TAGS)
        with pytest.raises(UnsupportedProtocolError):
            decode_payload(bytes([tag]) + rest)

    @given(st.integers(min_value=256, max_value=600))
    def test_length_overflow(self, n):
        with pytest.raises(EncodeError) as excinfo:
            str(Plain("x" * n))
        assert excinfo.value.code == ERR_FIELD_TOO_LONG


# =============================================================================
# Decoder safety
# =============================================================================

class TestDecoderSafety:

    @given(st.binary(max_size=300))
    def test_arbitrary_payload_decodes_or_raises_decode_error(self, data):
        try:
            decode_payload(data)
        except DecodeError:
            pass

    @given(st.binary(max_size=300))
    def test_arbitrary_uri_decodes_or_raises_decode_error(self, data):
        uri = "sdns://" + base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")
        try:
            parse(uri)
        except DecodeError:
            pass
