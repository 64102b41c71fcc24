import string
import time

import pytest

from shortcrypt.codec import BitCodec, QR_ALPHANUMERIC, URL_SAFE
from shortcrypt.errors import InvalidCharacter, InvalidLength, ShortCryptError

BODY = bytes.fromhex("2c8331d2d94535d8")


def test_alphabet_sizes():
    assert URL_SAFE.bits == 6
    assert QR_ALPHANUMERIC.bits == 5
    assert set(QR_ALPHANUMERIC.alphabet) <= set(string.ascii_uppercase + string.digits)
    assert set(URL_SAFE.alphabet) <= set(string.ascii_letters + string.digits + "-_")


def test_bad_alphabets_rejected():
    with pytest.raises(ValueError):
        BitCodec("ABC")
    with pytest.raises(ValueError):
        BitCodec("AABB")


def test_known_url_encoding():
    assert URL_SAFE.encode(8, BODY) == "gsgzHS2UU12A"
    assert URL_SAFE.decode("gsgzHS2UU12A") == (8, BODY)


def test_known_qr_encoding():
    assert QR_ALPHANUMERIC.encode(8, BODY) == "QLEDGHJNSRJV3A"
    assert QR_ALPHANUMERIC.decode("QLEDGHJNSRJV3A") == (8, BODY)


def test_empty_body_is_one_symbol():
    assert URL_SAFE.encode(8, b"") == "g"
    assert QR_ALPHANUMERIC.encode(8, b"") == "Q"
    assert URL_SAFE.decode("g") == (8, b"")
    assert QR_ALPHANUMERIC.decode("Q") == (8, b"")


@pytest.mark.parametrize("codec", [URL_SAFE, QR_ALPHANUMERIC], ids=["url", "qr"])
def test_round_trip_every_base_and_length(codec):
    for base in range(16):
        for length in range(0, 21):
            body = bytes((base * 31 + i * 7) & 0xFF for i in range(length))
            text = codec.encode(base, body)
            assert len(text) == codec.encoded_length(length)
            assert codec.decode(text) == (base, body)


@pytest.mark.parametrize("length,expected", [(0, 1), (1, 2), (2, 4), (3, 5), (8, 12)])
def test_url_lengths(length, expected):
    assert URL_SAFE.encoded_length(length) == expected


@pytest.mark.parametrize("length,expected", [(0, 1), (1, 3), (2, 4), (3, 6), (8, 14)])
def test_qr_lengths(length, expected):
    assert QR_ALPHANUMERIC.encoded_length(length) == expected


def test_encode_rejects_base_out_of_range():
    with pytest.raises(ValueError):
        URL_SAFE.encode(16, b"x")


def test_url_output_needs_no_percent_encoding():
    body = bytes(range(256))
    text = URL_SAFE.encode(15, body)
    unreserved = set(string.ascii_letters + string.digits + "-._~")
    assert set(text) <= unreserved


def test_qr_output_is_uppercase_and_digits():
    text = QR_ALPHANUMERIC.encode(15, bytes(range(256)))
    assert text == text.upper()
    assert set(text) <= set(string.ascii_uppercase + string.digits)


def test_invalid_character():
    with pytest.raises(InvalidCharacter) as exc:
        URL_SAFE.decode("gsgz+S2UU12A")
    assert exc.value.char == "+"
    assert exc.value.position == 4


def test_qr_decoder_is_case_sensitive():
    with pytest.raises(InvalidCharacter):
        QR_ALPHANUMERIC.decode("qledghjnsrjv3a")


def test_url_text_through_qr_decoder():
    with pytest.raises(InvalidCharacter):
        QR_ALPHANUMERIC.decode("gsgzHS2UU12A")


def test_qr_text_with_foreign_symbol_through_url_decoder():
    with pytest.raises(InvalidCharacter):
        URL_SAFE.decode("QLEDGHJNSRJV3A=")


@pytest.mark.parametrize("codec,text", [
    (URL_SAFE, ""),
    (URL_SAFE, "AAA"),
    (QR_ALPHANUMERIC, ""),
    (QR_ALPHANUMERIC, "AA"),
    (QR_ALPHANUMERIC, "AAAAA"),
])
def test_invalid_length(codec, text):
    with pytest.raises(InvalidLength) as exc:
        codec.decode(text)
    assert exc.value.length == len(text)


def test_nonzero_padding_rejected():
    # 'h' and 'R' carry a set bit in the padding position
    with pytest.raises(InvalidCharacter):
        URL_SAFE.decode("h")
    with pytest.raises(InvalidCharacter):
        QR_ALPHANUMERIC.decode("R")


def test_errors_share_a_base_class():
    for text in ("", "*"):
        with pytest.raises(ShortCryptError):
            URL_SAFE.decode(text)
        with pytest.raises(ValueError):
            URL_SAFE.decode(text)


def test_decode_requires_str():
    with pytest.raises(TypeError):
        URL_SAFE.decode(b"gsgzHS2UU12A")


def test_encode_rejects_bool_base():
    with pytest.raises(ValueError):
        URL_SAFE.encode(True, b"x")


@pytest.mark.parametrize("codec", [URL_SAFE, QR_ALPHANUMERIC], ids=["url", "qr"])
def test_large_body_is_linear_time(codec):
    body = bytes(i & 0xFF for i in range(200_000))
    start = time.perf_counter()
    text = codec.encode(11, body)
    assert codec.decode(text) == (11, body)
    assert time.perf_counter() - start < 10
