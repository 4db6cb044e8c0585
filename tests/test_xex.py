import pytest

from gfcrypt.xex import xex, xex_decrypt, xex_encrypt

KEY = "B1ygNO/CyRYIUYhTSgoUysX5Y/wWLi4UiWaVeloUWs0="
TWEAK = "6VXORr+YYHrd2nVe0OlA+Q=="


@pytest.mark.parametrize(
    ("mode", "data", "expected"),
    [
        (
            "encrypt",
            "/aOg4jMocLkBLkDLgkHYtFKc2L9jjyd2WXSSyxXQikpMY9ZRnsJE76e9dW9olZIW",
            "mHAVhRCKPAPx0BcufG5BZ4+/CbneMV/gRvqK5rtLe0OJgpDU5iT7z2P0R7gEeRDO",
        ),
        (
            "decrypt",
            "lr/ItaYGFXCtHhdPndE65yg7u/GIdM9wscABiiFOUH2Sbyc2UFMlIRSMnZrYCW1a",
            "SGV5IHdpZSBrcmFzcyBkYXMgZnVua3Rpb25pZXJ0IGphIG9mZmVuYmFyIGVjaHQu",
        ),
        ("encrypt", "", ""),
    ],
)
def test_xex_cases(mode, data, expected):
    assert xex(mode, KEY, TWEAK, data) == expected


def test_xex_round_trip_strings():
    plain = "SGV5IHdpZSBrcmFzcyBkYXMgZnVua3Rpb25pZXJ0IGphIG9mZmVuYmFyIGVjaHQu"
    encrypted = xex("encrypt", KEY, TWEAK, plain)
    assert xex("decrypt", KEY, TWEAK, encrypted) == plain


def test_xex_round_trip_bytes():
    message = bytes(range(48))
    ciphertext = xex_encrypt(0x1234, 0x5678, message)
    assert len(ciphertext) == 48
    assert ciphertext != message
    assert xex_decrypt(0x1234, 0x5678, ciphertext) == message


def test_invalid_key_length():
    with pytest.raises(ValueError, match="invalid key"):
        xex("encrypt", "AAAAAAAAAAAAAAAAAAAAAA==", TWEAK, "")


def test_invalid_mode():
    with pytest.raises(ValueError):
        xex("scramble", KEY, TWEAK, "")


def test_partial_block_rejected():
    with pytest.raises(ValueError):
        xex("encrypt", KEY, TWEAK, "AAAA")