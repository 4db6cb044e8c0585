import pytest

from gfcrypt.gf128 import (
    REDUCE_128,
    block2poly,
    coefficients_to_number,
    gf_inverse,
    gf_pow,
    gfdiv,
    gfdiv128,
    gfdiv_blocks,
    gfmul,
    gfmul128,
    gfmul_blocks,
    number_to_coefficients,
    poly2block,
)

ELEMENTS = [1, 2, 0x87, 0xDEADBEEFCAFEBABE, (1 << 127) | 0x1234, (1 << 128) - 1]


@pytest.mark.parametrize(
    "semantic, a, b, expected",
    [
        ("xex", "AgAAAAAAAAAAAAAAAAAAAA==", "ARIAAAAAAAAAAAAAAAAAgA==", "hSQAAAAAAAAAAAAAAAAAAA=="),
        ("xex", "", "ARIAAAAAAAAAAAAAAAAAgA==", "AAAAAAAAAAAAAAAAAAAAAA=="),
        ("xex", "AAAAAAAAAAAAAAAAAAAAAA==", "ARIAAAAAAAAAAAAAAAAAgA==", "AAAAAAAAAAAAAAAAAAAAAA=="),
        ("xex", "/////////////////////w==", "/////////////////////w==", "L0BVVVVVVVVVVVVVVVVVVQ=="),
        ("gcm", "wgAAAAAAAAAAAAAAAAAAAQ==", "QAAAAAAAAAAAAAAAAAAAAA==", "gAAAAAAAAAAAAAAAAAAAAA=="),
        ("gcm", "wAAAAAAAAAAAAAAAAAAAAA==", "wAAAAAAAAAAAAAAAAAAAAA==", "oAAAAAAAAAAAAAAAAAAAAA=="),
    ],
)
def test_gfmul_blocks(semantic, a, b, expected):
    assert gfmul_blocks(semantic, a, b) == expected


def test_gfmul_blocks_invalid_semantic():
    with pytest.raises(ValueError):
        gfmul_blocks("foo", "AAAAAAAAAAAAAAAAAAAAAA==", "AAAAAAAAAAAAAAAAAAAAAA==")


@pytest.mark.parametrize(
    "a, b, expected",
    [
        ("JAAAAAAAAAAAAAAAAAAAAA==", "wAAAAAAAAAAAAAAAAAAAAA==", "OAAAAAAAAAAAAAAAAAAAAA=="),
        ("JAAAAAAAAAAAAAAAAAAAAA==", "JAAAAAAAAAAAAAAAAAAAAA==", "gAAAAAAAAAAAAAAAAAAAAA=="),
    ],
)
def test_gfdiv_blocks(a, b, expected):
    assert gfdiv_blocks(a, b) == expected


@pytest.mark.parametrize(
    "semantic, coefficients, expected",
    [
        ("xex", [12, 127, 0, 9], "ARIAAAAAAAAAAAAAAAAAgA=="),
        ("xex", [127, 12, 127, 0, 9], "ARIAAAAAAAAAAAAAAAAAgA=="),
        ("xex", [], "AAAAAAAAAAAAAAAAAAAAAA=="),
    ],
)
def test_poly2block(semantic, coefficients, expected):
    assert poly2block(semantic, coefficients) == expected


@pytest.mark.parametrize(
    "semantic, block, expected",
    [
        ("xex", "ARIAAAAAAAAAAAAAAAAAgA==", [12, 127, 0, 9]),
        ("xex", "", []),
        ("xex", "AAAAAAAAAAAAAAAAAAAAAA==", []),
        ("gcm", "AAAAAAAAAAAAAAAAAAAAAA==", []),
    ],
)
def test_block2poly(semantic, block, expected):
    assert sorted(block2poly(semantic, block)) == sorted(expected)


@pytest.mark.parametrize("coefficients", [[0], [1, 5, 127], [0, 7, 64, 100]])
def test_gcm_poly_block_round_trip(coefficients):
    block = poly2block("gcm", coefficients)
    assert block2poly("gcm", block) == sorted(coefficients)


def test_poly2block_invalid_semantic():
    with pytest.raises(ValueError):
        poly2block("other", [1])


def test_block2poly_invalid_semantic():
    with pytest.raises(ValueError):
        block2poly("other", "AAAAAAAAAAAAAAAAAAAAAA==")


def test_coefficients_round_trip():
    coefficients = [0, 3, 17, 127]
    assert number_to_coefficients(coefficients_to_number(coefficients)) == coefficients


def test_reduce_polynomial_coefficients():
    assert number_to_coefficients(REDUCE_128) == [0, 1, 2, 7, 128]


@pytest.mark.parametrize("a", ELEMENTS)
@pytest.mark.parametrize("b", ELEMENTS)
def test_gfmul_commutative(a, b):
    assert gfmul128(a, b) == gfmul128(b, a)


@pytest.mark.parametrize("a", ELEMENTS)
def test_gfmul_identity_and_zero(a):
    assert gfmul128(a, 1) == a
    assert gfmul128(a, 0) == 0


@pytest.mark.parametrize("a", ELEMENTS)
def test_inverse_gives_one(a):
    assert gfmul128(a, gf_inverse(a, REDUCE_128)) == 1


@pytest.mark.parametrize("a", ELEMENTS)
@pytest.mark.parametrize("b", ELEMENTS[:3])
def test_division_undoes_multiplication(a, b):
    assert gfdiv128(gfmul128(a, b), b) == a
    assert gfdiv(gfmul(a, b, REDUCE_128), b, REDUCE_128) == a


@pytest.mark.parametrize("a", ELEMENTS)
def test_gf_pow_square(a):
    assert gf_pow(a, 2) == gfmul128(a, a)
    assert gf_pow(a, 0) == 1


@pytest.mark.parametrize("a", ELEMENTS[:4])
def test_gf_pow_frobenius(a):
    assert gf_pow(a, 1 << 128) == a


@pytest.mark.parametrize("a", ELEMENTS[:4])
def test_gf_pow_square_root(a):
    assert gf_pow(gf_pow(a, 2), 1 << 127) == a