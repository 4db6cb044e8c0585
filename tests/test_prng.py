import base64

import pytest

from gfcrypt.prng import glasskey_block, glasskey_prng


def test_glasskey_prng_task():
    blocks = glasskey_prng("T01HV1RG", "ur1EoxDElJs=", [4, 8, 13, 12, 1, 9])
    assert blocks == [
        "9q32ZQ==",
        "r2I4mx+M13E=",
        "RvMXtSbjaKkuBXoUsQ==",
        "gwdanlsoBDPlMuzk",
        "ZQ==",
        "P3ixhiNIbxur",
    ]


def test_pieces_concatenate_to_one_stream():
    split = glasskey_prng("T01HV1RG", "ur1EoxDElJs=", [4, 8, 40])
    whole = glasskey_prng("T01HV1RG", "ur1EoxDElJs=", [52])
    joined = b"".join(base64.b64decode(piece) for piece in split)
    assert joined == base64.b64decode(whole[0])
    assert len(joined) == 52


def test_zero_length_gives_empty_block():
    assert glasskey_prng("T01HV1RG", "ur1EoxDElJs=", [0, 4]) == ["", "9q32ZQ=="]


def test_block_is_32_bytes_and_depends_on_counter():
    first = glasskey_block(b"key material", 0)
    second = glasskey_block(b"key material", 1)
    assert len(first) == 32
    assert first != second


def test_negative_length_raises():
    with pytest.raises(ValueError):
        glasskey_prng("T01HV1RG", "ur1EoxDElJs=", [-1])


def test_invalid_base64_raises():
    with pytest.raises(ValueError):
        glasskey_prng("not base64!", "ur1EoxDElJs=", [4])