import hashlib
import os

import pytest
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from crypto_core import (
    AuthenticationFailure,
    InvalidInput,
    KEY_LEN,
    MalformedInput,
    PBKDF2_ITER,
    decode_blob,
    derive_key,
    encode_blob,
    open_sealed,
    pack,
    seal,
    unpack,
    wipe,
)


def test_derive_key_matches_pbkdf2_hmac_sha256():
    salt = bytes(range(16))
    key = derive_key(b"password", salt)
    assert len(key) == KEY_LEN
    assert key == hashlib.pbkdf2_hmac("sha256", b"password", salt, PBKDF2_ITER, dklen=32)


def test_derive_key_is_deterministic_and_salted():
    salt = os.urandom(16)
    assert derive_key(b"pw", salt) == derive_key(b"pw", salt)
    assert derive_key(b"pw", salt) != derive_key(b"pw", os.urandom(16))
    assert derive_key(b"pw", salt) != derive_key(b"pW", salt)


@pytest.mark.parametrize("salt", [b"", bytes(15), bytes(17)])
def test_derive_key_rejects_bad_salt(salt):
    with pytest.raises(InvalidInput):
        derive_key(b"pw", salt)


def test_derive_key_rejects_empty_password():
    with pytest.raises(InvalidInput):
        derive_key(b"", bytes(16))


def test_seal_matches_aesgcm_without_aad():
    key, nonce = os.urandom(32), os.urandom(12)
    ct, tag = seal(b"attack at dawn", key, nonce)
    assert len(ct) == len(b"attack at dawn")
    assert len(tag) == 16
    assert ct + tag == AESGCM(key).encrypt(nonce, b"attack at dawn", None)


def test_seal_is_deterministic_for_same_nonce():
    key, nonce = os.urandom(32), os.urandom(12)
    assert seal(b"data", key, nonce) == seal(b"data", key, nonce)


def test_seal_open_round_trip():
    key, nonce = os.urandom(32), os.urandom(12)
    ct, tag = seal(b"payload", key, nonce)
    assert open_sealed(ct, tag, key, nonce) == b"payload"


def test_open_with_wrong_key_or_nonce_fails():
    key, nonce = os.urandom(32), os.urandom(12)
    ct, tag = seal(b"payload", key, nonce)
    with pytest.raises(AuthenticationFailure):
        open_sealed(ct, tag, os.urandom(32), nonce)
    with pytest.raises(AuthenticationFailure):
        open_sealed(ct, tag, key, os.urandom(12))
    with pytest.raises(AuthenticationFailure):
        open_sealed(ct, bytes(16), key, nonce)


def test_seal_rejects_bad_lengths():
    with pytest.raises(InvalidInput):
        seal(b"x", bytes(16), bytes(12))
    with pytest.raises(InvalidInput):
        seal(b"x", bytes(32), bytes(16))
    with pytest.raises(InvalidInput):
        open_sealed(b"x", bytes(8), bytes(32), bytes(12))


def test_pack_and_unpack_use_fixed_offsets():
    salt, nonce, ct, tag = b"S" * 16, b"N" * 12, b"ciphertext", b"T" * 16
    blob = pack(salt, nonce, ct, tag)
    assert blob == salt + nonce + ct + tag
    assert blob[0:16] == salt
    assert blob[16:28] == nonce
    assert unpack(blob) == (salt, nonce, ct, tag)


def test_unpack_minimum_blob_has_empty_ciphertext():
    blob = bytes(range(44))
    salt, nonce, ct, tag = unpack(blob)
    assert salt == blob[:16]
    assert nonce == blob[16:28]
    assert ct == b""
    assert tag == blob[28:]


def test_unpack_rejects_short_blob():
    with pytest.raises(MalformedInput):
        unpack(bytes(43))


def test_encode_decode_blob():
    assert encode_blob(b"\x00\x01\x02") == "AAEC"
    assert decode_blob("AAEC") == b"\x00\x01\x02"
    with pytest.raises(MalformedInput):
        decode_blob("AAE")
    with pytest.raises(MalformedInput):
        decode_blob("AA-C")


def test_wipe_zeroes_buffer():
    buf = bytearray(b"hunter2")
    wipe(buf)
    assert buf == bytearray(7)
