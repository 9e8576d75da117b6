import base64
import binascii
import os

from cryptography.exceptions import InternalError, InvalidTag, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

# -------------------- Format constants --------------------
SALT_LEN = 16
NONCE_LEN = 12
TAG_LEN = 16
KEY_LEN = 32  # AES-256
PBKDF2_ITER = 100_000
MIN_BLOB_LEN = SALT_LEN + NONCE_LEN + TAG_LEN  # empty plaintext


# -------------------- Errors --------------------
class TextCipherError(Exception):
    """Base class for every failure raised by encrypt/decrypt."""

    user_message = "Operation failed."


class InvalidInput(TextCipherError, ValueError):
    user_message = "Invalid input. Enter a non-empty password."


class MalformedInput(TextCipherError, ValueError):
    user_message = "Input is not a valid encrypted message."


class AuthenticationFailure(TextCipherError):
    """Wrong password, corrupted data and tampering all end up here, on purpose
    with the same message."""

    user_message = "Decryption failed: wrong password or corrupted data."

    def __init__(self):
        super().__init__(self.user_message)


class EncodingFailure(TextCipherError, ValueError):
    user_message = "Decrypted data is not valid text."


class BackendFailure(TextCipherError):
    user_message = "Cryptographic backend error."


_BACKEND_ERRORS = (UnsupportedAlgorithm, InternalError, OverflowError)


# -------------------- Helpers --------------------
def random_bytes(length: int) -> bytes:
    # OS CSPRNG only, never the `random` module
    return os.urandom(length)


def _password_bytes(password) -> bytearray:
    # private mutable copy so it can be wiped after derivation
    if isinstance(password, str):
        password = bytearray(password.encode("utf-8"))
    elif isinstance(password, (bytes, bytearray, memoryview)):
        password = bytearray(password)
    else:
        raise InvalidInput("Password must be str or bytes.")
    if not password:
        raise InvalidInput("Password must be a non-empty string.")
    return password


def wipe(buffer: bytearray) -> None:
    """Zero a mutable password buffer in place.

    Best effort only: ``str`` and ``bytes`` are immutable, so for those the
    caller can do no more than drop the reference.
    """
    for i in range(len(buffer)):
        buffer[i] = 0


def _check_len(name: str, value: bytes, expected: int):
    if len(value) != expected:
        raise InvalidInput(f"{name} must be {expected} bytes, got {len(value)}.")


# -------------------- Key derivation --------------------
def derive_key(password: bytes, salt: bytes) -> bytes:
    if not password:
        raise InvalidInput("Password must be a non-empty string.")
    _check_len("Salt", salt, SALT_LEN)
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_LEN,
        salt=salt,
        iterations=PBKDF2_ITER,
    )
    try:
        return kdf.derive(password)
    except _BACKEND_ERRORS as e:
        raise BackendFailure(f"Key derivation failed: {type(e).__name__}") from e


# -------------------- AEAD --------------------
def seal(plaintext: bytes, key: bytes, nonce: bytes) -> tuple[bytes, bytes]:
    """AES-256-GCM without associated data. Returns ``(ciphertext, tag)``."""
    _check_len("Key", key, KEY_LEN)
    _check_len("Nonce", nonce, NONCE_LEN)
    try:
        encryptor = Cipher(algorithms.AES(key), modes.GCM(nonce)).encryptor()
        ct = encryptor.update(plaintext) + encryptor.finalize()
    except _BACKEND_ERRORS as e:
        raise BackendFailure(f"Encryption failed: {type(e).__name__}") from e
    return ct, encryptor.tag


def open_sealed(ciphertext: bytes, tag: bytes, key: bytes, nonce: bytes) -> bytes:
    _check_len("Key", key, KEY_LEN)
    _check_len("Nonce", nonce, NONCE_LEN)
    _check_len("Tag", tag, TAG_LEN)
    try:
        decryptor = Cipher(algorithms.AES(key), modes.GCM(nonce, tag)).decryptor()
        pt = decryptor.update(ciphertext) + decryptor.finalize()
    except InvalidTag:
        raise AuthenticationFailure() from None
    except _BACKEND_ERRORS as e:
        raise BackendFailure(f"Decryption failed: {type(e).__name__}") from e
    return pt


# -------------------- Blob format --------------------
# salt(16) || nonce(12) || ciphertext(N) || tag(16), base64 with padding
def pack(salt: bytes, nonce: bytes, ciphertext: bytes, tag: bytes) -> bytes:
    return salt + nonce + ciphertext + tag


def unpack(blob: bytes):
    if len(blob) < MIN_BLOB_LEN:
        raise MalformedInput(f"Blob too short: {len(blob)} bytes (minimum {MIN_BLOB_LEN}).")
    ct_end = len(blob) - TAG_LEN
    salt = blob[:SALT_LEN]
    nonce = blob[SALT_LEN:SALT_LEN + NONCE_LEN]
    ciphertext = blob[SALT_LEN + NONCE_LEN:ct_end]
    tag = blob[ct_end:]
    return salt, nonce, ciphertext, tag


def encode_blob(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


def decode_blob(text: str) -> bytes:
    try:
        return base64.b64decode(text.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise MalformedInput("Invalid Base64") from e


# -------------------- Top-level operations --------------------
def encrypt(plaintext: str, password) -> str:
    pw = _password_bytes(password)
    try:
        try:
            data = plaintext.encode("utf-8")
        except UnicodeEncodeError:
            raise EncodingFailure("Plaintext cannot be encoded as UTF-8.") from None
        salt = random_bytes(SALT_LEN)
        nonce = random_bytes(NONCE_LEN)
        key = derive_key(pw, salt)
    finally:
        wipe(pw)
    ct, tag = seal(data, key, nonce)
    del key, data
    return encode_blob(pack(salt, nonce, ct, tag))


def decrypt(blob: str, password) -> str:
    pw = _password_bytes(password)
    try:
        salt, nonce, ct, tag = unpack(decode_blob(blob))
        key = derive_key(pw, salt)
    finally:
        wipe(pw)
    data = open_sealed(ct, tag, key, nonce)
    del key
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        raise EncodingFailure("Decrypted bytes are not valid UTF-8.") from None
