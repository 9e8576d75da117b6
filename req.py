# Text Encryption Tool - Python + CustomTkinter (AES-256-GCM)
# -----------------------------------------------------------
# Requirements:
#   pip install customtkinter cryptography
#   pip install pytest            (tests only)
#
# Features:
# - AES-256-GCM encryption with PBKDF2-HMAC(SHA-256) key derivation
# - Per-message random salt & nonce from the OS CSPRNG (100k PBKDF2 iterations)
# - Output is a single base64 string that can be pasted anywhere
# - One undifferentiated error for wrong password / corrupted / tampered input
# - Password field is cleared after every submit
# - Optional copy-to-clipboard after encryption, show/hide password, light/dark toggle
#
# Blob format (before base64, standard alphabet with padding):
#   [16]       salt
#   [12]       nonce
#   [N]        ciphertext (N = UTF-8 length of the plaintext)
#   [16]       GCM tag
#
# Any valid blob is at least 44 bytes; empty plaintext gives exactly 44.
# PRF, iteration count and key length are part of the format: changing any of them
# makes existing blobs fail authentication.
