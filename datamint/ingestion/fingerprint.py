import hashlib

DIGEST_HEX_LENGTH = 64


def fingerprint(content: bytes) -> str:
    """SHA-256 hex digest of the raw upload bytes.

    Always hash the bytes as received; hashing a re-serialized table would
    change the digest whenever quoting or whitespace differs.
    """
    return hashlib.sha256(content).hexdigest()
