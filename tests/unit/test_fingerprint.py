import hashlib

from datamint.ingestion.fingerprint import DIGEST_HEX_LENGTH, fingerprint


class TestFingerprint:
    def test_is_sha256_hex_of_raw_bytes(self, sales_csv: bytes) -> None:
        assert fingerprint(sales_csv) == hashlib.sha256(sales_csv).hexdigest()

    def test_fixed_length(self) -> None:
        assert len(fingerprint(b"")) == DIGEST_HEX_LENGTH
        assert len(fingerprint(b"x" * 10_000)) == DIGEST_HEX_LENGTH

    def test_deterministic(self, sales_csv: bytes) -> None:
        assert fingerprint(sales_csv) == fingerprint(bytes(sales_csv))

    def test_single_byte_change_changes_digest(self, sales_csv: bytes) -> None:
        changed = bytearray(sales_csv)
        changed[-2] ^= 0x01

        assert fingerprint(bytes(changed)) != fingerprint(sales_csv)

    def test_whitespace_differences_matter(self) -> None:
        assert fingerprint(b"a,b\n1,2\n") != fingerprint(b"a, b\n1,2\n")
