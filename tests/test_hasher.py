"""
Unit tests for FingerprinterImpl with MD5, SHA-256 and xxHash64.
Verifies lowercase fixed-length hex digests and error results for unreadable files.
"""
import hashlib
import pytest
import xxhash

from dircrawl.core.hasher import (
    ALGORITHMS,
    FingerprinterImpl,
    MD5AlgorithmImpl,
    SHA256AlgorithmImpl,
    XXHashAlgorithmImpl,
    algorithm_for,
)
from dircrawl.core.models import DigestAlgorithm


class TestFingerprinterImpl:
    """Whole-file digests streamed through a fixed buffer."""

    def test_md5_known_value(self, temp_dir):
        path = temp_dir / "f.txt"
        path.write_bytes(b"test")

        result = FingerprinterImpl(MD5AlgorithmImpl()).hash(str(path))

        assert result.ok
        assert result.digest == "098f6bcd4621d373cade4e832627b4f6"

    def test_sha256_known_value(self, temp_dir):
        path = temp_dir / "f.txt"
        path.write_bytes(b"test")

        result = FingerprinterImpl(SHA256AlgorithmImpl()).hash(str(path))

        assert result.digest == "9f86d081884c7d659a2feaa0c55ad015a3bf4f1b2b0b822cd15d6c15b0f00a08"
        assert len(result.digest) == 64

    def test_xxh64_matches_library(self, temp_dir):
        path = temp_dir / "f.txt"
        path.write_bytes(b"test")

        result = FingerprinterImpl(XXHashAlgorithmImpl()).hash(str(path))

        assert result.digest == xxhash.xxh64(b"test").hexdigest()
        assert len(result.digest) == 16

    def test_empty_file_hashes_to_empty_digest(self, temp_dir):
        path = temp_dir / "empty"
        path.write_bytes(b"")

        result = FingerprinterImpl(MD5AlgorithmImpl()).hash(str(path))

        assert result.digest == hashlib.md5(b"").hexdigest()

    def test_small_buffer_gives_same_digest(self, temp_dir):
        """Chunk boundaries must not affect the digest."""
        content = bytes(range(256)) * 50
        path = temp_dir / "data.bin"
        path.write_bytes(content)

        small = FingerprinterImpl(MD5AlgorithmImpl(), buffer_size=7).hash(str(path))
        large = FingerprinterImpl(MD5AlgorithmImpl()).hash(str(path))

        assert small.digest == large.digest == hashlib.md5(content).hexdigest()

    def test_same_content_same_digest(self, temp_dir):
        (temp_dir / "a").write_bytes(b"same content" * 100)
        (temp_dir / "b").write_bytes(b"same content" * 100)
        fingerprinter = FingerprinterImpl.for_digest(DigestAlgorithm.SHA256)

        assert fingerprinter.hash(str(temp_dir / "a")).digest == fingerprinter.hash(str(temp_dir / "b")).digest

    def test_digest_is_lowercase_hex(self, temp_dir):
        path = temp_dir / "f"
        path.write_bytes(b"\xff" * 300)

        for digest in DigestAlgorithm:
            result = FingerprinterImpl.for_digest(digest).hash(str(path))
            assert result.digest == result.digest.lower()
            assert len(result.digest) == digest.hex_length
            int(result.digest, 16)

    def test_missing_file_returns_error(self, temp_dir):
        result = FingerprinterImpl(MD5AlgorithmImpl()).hash(str(temp_dir / "gone.txt"))

        assert not result.ok
        assert result.digest is None
        assert result.message

    def test_directory_returns_error(self, temp_dir):
        result = FingerprinterImpl(MD5AlgorithmImpl()).hash(str(temp_dir))

        assert not result.ok

    def test_non_positive_buffer_rejected(self):
        with pytest.raises(ValueError):
            FingerprinterImpl(MD5AlgorithmImpl(), buffer_size=0)


class TestAlgorithmRegistry:

    def test_every_digest_has_an_implementation(self):
        assert set(ALGORITHMS) == set(DigestAlgorithm)

    def test_algorithm_for_returns_named_impl(self):
        assert algorithm_for(DigestAlgorithm.MD5).name == "md5"
        assert algorithm_for(DigestAlgorithm.SHA256).name == "sha256"
        assert algorithm_for(DigestAlgorithm.XXH64).name == "xxh64"
