"""Tests for the secp256k1 primitive adapter."""

import io

import pytest
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import Prehashed, decode_dss_signature

from yaoguang.crypto import InsufficientEntropyError, InvalidKeyError, secp256k1
from yaoguang.crypto.hashing import keccak256
from yaoguang.types import Bytes32, Bytes65

G_UNCOMPRESSED = bytes.fromhex(
    "04"
    "79be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798"
    "483ada7726a3c4655da4fbfc0e1108a8fd17b448a68554199c47d08ffb10d4b8"
)

TWO_G_UNCOMPRESSED = bytes.fromhex(
    "04"
    "c6047f9441ed7d6d3045406e95c07cd85c778e4b8cef3ca7abac09b95c709ee5"
    "1ae168fea63dc339a3c58419466ceaeef7f632653266d0e1236431a950cfe52a"
)


def _scalar(value: int) -> Bytes32:
    return Bytes32(value.to_bytes(32, "big"))


class TestScalarDraw:
    """Tests for drawing private scalars from a randomness source."""

    def test_zero_input_maps_to_one(self) -> None:
        """An all-zero draw reduces to scalar 1."""
        scalar = secp256k1.scalar_from_randomness(io.BytesIO(b"\x00" * 40))
        assert scalar == _scalar(1)

    def test_consumes_forty_bytes(self) -> None:
        """Each draw consumes bit_size/8 + 8 bytes."""
        source = io.BytesIO(b"\x07" * 40 + b"\xaa")
        secp256k1.scalar_from_randomness(source)
        assert source.read() == b"\xaa"

    def test_result_in_range(self) -> None:
        """The largest 40-byte input reduces as Go's pre-1.20 randFieldElement does."""
        scalar = secp256k1.scalar_from_randomness(io.BytesIO(b"\xff" * 40))
        value = int.from_bytes(scalar, "big")
        assert 1 <= value < secp256k1.N
        assert value == (2**320 - 1) % (secp256k1.N - 1) + 1

    def test_short_source_raises(self) -> None:
        """A source with fewer than 40 bytes is rejected."""
        with pytest.raises(InsufficientEntropyError):
            secp256k1.scalar_from_randomness(io.BytesIO(b"\x00" * 32))


class TestPublicKey:
    """Tests for public key derivation and encoding."""

    def test_scalar_one_is_generator(self) -> None:
        """1 * G is G."""
        assert secp256k1.public_key_from_scalar(_scalar(1)) == G_UNCOMPRESSED

    def test_scalar_two(self) -> None:
        """2 * G matches the known doubling."""
        assert secp256k1.public_key_from_scalar(_scalar(2)) == TWO_G_UNCOMPRESSED

    @pytest.mark.parametrize("value", [0, secp256k1.N, 2**256 - 1])
    def test_out_of_range_scalar_rejected(self, value: int) -> None:
        """Zero and values at or above the order are not keys."""
        with pytest.raises(InvalidKeyError):
            secp256k1.public_key_from_scalar(_scalar(value))

    def test_compress_generator(self) -> None:
        """G has an even y, so its compressed prefix is 0x02."""
        compressed = secp256k1.compress(Bytes65(G_UNCOMPRESSED))
        assert compressed == b"\x02" + G_UNCOMPRESSED[1:33]

    def test_point_arithmetic_agrees_with_library(self) -> None:
        """The affine arithmetic used for recovery agrees with the library."""
        k = 0x1234567890ABCDEF
        x, y = secp256k1._point_mul(k, secp256k1.G)  # type: ignore[misc]
        expected = secp256k1.public_key_from_scalar(_scalar(k))
        assert b"\x04" + x.to_bytes(32, "big") + y.to_bytes(32, "big") == expected

    def test_order_times_generator_is_infinity(self) -> None:
        """n * G is the point at infinity."""
        assert secp256k1._point_mul(secp256k1.N, secp256k1.G) is None


class TestCompactSignatures:
    """Tests for compact recoverable signatures."""

    scalar = _scalar(0xC0FFEE)
    digest = keccak256(b"compact signature test")

    def test_layout(self) -> None:
        """Header is 27..30, r and s are in range and s is low."""
        signature = secp256k1.sign_compact(self.scalar, self.digest)

        assert len(signature) == 65
        assert 27 <= signature[0] <= 30
        r = int.from_bytes(signature[1:33], "big")
        s = int.from_bytes(signature[33:], "big")
        assert 0 < r < secp256k1.N
        assert 0 < s <= secp256k1.N // 2

    def test_deterministic(self) -> None:
        """RFC 6979 nonces make signing repeatable."""
        assert secp256k1.sign_compact(self.scalar, self.digest) == secp256k1.sign_compact(
            self.scalar, self.digest
        )

    def test_recover(self) -> None:
        """Recovery returns the signer's public key."""
        signature = secp256k1.sign_compact(self.scalar, self.digest)
        public_key = secp256k1.public_key_from_scalar(self.scalar)

        assert secp256k1.recover_compact(signature, self.digest) == public_key

    def test_verify(self) -> None:
        """The signer's public key verifies the signature."""
        signature = secp256k1.sign_compact(self.scalar, self.digest)
        public_key = secp256k1.public_key_from_scalar(self.scalar)

        assert secp256k1.verify_compact(public_key, self.digest, signature)

    def test_verify_rejects_other_digest(self) -> None:
        """A signature does not verify for another digest."""
        signature = secp256k1.sign_compact(self.scalar, self.digest)
        public_key = secp256k1.public_key_from_scalar(self.scalar)

        assert not secp256k1.verify_compact(public_key, keccak256(b"other"), signature)

    def test_verify_rejects_other_key(self) -> None:
        """A signature does not verify under someone else's key."""
        signature = secp256k1.sign_compact(self.scalar, self.digest)
        other = secp256k1.public_key_from_scalar(_scalar(2))

        assert not secp256k1.verify_compact(other, self.digest, signature)

    def test_verify_library_signature(self) -> None:
        """A plain ECDSA signature from the library verifies once packed."""
        private_key = ec.derive_private_key(0xC0FFEE, ec.SECP256K1())
        r, s = decode_dss_signature(
            private_key.sign(self.digest, ec.ECDSA(Prehashed(hashes.SHA256())))
        )
        packed = bytes([27]) + r.to_bytes(32, "big") + s.to_bytes(32, "big")
        public_key = secp256k1.public_key_from_scalar(self.scalar)

        assert secp256k1.verify_compact(public_key, self.digest, packed)

    @pytest.mark.parametrize("header", [0, 26, 35, 255])
    def test_bad_header_rejected(self, header: int) -> None:
        """Header bytes outside 27..34 are malformed."""
        signature = bytearray(secp256k1.sign_compact(self.scalar, self.digest))
        signature[0] = header
        public_key = secp256k1.public_key_from_scalar(self.scalar)

        with pytest.raises(ValueError, match="header"):
            secp256k1.recover_compact(bytes(signature), self.digest)
        assert not secp256k1.verify_compact(public_key, self.digest, bytes(signature))

    def test_zero_r_rejected(self) -> None:
        """r = 0 is not a valid signature component."""
        signature = bytes([27]) + b"\x00" * 32 + b"\x01" * 32
        with pytest.raises(ValueError, match="r and s"):
            secp256k1.recover_compact(signature, self.digest)
