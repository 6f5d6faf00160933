"""
Test cases for the crypto module: secp256k1 arithmetic, decompression and hashing
"""

import os
import sys
import random
import pytest

# Add the source directory to path to import the pyecrecover package
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from pyecrecover.crypto.ec import (
    Point, mod_inverse, to_le_bits, multi_scalar_multiplication, bits2scalar
)
from pyecrecover.crypto.secp256k1 import CURVE, generator, decompress
from pyecrecover.crypto.hash import Hasher, hash_personal_message


N = CURVE.N
P = CURVE.P

# 2 * G
G2_X = 0xc6047f9441ed7d6d3045406e95c07cd85c778e4b8cef3ca7abac09b95c709ee5
G2_Y = 0x1ae168fea63dc339a3c58419466ceaeef7f632653266d0e1236431a950cfe52a


def test_generator_on_curve():
    """The generator satisfies the curve equation"""
    assert Point.from_affine(CURVE.G_X, CURVE.G_Y, CURVE) is not None
    assert Point.from_affine(CURVE.G_X, CURVE.G_Y + 1, CURVE) is None


def test_double_and_add():
    """Doubling and self-addition give the known 2G"""
    G = generator()
    assert G.double().to_affine() == (G2_X, G2_Y)
    assert G.add(G).to_affine() == (G2_X, G2_Y)
    assert G.scalar_mult(2).to_affine() == (G2_X, G2_Y)


def test_group_order():
    """n * G is the point at infinity and (n - 1) * G is -G"""
    G = generator()
    assert G.scalar_mult(N).is_infinity()

    neg_g = G.scalar_mult(N - 1).to_affine()
    assert neg_g == (CURVE.G_X, P - CURVE.G_Y)
    assert G.add(Point(neg_g[0], neg_g[1], 1, CURVE)).is_infinity()


def test_mod_inverse():
    """Inverses multiply back to one and zero has no inverse"""
    rng = random.Random(1)
    for _ in range(20):
        a = rng.randrange(1, N)
        inv = mod_inverse(a, N)
        assert inv is not None
        assert (a * inv) % N == 1
    assert mod_inverse(0, N) is None
    assert mod_inverse(N, N) is None


def test_le_bits():
    """Bits come out least significant first"""
    assert to_le_bits(6, 4) == [False, True, True, False]
    bits = to_le_bits(N - 1, 256)
    assert len(bits) == 256
    assert sum(1 << i for i, bit in enumerate(bits) if bit) == N - 1


def test_shamir_matches_separate_multiplication():
    """Double-scalar multiplication equals two scalar multiplications and an addition"""
    rng = random.Random(2)
    G = generator()
    for _ in range(5):
        Q = G.scalar_mult(rng.randrange(1, N))
        a = rng.randrange(1, N)
        b = rng.randrange(1, N)

        expected = G.scalar_mult(a).add(Q.scalar_mult(b))
        result = multi_scalar_multiplication(to_le_bits(a, 256), G, to_le_bits(b, 256), Q)
        assert result == expected


def test_shamir_infinity():
    """A result at infinity is reported as None"""
    G = generator()
    neg_g = G.scalar_mult(N - 1)
    assert multi_scalar_multiplication(to_le_bits(1, 256), G, to_le_bits(1, 256), neg_g) is None

    with pytest.raises(ValueError):
        multi_scalar_multiplication(to_le_bits(1, 8), G, to_le_bits(1, 16), G)


def test_verification_identity():
    """u1*G + u2*Q equals s^-1 * (z*G + r*Q)"""
    rng = random.Random(3)
    G = generator()
    for _ in range(3):
        d = rng.randrange(1, N)
        Q = G.scalar_mult(d)
        z = rng.randrange(0, N)
        r = rng.randrange(1, N)
        s = rng.randrange(1, N)
        s_inv = mod_inverse(s, N)

        u1 = (z * s_inv) % N
        u2 = (r * s_inv) % N
        lhs = multi_scalar_multiplication(to_le_bits(u1, 256), G, to_le_bits(u2, 256), Q)
        rhs = G.scalar_mult(z).add(Q.scalar_mult(r)).scalar_mult(s_inv)
        assert lhs == rhs


def test_bits2scalar():
    """Digests are read big-endian, truncated to 32 bytes and reduced mod n"""
    assert bits2scalar(CURVE, b"\x00" * 31 + b"\x05") == 5
    assert bits2scalar(CURVE, N.to_bytes(32, 'big')) == 0
    assert bits2scalar(CURVE, (N + 7).to_bytes(32, 'big')) == 7
    assert bits2scalar(CURVE, b"\x00" * 31 + b"\x01" + b"\xff" * 8) == 1
    assert bits2scalar(CURVE, b"\x01" * 31) is None


def test_decompress_generator():
    """Both parities of G's X coordinate decompress to G and -G"""
    x_bytes = CURVE.G_X.to_bytes(32, 'big')

    even = decompress(x_bytes, False)
    assert even == x_bytes + CURVE.G_Y.to_bytes(32, 'big')

    odd = decompress(x_bytes, True)
    assert odd == x_bytes + (P - CURVE.G_Y).to_bytes(32, 'big')


def test_decompress_random_points():
    """Decompression inverts compression for random points"""
    rng = random.Random(4)
    G = generator()
    for _ in range(5):
        x, y = G.scalar_mult(rng.randrange(1, N)).to_affine()
        out = decompress(x.to_bytes(32, 'big'), bool(y & 1))
        assert int.from_bytes(out[32:], 'big') == y


def test_decompress_invalid_x():
    """X coordinates off the curve or outside the field are rejected"""
    with pytest.raises(ValueError):
        decompress(b"\xff" * 32, False)
    with pytest.raises(ValueError):
        decompress(b"\x01" * 31, False)

    # Find an X with no matching Y
    x = 1
    while pow((x ** 3 + CURVE.B) % P, (P - 1) // 2, P) == 1:
        x += 1
    with pytest.raises(ValueError):
        decompress(x.to_bytes(32, 'big'), False)


def test_hashes():
    """SHA256 and Keccak256 known answers"""
    hasher = Hasher.sha256()
    hasher.update(b"abc")
    assert hasher.finish().as_ref().hex() == (
        "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad")

    hasher = Hasher.keccak256()
    hasher.update(b"")
    result = hasher.finish()
    assert len(result) == 32
    assert result.as_ref().hex() == (
        "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470")

    with pytest.raises(ValueError):
        Hasher("md5")


def test_personal_message_hash():
    """The personal-message prefix scheme hashes text and bytes alike"""
    expected = "1da44b586eb0729ff70a73c326926f6ed5a25f5b056e7f47fbc6e58d86871655"
    assert hash_personal_message("Some data").hex() == expected
    assert hash_personal_message(b"Some data").hex() == expected


if __name__ == "__main__":
    print("Running basic crypto tests...")

    G = generator()
    print(f"2G = {G.double()}")

    print("Basic tests passed. Run with pytest for full test suite.")
