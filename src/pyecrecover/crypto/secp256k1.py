"""
secp256k1 curve parameters and point decompression
"""

import logging

try:
    from . import ec
except ImportError:
    # Handle direct script execution
    import ec


logger = logging.getLogger(__name__)


class Secp256k1Curve:
    """secp256k1 curve parameters"""

    # Curve field prime (p)
    P = 0xfffffffffffffffffffffffffffffffffffffffffffffffffffffffefffffc2f

    # Scalar field prime (n) - order of the base point
    N = 0xfffffffffffffffffffffffffffffffebaaedce6af48a03bbfd25e8cd0364141

    # Curve parameters for y^2 = x^3 + ax + b
    A = 0
    B = 7

    # Generator point coordinates
    G_X = 0x79be667ef9dcbbac55a06295ce870b07029bfcdb2dce28d959f2815b16f81798
    G_Y = 0x483ada7726a3c4655da4fbfc0e1108a8fd17b448a68554199c47d08ffb10d4b8

    # Coordinate byte length (32 bytes for secp256k1)
    COORD_BYTES = 32


CURVE = Secp256k1Curve()


def generator() -> ec.Point:
    """Return the secp256k1 generator point"""
    return ec.Point.generator(CURVE)


def decompress(x_bytes: bytes, is_odd: bool) -> bytes:
    """
    Expand an X coordinate and Y parity into the 64-byte X || Y encoding.

    Args:
        x_bytes: 32-byte big-endian X coordinate
        is_odd: Whether the Y coordinate is odd

    Returns:
        64 bytes: big-endian X followed by big-endian Y

    Raises:
        ValueError: If X is not the coordinate of a point on the curve
    """
    if len(x_bytes) != CURVE.COORD_BYTES:
        raise ValueError(f"X coordinate must be {CURVE.COORD_BYTES} bytes, got {len(x_bytes)}")

    p = CURVE.P
    x = int.from_bytes(x_bytes, byteorder='big')
    if x >= p:
        raise ValueError("X coordinate is not a field element")

    rhs = (x * x * x + CURVE.A * x + CURVE.B) % p
    # p = 3 (mod 4), so a square root (if any) is rhs^((p + 1) / 4)
    y = pow(rhs, (p + 1) // 4, p)
    if (y & 1) != is_odd:
        y = p - y

    if ec.Point.from_affine(x, y, CURVE) is None:
        logger.debug("No curve point with x=%#x", x)
        raise ValueError("X coordinate is not on the curve")

    return x.to_bytes(CURVE.COORD_BYTES, 'big') + y.to_bytes(CURVE.COORD_BYTES, 'big')
