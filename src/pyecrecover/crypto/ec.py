"""
Elliptic curve arithmetic for ECDSA verification over short Weierstrass curves

This module implements the point operations the verifier needs: Jacobian
addition and doubling, double-scalar multiplication over little-endian bit
sequences, and the reduction of big-endian byte strings into scalars.
"""

from typing import Protocol, Optional, Tuple, List


class CurveParams(Protocol):
    """Protocol defining the interface for elliptic curve parameters"""

    # Curve field prime (p)
    P: int

    # Scalar field prime (n)
    N: int

    # Curve parameters for y^2 = x^3 + ax + b
    A: int
    B: int

    # Generator point coordinates
    G_X: int
    G_Y: int

    # Coordinate byte length
    COORD_BYTES: int


def mod_inverse(a: int, m: int) -> Optional[int]:
    """
    Compute modular inverse of a mod m using extended Euclidean algorithm.
    Returns None if inverse doesn't exist.
    """
    a %= m
    if a == 0:
        return None

    old_r, r = a, m
    old_s, s = 1, 0
    while r != 0:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_s, s = s, old_s - q * s

    if old_r != 1:
        return None
    return old_s % m


class Point:
    """Elliptic curve point in Jacobian coordinates"""

    def __init__(self, x: int, y: int, z: int, curve: CurveParams):
        self.x = x
        self.y = y
        self.z = z
        self.curve = curve

    @classmethod
    def infinity(cls, curve: CurveParams) -> 'Point':
        return cls(0, 1, 0, curve)

    @classmethod
    def from_affine(cls, x: int, y: int, curve: CurveParams) -> Optional['Point']:
        """Create point from affine coordinates, validating it's on the curve"""
        if not (0 <= x < curve.P and 0 <= y < curve.P):
            return None

        left = (y * y) % curve.P
        right = (x * x * x + curve.A * x + curve.B) % curve.P

        if left != right:
            return None

        return cls(x, y, 1, curve)

    @classmethod
    def generator(cls, curve: CurveParams) -> 'Point':
        """Return the generator point for the curve"""
        return cls(curve.G_X, curve.G_Y, 1, curve)

    def is_infinity(self) -> bool:
        """Check if this is the point at infinity"""
        return self.z == 0

    def double(self) -> 'Point':
        """Point doubling in Jacobian coordinates"""
        if self.is_infinity() or self.y == 0:
            return Point.infinity(self.curve)

        # https://hyperelliptic.org/EFD/g1p/auto-shortw-jacobian.html#doubling-dbl-2007-bl
        p = self.curve.P

        xx = (self.x * self.x) % p
        yy = (self.y * self.y) % p
        yyyy = (yy * yy) % p
        zz = (self.z * self.z) % p
        s = (2 * ((self.x + yy) * (self.x + yy) - xx - yyyy)) % p
        m = (3 * xx + self.curve.A * zz * zz) % p
        x3 = (m * m - 2 * s) % p
        y3 = (m * (s - x3) - 8 * yyyy) % p
        z3 = ((self.y + self.z) * (self.y + self.z) - yy - zz) % p

        return Point(x3, y3, z3, self.curve)

    def add(self, other: 'Point') -> 'Point':
        """Point addition in Jacobian coordinates"""
        if self.is_infinity():
            return other
        if other.is_infinity():
            return self

        p = self.curve.P

        # https://hyperelliptic.org/EFD/g1p/auto-shortw-jacobian-3.html#addition-add-2007-bl
        z1z1 = (self.z * self.z) % p
        z2z2 = (other.z * other.z) % p
        u1 = (self.x * z2z2) % p
        u2 = (other.x * z1z1) % p
        s1 = (self.y * other.z * z2z2) % p
        s2 = (other.y * self.z * z1z1) % p

        if u1 == u2:
            if s1 != s2:
                return Point.infinity(self.curve)
            return self.double()

        h = (u2 - u1) % p
        i = (2 * h) % p
        i = (i * i) % p
        j = (h * i) % p
        r = (2 * (s2 - s1)) % p
        v = (u1 * i) % p
        x3 = (r * r - j - 2 * v) % p
        y3 = (r * (v - x3) - 2 * s1 * j) % p
        z3 = ((self.z + other.z) * (self.z + other.z) - z1z1 - z2z2) % p
        z3 = (z3 * h) % p

        return Point(x3, y3, z3, self.curve)

    def scalar_mult(self, k: int) -> 'Point':
        """Scalar multiplication using binary method"""
        if k <= 0:
            return Point.infinity(self.curve)
        if k == 1:
            return self

        result = Point.infinity(self.curve)
        addend = self

        while k > 0:
            if k & 1:
                result = result.add(addend)
            addend = addend.double()
            k >>= 1

        return result

    def to_affine(self) -> Optional[Tuple[int, int]]:
        """Convert to affine coordinates"""
        if self.is_infinity():
            return None

        z_inv = mod_inverse(self.z, self.curve.P)
        if z_inv is None:
            return None

        z_inv_squared = (z_inv * z_inv) % self.curve.P
        z_inv_cubed = (z_inv_squared * z_inv) % self.curve.P

        x = (self.x * z_inv_squared) % self.curve.P
        y = (self.y * z_inv_cubed) % self.curve.P

        return (x, y)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        if self.is_infinity() or other.is_infinity():
            return self.is_infinity() and other.is_infinity()
        return self.to_affine() == other.to_affine()

    def __repr__(self) -> str:
        affine = self.to_affine()
        if affine is None:
            return "Point(infinity)"
        return f"Point(x={affine[0]:#x}, y={affine[1]:#x})"


def to_le_bits(k: int, bit_len: int) -> List[bool]:
    """Decompose k into bit_len bits, least significant first"""
    return [bool((k >> i) & 1) for i in range(bit_len)]


def multi_scalar_multiplication(a_bits: List[bool], point_a: Point,
                                b_bits: List[bool], point_b: Point) -> Optional[Point]:
    """
    Calculates a * point_a + b * point_b with Shamir's trick

    Both scalars are given as little-endian bit sequences of equal length. The
    bits are walked from the most significant end, doubling once per step and
    adding point_a, point_b or their precomputed sum as the bit pair dictates.

    Returns None if the result is the point at infinity.
    """
    if len(a_bits) != len(b_bits):
        raise ValueError("Scalar bit sequences must have equal length")

    both = point_a.add(point_b)
    result = Point.infinity(point_a.curve)

    for a_bit, b_bit in zip(reversed(a_bits), reversed(b_bits)):
        result = result.double()
        if a_bit and b_bit:
            result = result.add(both)
        elif a_bit:
            result = result.add(point_a)
        elif b_bit:
            result = result.add(point_b)

    if result.is_infinity():
        return None
    return result


def bits2scalar(curve: CurveParams, data: bytes) -> Optional[int]:
    """
    Interpret big-endian bytes as a scalar, reducing modulo the curve order.

    Inputs longer than a coordinate are truncated to their leftmost bits, as
    for message digests. Inputs shorter than a coordinate cannot be reduced
    and yield None.
    """
    if len(data) < curve.COORD_BYTES:
        return None

    value = int.from_bytes(data[:curve.COORD_BYTES], byteorder='big')
    return value % curve.N
