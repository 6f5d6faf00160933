"""
Verification of ECDSA signatures against a candidate secp256k1 public key

This is the check that makes an untrusted recovery hint safe to use: a
candidate key is accepted only if the standard ECDSA verification equation
holds for it, the signature and the message digest.
"""

from typing import Optional

try:
    from .crypto import ec
    from .crypto.secp256k1 import CURVE, generator
    from .ser import UNCOMPRESSED_KEY_LEN, Signature
except ImportError:
    # Handle direct script execution
    from crypto import ec
    from crypto.secp256k1 import CURVE, generator
    from ser import UNCOMPRESSED_KEY_LEN, Signature


SCALAR_BITS = 256


def verify_signature(pubkey: bytes, msg_hash: bytes, signature: Signature,
                     s_inverse: Optional[int] = None) -> bool:
    """
    Validates the given signature against the given public key and message digest.

    Args:
        pubkey: Uncompressed public key (65 bytes: 0x04 || x || y). The point
            is assumed to be on the curve, as produced by decompression.
        msg_hash: Digest of the message that was signed
        signature: The (r, s) signature
        s_inverse: Optional precomputed inverse of s modulo the curve order.
            It is checked before use; a wrong value fails verification.

    Returns:
        True if signature is valid, False otherwise
    """
    coord_bytes = CURVE.COORD_BYTES
    n = CURVE.N

    if len(pubkey) != UNCOMPRESSED_KEY_LEN or pubkey[0] != 4:
        return False

    pk_x = int.from_bytes(pubkey[1:1 + coord_bytes], byteorder='big')
    pk_y = int.from_bytes(pubkey[1 + coord_bytes:], byteorder='big')
    if pk_x >= CURVE.P or pk_y >= CURVE.P:
        return False
    PK = ec.Point(pk_x, pk_y, 1, CURVE)

    z = ec.bits2scalar(CURVE, msg_hash)
    if z is None:
        return False

    r, s = signature.r, signature.s
    if not (0 < r < n and 0 < s < n):
        return False

    if s_inverse is not None:
        if (s_inverse * s) % n != 1:
            return False
        s_inv = s_inverse
    else:
        s_inv = ec.mod_inverse(s, n)
        if s_inv is None:
            return False

    # Calculate u_a = z * s^(-1) mod n and u_b = r * s^(-1) mod n
    u_a = (z * s_inv) % n
    u_b = (r * s_inv) % n

    # Calculate point V = u_a * G + u_b * PK
    V = ec.multi_scalar_multiplication(
        ec.to_le_bits(u_a, SCALAR_BITS), generator(),
        ec.to_le_bits(u_b, SCALAR_BITS), PK,
    )
    if V is None:
        return False

    v_affine = V.to_affine()
    if v_affine is None:
        return False

    v_x = ec.bits2scalar(CURVE, v_affine[0].to_bytes(coord_bytes, byteorder='big'))
    if v_x is None:
        return False

    # Verify that V.x = r (mod n)
    return v_x == r
