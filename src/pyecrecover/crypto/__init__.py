"""
Cryptographic primitives for public key recovery

This module provides secp256k1 arithmetic, the point decompression
primitive, and the hash functions used to build message digests.
"""

try:
    from .ec import Point, mod_inverse, to_le_bits, multi_scalar_multiplication, bits2scalar
    from .secp256k1 import Secp256k1Curve, CURVE, generator, decompress
    from .hash import Hasher, HashResult, hash_personal_message, public_key_to_address
except ImportError:
    # Handle direct script execution
    from ec import Point, mod_inverse, to_le_bits, multi_scalar_multiplication, bits2scalar
    from secp256k1 import Secp256k1Curve, CURVE, generator, decompress
    from hash import Hasher, HashResult, hash_personal_message, public_key_to_address

__all__ = [
    'Point',
    'mod_inverse',
    'to_le_bits',
    'multi_scalar_multiplication',
    'bits2scalar',
    'Secp256k1Curve',
    'CURVE',
    'generator',
    'decompress',
    'Hasher',
    'HashResult',
    'hash_personal_message',
    'public_key_to_address',
]
