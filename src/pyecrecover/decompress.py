"""
Decompression of SEC1 compressed public keys
"""

try:
    from .crypto import secp256k1
    from .errors import RecoveryError
    from .ser import COMPRESSED_KEY_LEN
except ImportError:
    # Handle direct script execution
    from crypto import secp256k1
    from errors import RecoveryError
    from ser import COMPRESSED_KEY_LEN


UNCOMPRESSED_PREFIX = 0x04


def decompress_pubkey(compressed_key: bytes) -> bytes:
    """
    Expand a 33-byte compressed key into the 65-byte uncompressed form.

    This only checks the encoding. The result is a point on the curve, not
    necessarily the key that signed anything.

    Raises:
        RecoveryError: INVALID_ENCODING for a bad length or parity byte,
            DECOMPRESSION_FAILED if X is not the coordinate of a curve point
    """
    if len(compressed_key) != COMPRESSED_KEY_LEN:
        raise RecoveryError(RecoveryError.ErrorType.INVALID_ENCODING,
                            f"Compressed key must be {COMPRESSED_KEY_LEN} bytes")

    parity = compressed_key[0]
    if parity == 2:
        is_odd = False
    elif parity == 3:
        is_odd = True
    else:
        raise RecoveryError(RecoveryError.ErrorType.INVALID_ENCODING,
                            f"Invalid parity byte {parity:#04x}")

    try:
        x_y = secp256k1.decompress(bytes(compressed_key[1:]), is_odd)
    except ValueError as e:
        raise RecoveryError(RecoveryError.ErrorType.DECOMPRESSION_FAILED, str(e), cause=e) from e

    return bytes([UNCOMPRESSED_PREFIX]) + x_y
