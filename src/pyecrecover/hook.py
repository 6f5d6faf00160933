"""
The ecrecover hook: the untrusted side of a hint request

Given a signature and message digest, this computes the signer's compressed
public key and the inverse of s using libsecp256k1. Nothing produced here is
trusted; the caller re-verifies both values before using them.
"""

import logging
from typing import BinaryIO, List

from coincurve import PublicKey

try:
    from .crypto.secp256k1 import CURVE
    from .ser import (
        DIGEST_LEN, SIGNATURE_LEN, SerializationError, Signature,
        read_bytes, read_frame, write_frame, write_scalar
    )
except ImportError:
    # Handle direct script execution
    from crypto.secp256k1 import CURVE
    from ser import (
        DIGEST_LEN, SIGNATURE_LEN, SerializationError, Signature,
        read_bytes, read_frame, write_frame, write_scalar
    )


logger = logging.getLogger(__name__)

REQUEST_LEN = SIGNATURE_LEN + DIGEST_LEN


def ecrecover_hook(request: bytes) -> List[bytes]:
    """
    Answer a hint request

    Args:
        request: 65-byte signature (r || s || v) followed by the 32-byte digest

    Returns:
        [compressed_key (33 bytes), s_inverse (32 bytes)], or an empty list if
        the key could not be recovered
    """
    try:
        sig_bytes, offset = read_bytes(request, 0, SIGNATURE_LEN)
        msg_hash, offset = read_bytes(request, offset, DIGEST_LEN)
        if offset != len(request):
            raise SerializationError("Trailing data after hint request")
        sig = Signature.from_bytes(sig_bytes)
        if sig.v > 3:
            raise SerializationError(f"Invalid recovery indicator {sig.v}")

        pubkey = PublicKey.from_signature_and_message(sig.to_bytes(), msg_hash, hasher=None)
    except (SerializationError, ValueError) as e:
        logger.warning("Unable to recover public key for hint request: %s", e)
        return []

    s_inverse = pow(sig.s, -1, CURVE.N)
    return [pubkey.format(compressed=True), write_scalar(s_inverse)]


def serve_hint_requests(reader: BinaryIO, writer: BinaryIO) -> int:
    """
    Answer framed hint requests on a stream pair until the reader is exhausted

    Each request frame is answered with one frame per hint value; a failed
    recovery is answered with two empty frames.

    Returns:
        The number of requests served
    """
    served = 0
    while True:
        try:
            request = read_frame(reader)
        except SerializationError:
            break

        frames = ecrecover_hook(request) or [b"", b""]
        for frame in frames:
            write_frame(writer, frame)
        served += 1

    logger.debug("Served %d hint requests", served)
    return served
