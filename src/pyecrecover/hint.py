"""
Retrieval of untrusted recovery hints

A hint is a candidate compressed public key and a candidate inverse of s,
produced outside the trusted computation. This module only fetches hints and
checks their encoding; whether they are correct is decided by the verifier.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import BinaryIO, Protocol

try:
    from .errors import RecoveryError
    from .hook import ecrecover_hook
    from .ser import (
        COMPRESSED_KEY_LEN, DIGEST_LEN, SCALAR_LEN, SIGNATURE_LEN,
        SerializationError, read_frame, read_scalar, write_frame
    )
except ImportError:
    # Handle direct script execution
    from errors import RecoveryError
    from hook import ecrecover_hook
    from ser import (
        COMPRESSED_KEY_LEN, DIGEST_LEN, SCALAR_LEN, SIGNATURE_LEN,
        SerializationError, read_frame, read_scalar, write_frame
    )


logger = logging.getLogger(__name__)


class HintChannel(Protocol):
    """A message channel to the hint provider"""

    def write(self, data: bytes) -> None:
        """Send a request"""
        ...

    def read_vec(self) -> bytes:
        """Read the next response value"""
        ...


@dataclass(frozen=True)
class RawHint:
    """
    An unverified recovery hint

    Neither value carries any guarantee beyond its length.
    """
    # Candidate signer key, SEC1 compressed (parity byte || X)
    compressed_key: bytes

    # Candidate inverse of the signature's s, below the curve order
    s_inverse: int


class LocalHintChannel:
    """Hint channel that answers requests in-process with the ecrecover hook"""

    def __init__(self):
        self._pending = deque()

    def write(self, data: bytes) -> None:
        self._pending.extend(ecrecover_hook(bytes(data)))

    def read_vec(self) -> bytes:
        if not self._pending:
            raise RecoveryError(RecoveryError.ErrorType.MALFORMED_HINT,
                                "Hint channel has no more values")
        return self._pending.popleft()


class StreamHintChannel:
    """Hint channel over a pair of binary streams using length-prefixed frames"""

    def __init__(self, reader: BinaryIO, writer: BinaryIO):
        self._reader = reader
        self._writer = writer

    def write(self, data: bytes) -> None:
        write_frame(self._writer, data)

    def read_vec(self) -> bytes:
        try:
            return read_frame(self._reader)
        except SerializationError as e:
            raise RecoveryError(RecoveryError.ErrorType.MALFORMED_HINT, str(e), cause=e) from e


def fetch_hint(signature: bytes, msg_hash: bytes, channel: HintChannel) -> RawHint:
    """
    Request a recovery hint for a signature over a message digest

    Args:
        signature: 65-byte signature (r || s || v)
        msg_hash: 32-byte message digest
        channel: Channel to the hint provider

    Returns:
        The hint exactly as received, checked only for encoding

    Raises:
        RecoveryError: MALFORMED_HINT if a value has the wrong length or the
            inverse is not a canonical scalar
    """
    if len(signature) != SIGNATURE_LEN or len(msg_hash) != DIGEST_LEN:
        raise ValueError("Hint requests take a 65-byte signature and a 32-byte digest")

    channel.write(bytes(signature) + bytes(msg_hash))

    compressed_key = channel.read_vec()
    s_inverse_bytes = channel.read_vec()
    logger.debug("Received hint values of %d and %d bytes",
                 len(compressed_key), len(s_inverse_bytes))

    if len(compressed_key) != COMPRESSED_KEY_LEN:
        raise RecoveryError(RecoveryError.ErrorType.MALFORMED_HINT,
                            f"Expected a {COMPRESSED_KEY_LEN}-byte key, got {len(compressed_key)}")
    if len(s_inverse_bytes) != SCALAR_LEN:
        raise RecoveryError(RecoveryError.ErrorType.MALFORMED_HINT,
                            f"Expected a {SCALAR_LEN}-byte inverse, got {len(s_inverse_bytes)}")

    try:
        s_inverse, _ = read_scalar(s_inverse_bytes, 0)
    except SerializationError as e:
        raise RecoveryError(RecoveryError.ErrorType.MALFORMED_HINT, str(e), cause=e) from e

    return RawHint(bytes(compressed_key), s_inverse)
