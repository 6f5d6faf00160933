"""
Public key recovery from an ECDSA signature using untrusted hints

The recovery itself is delegated to a hint provider. Its answer is decoded,
decompressed and then re-verified against the signature, so the result is
only as trustworthy as the verification, never the provider.
"""

import logging
from typing import Optional

try:
    from .crypto.hash import public_key_to_address
    from .decompress import decompress_pubkey
    from .errors import RecoveryError
    from .hint import HintChannel, LocalHintChannel, fetch_hint
    from .ser import DIGEST_LEN, SIGNATURE_LEN, SerializationError, Signature
    from .verify import verify_signature
except ImportError:
    # Handle direct script execution
    from crypto.hash import public_key_to_address
    from decompress import decompress_pubkey
    from errors import RecoveryError
    from hint import HintChannel, LocalHintChannel, fetch_hint
    from ser import DIGEST_LEN, SIGNATURE_LEN, SerializationError, Signature
    from verify import verify_signature


logger = logging.getLogger(__name__)


def ecrecover(signature: bytes, msg_hash: bytes,
              channel: Optional[HintChannel] = None) -> bytes:
    """
    Given a signature and a message hash, returns the public key that signed the message.

    Args:
        signature: 65-byte signature (r || s || v)
        msg_hash: 32-byte message digest
        channel: Channel to the hint provider. A fresh in-process channel is
            used if none is given.

    Returns:
        The verified 65-byte uncompressed public key

    Raises:
        RecoveryError: INVALID_SIGNATURE for malformed inputs, MALFORMED_HINT
            if the hint cannot be decoded, RECOVERY_FAILED if the hinted key
            cannot be decompressed, VERIFICATION_FAILED if it does not verify
    """
    if len(signature) != SIGNATURE_LEN:
        raise RecoveryError(RecoveryError.ErrorType.INVALID_SIGNATURE,
                            f"Signature must be {SIGNATURE_LEN} bytes, got {len(signature)}")
    if len(msg_hash) != DIGEST_LEN:
        raise RecoveryError(RecoveryError.ErrorType.INVALID_SIGNATURE,
                            f"Message hash must be {DIGEST_LEN} bytes, got {len(msg_hash)}")

    try:
        sig = Signature.from_bytes(signature)
    except SerializationError as e:
        raise RecoveryError(RecoveryError.ErrorType.INVALID_SIGNATURE, str(e), cause=e) from e

    if channel is None:
        channel = LocalHintChannel()

    hint = fetch_hint(signature, msg_hash, channel)

    try:
        pubkey = decompress_pubkey(hint.compressed_key)
    except RecoveryError as e:
        raise RecoveryError(RecoveryError.ErrorType.RECOVERY_FAILED,
                            "decompress pubkey failed", cause=e) from e
    logger.debug("Decompressed pubkey: %s", pubkey.hex())

    if not verify_signature(pubkey, msg_hash, sig, hint.s_inverse):
        raise RecoveryError(RecoveryError.ErrorType.VERIFICATION_FAILED,
                            "failed to verify signature")
    return pubkey


def recover_address(signature: bytes, msg_hash: bytes,
                    channel: Optional[HintChannel] = None) -> str:
    """Recover the signer's checksummed address"""
    return public_key_to_address(ecrecover(signature, msg_hash, channel))
