"""
Python ECDSA Public Key Recovery Library

Recovers the secp256k1 public key behind an ECDSA signature by asking an
untrusted hint provider for the answer and then re-verifying it.

The expensive recovery (and the inversion of s) happens outside the trusted
path. The trusted path only decompresses the hinted key and runs the standard
ECDSA verification equation with a double-scalar multiplication, so a wrong
or malicious hint can make recovery fail but can never make it succeed with
the wrong key.
"""

from .recovery import (
    ecrecover,
    recover_address
)

from .verify import verify_signature

from .decompress import decompress_pubkey

from .hint import (
    fetch_hint,
    RawHint,
    HintChannel,
    LocalHintChannel,
    StreamHintChannel
)

from .hook import (
    ecrecover_hook,
    serve_hint_requests
)

from .errors import RecoveryError

from .ser import (
    SerializationError,
    Signature
)

from .crypto.hash import (
    Hasher,
    hash_personal_message,
    public_key_to_address
)

__version__ = "0.1.0"

__all__ = [
    # Recovery
    "ecrecover",
    "recover_address",
    "verify_signature",
    "decompress_pubkey",

    # Hints
    "fetch_hint",
    "RawHint",
    "HintChannel",
    "LocalHintChannel",
    "StreamHintChannel",
    "ecrecover_hook",
    "serve_hint_requests",

    # Errors and encodings
    "RecoveryError",
    "SerializationError",
    "Signature",

    # Hashing
    "Hasher",
    "hash_personal_message",
    "public_key_to_address",
]
