"""
Simple wrapper around the hash functions used to produce message digests and
addresses, providing a single interface for SHA-256 and Keccak-256.
"""

import hashlib

from eth_hash.auto import keccak
from eth_utils import to_checksum_address


# Prefix of the Ethereum personal-message signing scheme (EIP-191 version 0x45)
PERSONAL_MESSAGE_PREFIX = b"\x19Ethereum Signed Message:\n"


class HashResult:
    """Container for hash results that can return bytes via as_ref()"""

    def __init__(self, hash_bytes: bytes):
        self._bytes = hash_bytes

    def as_ref(self) -> bytes:
        """Return the hash bytes"""
        return self._bytes

    def __len__(self) -> int:
        return len(self._bytes)


class Hasher:
    """Hash engine that supports SHA256 and Keccak256"""

    def __init__(self, algorithm: str):
        if algorithm == 'sha256':
            self._hasher = hashlib.sha256()
        elif algorithm == 'keccak256':
            self._hasher = keccak.new(b"")
        else:
            raise ValueError(f"Unsupported hash algorithm: {algorithm}")
        self._algorithm = algorithm

    @classmethod
    def sha256(cls) -> 'Hasher':
        """Create a SHA256 hasher"""
        return cls('sha256')

    @classmethod
    def keccak256(cls) -> 'Hasher':
        """Create a Keccak256 hasher (the pre-standard SHA-3 padding used by Ethereum)"""
        return cls('keccak256')

    def update(self, data: bytes) -> None:
        """Update the hasher with new data"""
        self._hasher.update(data)

    def finish(self) -> HashResult:
        """Finalize the hash and return the result"""
        return HashResult(self._hasher.digest())


def hash_personal_message(message) -> bytes:
    """
    Hash a message with the Ethereum personal-message prefix scheme.

    The digest is keccak256("\\x19Ethereum Signed Message:\\n" || len(message) || message),
    where the length is written in decimal ASCII.
    """
    if isinstance(message, str):
        message = message.encode('utf-8')

    hasher = Hasher.keccak256()
    hasher.update(PERSONAL_MESSAGE_PREFIX)
    hasher.update(str(len(message)).encode('ascii'))
    hasher.update(message)
    return hasher.finish().as_ref()


def public_key_to_address(pubkey: bytes) -> str:
    """
    Derive the checksummed address of an uncompressed public key.

    Args:
        pubkey: 65-byte uncompressed public key (0x04 || X || Y)

    Returns:
        EIP-55 checksummed hex address
    """
    if len(pubkey) != 65 or pubkey[0] != 4:
        raise ValueError("Expected a 65-byte uncompressed public key")

    hasher = Hasher.keccak256()
    hasher.update(pubkey[1:])
    return to_checksum_address(hasher.finish().as_ref()[12:])
