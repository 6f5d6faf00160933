"""
Logic to read and write the fixed-width encodings used by the recovery pipeline

This module provides the signature encoding, bounded byte reads, and the
length-prefixed frame format used on hint channels.
"""

from dataclasses import dataclass
from typing import BinaryIO, Tuple
import struct

try:
    from .crypto.secp256k1 import CURVE
except ImportError:
    # Handle direct script execution
    from crypto.secp256k1 import CURVE


SCALAR_LEN = 32
DIGEST_LEN = 32
SIGNATURE_LEN = 65
COMPRESSED_KEY_LEN = 33
UNCOMPRESSED_KEY_LEN = 65
FRAME_HEADER_LEN = 4


class SerializationError(Exception):
    """Error during serialization/deserialization"""
    pass


def read_u8(data: bytes, offset: int) -> Tuple[int, int]:
    """Read a u8 from bytes at offset, return (value, new_offset)"""
    if offset >= len(data):
        raise SerializationError("Not enough data for u8")
    return data[offset], offset + 1


def read_u32(data: bytes, offset: int) -> Tuple[int, int]:
    """Read a u32 from bytes at offset in big-endian format"""
    if offset + 3 >= len(data):
        raise SerializationError("Not enough data for u32")
    return struct.unpack('>I', data[offset:offset + 4])[0], offset + 4


def read_bytes(data: bytes, offset: int, length: int) -> Tuple[bytes, int]:
    """Read exactly length bytes from data at offset"""
    if offset + length > len(data):
        raise SerializationError(f"Not enough data for {length} bytes")
    return data[offset:offset + length], offset + length


def read_scalar(data: bytes, offset: int) -> Tuple[int, int]:
    """Read a 32-byte big-endian scalar, rejecting values not below the curve order"""
    raw, offset = read_bytes(data, offset, SCALAR_LEN)
    value = int.from_bytes(raw, byteorder='big')
    if value >= CURVE.N:
        raise SerializationError("Scalar is not below the curve order")
    return value, offset


def write_scalar(value: int) -> bytes:
    """Encode a scalar as 32 big-endian bytes"""
    return value.to_bytes(SCALAR_LEN, byteorder='big')


@dataclass(frozen=True)
class Signature:
    """
    An ECDSA signature (r, s) with an optional recovery indicator v

    v is normalised so that 27 and 28 map to 0 and 1.
    """
    r: int
    s: int
    v: int = 0

    @classmethod
    def from_bytes(cls, data: bytes) -> 'Signature':
        """
        Parse r || s (64 bytes) or r || s || v (65 bytes).

        Raises:
            SerializationError: If the length is wrong or r, s are not in [1, n-1]
        """
        if len(data) not in (SIGNATURE_LEN - 1, SIGNATURE_LEN):
            raise SerializationError(f"Signature must be 64 or 65 bytes, got {len(data)}")

        r, offset = read_scalar(data, 0)
        s, offset = read_scalar(data, offset)
        if r == 0 or s == 0:
            raise SerializationError("Signature scalars must be nonzero")

        v = 0
        if offset < len(data):
            v, _ = read_u8(data, offset)
            if v >= 27:
                v -= 27
        return cls(r, s, v)

    def to_bytes(self) -> bytes:
        """Encode as r || s || v (65 bytes)"""
        return write_scalar(self.r) + write_scalar(self.s) + bytes([self.v])


def write_frame(out: BinaryIO, payload: bytes) -> None:
    """Write a frame: u32 big-endian length followed by the payload"""
    out.write(struct.pack('>I', len(payload)))
    out.write(payload)
    out.flush()


def read_frame(stream: BinaryIO) -> bytes:
    """
    Read one frame written by write_frame

    Raises:
        SerializationError: If the stream ends before the frame is complete
    """
    header = stream.read(FRAME_HEADER_LEN)
    if len(header) != FRAME_HEADER_LEN:
        raise SerializationError("Not enough data for frame header")
    length, _ = read_u32(header, 0)

    payload = stream.read(length)
    if len(payload) != length:
        raise SerializationError("Frame payload truncated")
    return payload
