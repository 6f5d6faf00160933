"""
Errors raised while recovering a public key from a signature
"""

from enum import Enum
from typing import Optional


class RecoveryError(Exception):
    """An error when recovering or verifying a public key"""

    class ErrorType(Enum):
        """Types of recovery errors"""
        INVALID_SIGNATURE = "invalid_signature"
        INVALID_ENCODING = "invalid_encoding"
        DECOMPRESSION_FAILED = "decompression_failed"
        MALFORMED_HINT = "malformed_hint"
        VERIFICATION_FAILED = "verification_failed"
        RECOVERY_FAILED = "recovery_failed"

    def __init__(self, error_type: ErrorType, message: str = "",
                 cause: Optional[BaseException] = None):
        self.error_type = error_type
        self.cause = cause
        super().__init__(f"{error_type.value}: {message}" if message else error_type.value)
