"""
Identifier Codec

Every primary and foreign key is a 128-bit UUID stored as 16 raw bytes
(RFC 4122 byte order). ``BinaryUUID`` applies the codec on every bind and
result so SQL equality always compares the binary form, whatever the backend.
"""

import uuid
from typing import Optional, Union

from sqlalchemy.dialects import mysql
from sqlalchemy.types import LargeBinary, TypeDecorator

IDENTIFIER_LENGTH = 16

IdentifierLike = Union[uuid.UUID, str, bytes]


def encode_identifier(value: Union[uuid.UUID, str]) -> bytes:
    """
    Encode a UUID into its 16-byte storage representation.

    Args:
        value: UUID instance or its canonical string form

    Returns:
        16 bytes in network (big-endian) order
    """
    if isinstance(value, str):
        value = uuid.UUID(value)
    if not isinstance(value, uuid.UUID):
        raise TypeError(f"Cannot encode {type(value).__name__} as identifier")
    return value.bytes


def decode_identifier(raw: bytes) -> uuid.UUID:
    """
    Decode a 16-byte storage value back into a UUID.

    Raises:
        ValueError: If ``raw`` is not exactly 16 bytes
    """
    raw = bytes(raw)
    if len(raw) != IDENTIFIER_LENGTH:
        raise ValueError(
            f"Identifier must be {IDENTIFIER_LENGTH} bytes, got {len(raw)}"
        )
    return uuid.UUID(bytes=raw)


def is_empty_identifier(value: Optional[IdentifierLike]) -> bool:
    """True for a missing identifier or the nil UUID."""
    if value is None:
        return True
    if isinstance(value, (bytes, bytearray, memoryview)):
        return not any(bytes(value))
    if isinstance(value, str):
        if not value.strip():
            return True
        value = uuid.UUID(value)
    return value.int == 0


def new_identifier() -> uuid.UUID:
    return uuid.uuid4()


class BinaryUUID(TypeDecorator):
    """
    UUID column stored as 16 raw bytes.

    BINARY(16) on MySQL/MariaDB, the generic large binary type elsewhere
    (BYTEA on PostgreSQL, BLOB on SQLite).
    """

    impl = LargeBinary
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name in ("mysql", "mariadb"):
            return dialect.type_descriptor(mysql.BINARY(IDENTIFIER_LENGTH))
        return dialect.type_descriptor(LargeBinary(IDENTIFIER_LENGTH))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if isinstance(value, (bytes, bytearray, memoryview)):
            # Already encoded; validate the width only
            return encode_identifier(decode_identifier(value))
        return encode_identifier(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return decode_identifier(value)
