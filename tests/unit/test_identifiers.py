"""
Unit Tests - Identifier Codec
"""
import uuid

import pytest
from sqlalchemy import text

from orderdesk.database.identifiers import (
    IDENTIFIER_LENGTH,
    decode_identifier,
    encode_identifier,
    is_empty_identifier,
)
from orderdesk.database.models import OrderStatus


class TestIdentifierCodec:
    """Tests for the UUID <-> 16 byte codec"""

    def test_encode_produces_sixteen_bytes(self):
        value = uuid.UUID("0f8fad5b-d9cb-469f-a165-70867728950e")

        encoded = encode_identifier(value)

        assert len(encoded) == IDENTIFIER_LENGTH
        assert encoded == bytes.fromhex("0f8fad5bd9cb469fa16570867728950e")

    def test_decode_restores_uuid(self):
        value = uuid.uuid4()
        assert decode_identifier(encode_identifier(value)) == value

    def test_encode_accepts_string_form(self):
        value = uuid.uuid4()
        assert encode_identifier(str(value)) == value.bytes

    def test_decode_rejects_wrong_width(self):
        with pytest.raises(ValueError, match="16 bytes"):
            decode_identifier(b"\x00" * 15)

    def test_encode_rejects_other_types(self):
        with pytest.raises(TypeError):
            encode_identifier(42)

    @pytest.mark.parametrize("value", [None, uuid.UUID(int=0), b"\x00" * 16, "", "00000000-0000-0000-0000-000000000000"])
    def test_empty_identifiers(self, value):
        assert is_empty_identifier(value)

    def test_non_empty_identifier(self):
        assert not is_empty_identifier(uuid.uuid4())


class TestBinaryUUIDColumn:
    """Tests for the BinaryUUID column type"""

    async def test_stored_as_raw_bytes(self, test_db):
        status_id = uuid.uuid4()
        test_db.add(OrderStatus(id=status_id, name="Completed"))
        await test_db.commit()

        result = await test_db.execute(text("SELECT id FROM order_status"))
        raw = result.scalar_one()

        assert bytes(raw) == status_id.bytes

    async def test_lookup_by_uuid_compares_binary_form(self, test_db):
        status_id = uuid.uuid4()
        test_db.add(OrderStatus(id=status_id, name="Created"))
        await test_db.commit()
        test_db.expunge_all()

        found = await test_db.get(OrderStatus, status_id)

        assert found is not None
        assert found.id == status_id
        assert await test_db.get(OrderStatus, uuid.uuid4()) is None
