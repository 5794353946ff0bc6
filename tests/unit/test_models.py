"""Tests for Pydantic models."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest
from pydantic import ValidationError

from pagecraft.models.base import generate_ulid
from pagecraft.models.block import Block, generate_block_id, reindex
from pagecraft.models.block_schemas import (
    BLOCK_REGISTRY,
    BlockType,
    default_block_data,
    validate_block_config,
)
from pagecraft.models.document import ContentStatus, Document, generate_slug
from pagecraft.models.lock import LockStatus
from pagecraft.models.version import Version


class TestBaseModel:
    """Tests for BaseModel."""

    def test_generate_ulid(self):
        """Test ULID generation."""
        ulid1 = generate_ulid()
        ulid2 = generate_ulid()

        assert len(ulid1) == 26
        assert ulid1 != ulid2

    def test_model_timestamps(self):
        """Test automatic timestamps."""
        document = Document(title="Hello")

        assert document.created_at is not None
        assert document.updated_at is not None
        assert document.version == 1

    def test_model_serialization(self, sample_document):
        """Test DynamoDB serialization."""
        map_block = Block.create(BlockType.MAP)
        document = sample_document.model_copy(update={"blocks": [map_block]})

        db_item = document.to_dynamodb()

        assert db_item["id"] == "doc-123"
        assert db_item["primaryKeyword"] == "dubai frame"
        assert isinstance(db_item["createdAt"], str)
        assert db_item["blocks"][0]["data"]["lat"] == Decimal("25.2048")
        assert "scheduledAt" not in db_item

    def test_model_deserialization(self):
        """Test DynamoDB deserialization."""
        db_item = {
            "id": "doc-123",
            "title": "2024-01-01T12:00:00+00:00",
            "blocks": [
                {
                    "id": "map00001",
                    "type": "map",
                    "data": {"address": "", "lat": Decimal("25.2048"), "zoom": Decimal("14")},
                    "order": Decimal("0"),
                }
            ],
            "createdAt": "2024-01-01T12:00:00+00:00",
            "updatedAt": "2024-01-01T12:00:00+00:00",
            "version": Decimal("3"),
        }

        document = Document.from_dynamodb(db_item)

        assert document.version == 3
        assert isinstance(document.created_at, datetime)
        # Free text that looks like a date stays text
        assert document.title == "2024-01-01T12:00:00+00:00"
        assert document.blocks[0].data["lat"] == 25.2048
        assert document.blocks[0].data["zoom"] == 14
        assert isinstance(document.blocks[0].data["zoom"], int)


class TestBlockRegistry:
    """Tests for block payload schemas and defaults."""

    def test_registry_covers_every_type(self):
        """Test every block type has a registry entry."""
        assert set(BLOCK_REGISTRY) == set(BlockType)
        assert len(BlockType) == 20

    @pytest.mark.parametrize(
        "block_type,expected",
        [
            ("hero", {"image": "", "alt": "", "title": ""}),
            ("heading", {"text": "", "level": "h2"}),
            ("cta", {"text": "Learn More", "url": "", "style": "primary"}),
            ("video", {"url": "", "caption": "", "provider": "youtube"}),
            ("spacer", {"height": 40}),
            ("map", {"address": "", "lat": 25.2048, "lng": 55.2708, "zoom": 14}),
            ("accordion", {"items": [{"title": "", "contents": ""}]}),
            ("tabs", {"tabs": [{"title": "Tab 1", "contents": ""}]}),
            ("html", {"code": ""}),
        ],
    )
    def test_defaults(self, block_type, expected):
        """Test default payloads match the wire contract."""
        assert default_block_data(block_type) == expected

    def test_default_is_a_fresh_copy(self):
        """Test mutating a default does not leak into the registry."""
        data = default_block_data(BlockType.ACCORDION)
        data["items"][0]["title"] = "Changed"

        assert default_block_data(BlockType.ACCORDION)["items"][0]["title"] == ""

    def test_validate_block_config(self):
        """Test advisory payload validation."""
        assert validate_block_config("hero", {"image": "", "title": ""}) == []
        assert validate_block_config("hero", {"alt": ""}) == [
            "Missing required field 'image' for hero block",
            "Missing required field 'title' for hero block",
        ]
        assert validate_block_config("carousel", {}) == ["Unknown block type 'carousel'"]


class TestBlock:
    """Tests for Block model."""

    def test_generate_block_id(self):
        """Test block IDs are 8 hex characters."""
        block_id = generate_block_id()

        assert len(block_id) == 8
        int(block_id, 16)

    def test_create(self):
        """Test creating a block with defaults."""
        block = Block.create("text", order=2)

        assert block.type == "text"
        assert block.data == {"contents": ""}
        assert block.order == 2

    def test_blocks_are_immutable(self):
        """Test blocks cannot be changed in place."""
        block = Block.create("text")

        with pytest.raises(ValidationError):
            block.order = 5

    def test_unknown_type_rejected(self):
        """Test block type is a closed set."""
        with pytest.raises(ValidationError):
            Block(type="carousel")

    def test_reindex(self):
        """Test reindex makes order dense and reuses blocks in place."""
        first = Block.create("text", order=0)
        second = Block.create("hero", order=7)

        result = reindex([first, second])

        assert [block.order for block in result] == [0, 1]
        assert result[0] is first
        assert result[1].id == second.id


class TestDocument:
    """Tests for Document model."""

    def test_defaults(self):
        """Test a new document is an empty draft."""
        document = Document()

        assert document.status == ContentStatus.DRAFT
        assert document.blocks == []
        assert document.scheduled_at is None

    def test_camel_case_input(self):
        """Test either field spelling is accepted."""
        document = Document.model_validate(
            {"metaDescription": "Desc", "hero_image_alt": "Alt", "primaryKeyword": "kw"}
        )

        assert document.meta_description == "Desc"
        assert document.hero_image_alt == "Alt"
        assert document.primary_keyword == "kw"

    def test_scheduled_at_requires_scheduled_status(self):
        """Test scheduled_at is only valid while scheduled."""
        when = datetime(2030, 1, 1, tzinfo=timezone.utc)

        with pytest.raises(ValidationError):
            Document(status="approved", scheduled_at=when)

        document = Document(status="scheduled", scheduled_at=when)
        assert document.scheduled_at == when

    def test_with_status_clears_schedule(self):
        """Test leaving scheduled status drops the schedule date."""
        when = datetime(2030, 1, 1, tzinfo=timezone.utc)
        document = Document(status="scheduled", scheduled_at=when)

        published = document.with_status(ContentStatus.PUBLISHED)

        assert published.status == ContentStatus.PUBLISHED
        assert published.scheduled_at is None
        assert document.status == ContentStatus.SCHEDULED

    def test_from_api(self):
        """Test API records with nulls and missing block ids."""
        document = Document.from_api(
            {
                "id": "doc-1",
                "title": "Burj Khalifa",
                "metaTitle": None,
                "status": "approved",
                "blocks": [
                    {"type": "text", "data": {"contents": "Tall"}, "order": None},
                    {"id": "abc12345", "type": "hero", "data": {}, "order": 9},
                ],
            }
        )

        assert document.meta_title == ""
        assert document.status == ContentStatus.APPROVED
        assert len(document.blocks[0].id) == 8
        assert [block.order for block in document.blocks] == [0, 1]
        assert document.blocks[1].id == "abc12345"

    def test_new_from_template(self):
        """Test new pages start with the starter block layout."""
        document = Document.new_from_template(title="Dubai Frame")
        other = Document.new_from_template()

        assert [block.type for block in document.blocks] == [
            BlockType.HERO,
            BlockType.TEXT,
            BlockType.HIGHLIGHTS,
            BlockType.TIPS,
            BlockType.FAQ,
        ]
        assert [block.order for block in document.blocks] == [0, 1, 2, 3, 4]
        assert document.blocks[1].data == {"contents": ""}
        assert document.blocks[4].data == {"question": "", "answer": ""}
        assert document.title == "Dubai Frame"
        assert document.status == ContentStatus.DRAFT
        assert {block.id for block in document.blocks}.isdisjoint(
            block.id for block in other.blocks
        )

    def test_from_api_malformed_block(self):
        """Test a block that is not an object fails validation."""
        with pytest.raises(ValidationError):
            Document.from_api({"id": "doc-1", "blocks": ["hero"]})

    def test_to_save_payload(self, sample_document):
        """Test save payload uses camelCase keys and derives the slug."""
        payload = sample_document.to_save_payload()

        assert payload["slug"] == "dubai-frame-visitor-guide"
        assert payload["metaDescription"] == ""
        assert payload["status"] == "draft"
        assert payload["blocks"][0]["id"] == "hero0001"
        assert "scheduledAt" not in payload

    def test_keys(self, sample_document):
        """Test DynamoDB keys."""
        assert sample_document.get_keys() == {"PK": "CONTENT#doc-123", "SK": "CONTENT#doc-123"}

    @pytest.mark.parametrize(
        "title,slug",
        [
            ("Dubai Frame: A Visitor's Guide!", "dubai-frame-a-visitors-guide"),
            ("  Top   10 -- Things ", "-top-10-things-"),
            ("Café & Bar", "caf-bar"),
            ("", ""),
        ],
    )
    def test_generate_slug(self, title, slug):
        """Test slug derivation."""
        assert generate_slug(title) == slug


class TestVersion:
    """Tests for Version model."""

    def test_sort_key_is_zero_padded(self):
        """Test version keys sort numerically."""
        version = Version(content_id="doc-1", version_number=12)

        assert version.get_pk() == "CONTENT#doc-1"
        assert version.get_sk() == "VERSION#0000000012"

    def test_version_number_positive(self):
        """Test version numbers start at 1."""
        with pytest.raises(ValidationError):
            Version(content_id="doc-1", version_number=0)


class TestLockStatus:
    """Tests for LockStatus model."""

    def test_parse_api_response(self):
        """Test parsing the lock endpoint response."""
        status = LockStatus.model_validate(
            {
                "isLocked": True,
                "lockedBy": {"name": None, "avatar": "https://example.com/a.png"},
                "lockedAt": "2024-05-01T10:00:00Z",
            }
        )

        assert status.is_locked is True
        assert status.locked_by.name == "Someone"
        assert isinstance(status.locked_at, datetime)
