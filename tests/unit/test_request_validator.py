"""Tests for request validation (descriptors, payloads, filters)."""

import pytest

from firestore_cache.application.services.request_validator import (
    validate_document_descriptor,
    validate_document_payload,
    validate_filters,
    validate_query_descriptor,
    validate_update_payload,
)
from firestore_cache.domain.descriptors import DocumentDescriptor, QueryDescriptor
from firestore_cache.domain.exceptions import ValidationError


class TestValidateDocumentDescriptor:
    """Tests for validate_document_descriptor."""

    def test_accepts_dataclass(self) -> None:
        target = DocumentDescriptor(collection="users", id="u1")
        assert validate_document_descriptor(target) == target

    def test_accepts_mapping(self) -> None:
        result = validate_document_descriptor({"collection": "users", "id": "u1"})
        assert result == DocumentDescriptor(collection="users", id="u1")

    @pytest.mark.parametrize(
        "target",
        [None, {}, {"collection": "users"}, {"id": "u1"}, {"collection": None, "id": "u1"}],
    )
    def test_missing_fields_rejected(self, target) -> None:
        with pytest.raises(ValidationError, match="all values are required"):
            validate_document_descriptor(target)

    def test_non_string_collection_names_types(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_document_descriptor({"collection": 123, "id": "a"})
        assert exc_info.value.message == (
            "Expected collection of type str and id of type str but got "
            "collection of type int and id of type str"
        )
        assert exc_info.value.error_code == "VALIDATION_ERROR"
        assert exc_info.value.details == {"field": "collection"}

    def test_non_string_id_rejected(self) -> None:
        with pytest.raises(ValidationError, match="id of type int") as exc_info:
            validate_document_descriptor(DocumentDescriptor(collection="users", id=7))  # type: ignore[arg-type]
        assert exc_info.value.details == {"field": "id"}

    @pytest.mark.parametrize("field", ["collection", "id"])
    def test_empty_strings_rejected(self, field: str) -> None:
        target = {"collection": "users", "id": "u1", field: ""}
        with pytest.raises(ValidationError, match="must not be empty"):
            validate_document_descriptor(target)


class TestValidateDocumentPayload:
    """Tests for validate_document_payload."""

    def test_empty_dict_allowed(self) -> None:
        assert validate_document_payload({}) == {}

    def test_returns_plain_dict_copy(self) -> None:
        payload = {"title": "x"}
        result = validate_document_payload(payload)
        assert result == payload
        assert result is not payload

    def test_none_rejected(self) -> None:
        with pytest.raises(ValidationError, match="all values are required"):
            validate_document_payload(None)

    def test_non_mapping_rejected(self) -> None:
        with pytest.raises(ValidationError, match="document of type list"):
            validate_document_payload(["a"])


class TestValidateUpdatePayload:
    """Tests for validate_update_payload."""

    def test_fields_accepted(self) -> None:
        assert validate_update_payload({"status": "done"}) == {"status": "done"}

    def test_empty_dict_rejected(self) -> None:
        with pytest.raises(ValidationError, match="at least one field") as exc_info:
            validate_update_payload({})
        assert exc_info.value.details == {"field": "document"}

    def test_none_rejected(self) -> None:
        with pytest.raises(ValidationError, match="all values are required"):
            validate_update_payload(None)


class TestValidateQueryDescriptor:
    """Tests for validate_query_descriptor."""

    def test_collection_only(self) -> None:
        assert validate_query_descriptor({"collection": "tasks"}) == QueryDescriptor("tasks")

    def test_with_limit(self) -> None:
        result = validate_query_descriptor(QueryDescriptor(collection="tasks", limit=2))
        assert result.limit == 2

    def test_missing_collection(self) -> None:
        with pytest.raises(ValidationError, match="collection name not provided"):
            validate_query_descriptor({"limit": 2})

    def test_non_string_collection(self) -> None:
        with pytest.raises(ValidationError, match="collection of type int"):
            validate_query_descriptor({"collection": 5})

    @pytest.mark.parametrize("limit", ["2", 2.5, True])
    def test_non_integer_limit_rejected(self, limit) -> None:
        with pytest.raises(ValidationError, match="Expected limit of type int") as exc_info:
            validate_query_descriptor({"collection": "tasks", "limit": limit})
        assert exc_info.value.details == {"field": "limit"}

    @pytest.mark.parametrize("limit", [0, -3])
    def test_non_positive_limit_rejected(self, limit: int) -> None:
        with pytest.raises(ValidationError, match="positive integer"):
            validate_query_descriptor({"collection": "tasks", "limit": limit})


class TestValidateFilters:
    """Tests for validate_filters."""

    def test_none_passes_through(self) -> None:
        assert validate_filters(None) is None

    def test_mapping_returned_unchanged(self) -> None:
        filters = {"status": "open", "owner": "ann"}
        assert validate_filters(filters) is filters

    def test_non_mapping_rejected(self) -> None:
        with pytest.raises(ValidationError, match="filters of type list"):
            validate_filters([("status", "open")])

    def test_empty_field_name_rejected(self) -> None:
        with pytest.raises(ValidationError, match="non-empty strings"):
            validate_filters({"": "x"})
