"""
Unit tests for interaction body validation.
"""
import pytest

from aptix.core.exceptions import ValidationError
from aptix.core.validators import validate_interaction


class TestValidateInteraction:
    """Tests for validate_interaction()."""

    def test_valid_message_returned_unchanged(self) -> None:
        body = validate_interaction({"message": "  gm  "})
        assert body.message == "  gm  "

    def test_whitespace_only_message_is_accepted(self) -> None:
        assert validate_interaction({"message": "   "}).message == "   "

    @pytest.mark.parametrize("length", [1, 500, 1000])
    def test_lengths_in_range(self, length: int) -> None:
        assert len(validate_interaction({"message": "a" * length}).message) == length

    def test_missing_message(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_interaction({})
        assert exc_info.value.message == '"message" is required'
        assert exc_info.value.field == "message"

    def test_null_message_is_not_a_string(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_interaction({"message": None})
        assert exc_info.value.message == '"message" must be a string'

    def test_too_long(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_interaction({"message": "a" * 1001})
        assert "less than or equal to 1000" in exc_info.value.message

    def test_non_object_body(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_interaction(["message"])
        assert exc_info.value.message == '"value" must be of type object'

    def test_error_maps_to_400_envelope(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validate_interaction({"message": ""})
        assert exc_info.value.status_code == 400
        assert exc_info.value.to_dict() == {
            "error": "Validation error",
            "message": '"message" is not allowed to be empty',
        }
