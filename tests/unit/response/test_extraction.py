import pytest

from newsgen.exceptions import ParsingError, ParsingErrorKind
from newsgen.response.extraction import coerce_primitive, extract_value
from newsgen.response.types import ExpectedShape

pytestmark = pytest.mark.unit


class TestContainerExtraction:
    @pytest.mark.parametrize(
        "text",
        [
            "[1, 2, 3]",
            "Here is the array: [1, 2, 3] hope this helps",
            "prefix ] [1, 2, 3] suffix",
        ],
    )
    def test_array_is_found_between_first_open_and_last_close(self, text):
        assert extract_value(text, ExpectedShape.ARRAY) == [1, 2, 3]

    def test_object_is_found_inside_prose(self):
        text = 'Sure! {"title": "A", "tags": ["x"]} Let me know.'
        assert extract_value(text, ExpectedShape.OBJECT) == {
            "title": "A",
            "tags": ["x"],
        }

    def test_missing_brackets_is_no_candidate(self):
        with pytest.raises(ParsingError) as exc_info:
            extract_value("no json here", ExpectedShape.ARRAY)
        assert exc_info.value.kind is ParsingErrorKind.NO_CANDIDATE_FOUND

    def test_missing_opening_brace_is_no_candidate(self):
        with pytest.raises(ParsingError) as exc_info:
            extract_value("only a closing } here", ExpectedShape.OBJECT)
        assert exc_info.value.kind is ParsingErrorKind.NO_CANDIDATE_FOUND

    @pytest.mark.parametrize(
        ("text", "shape"),
        [("[1,2,", ExpectedShape.ARRAY), ("} then {", ExpectedShape.OBJECT)],
    )
    def test_truncated_container_is_malformed(self, text, shape):
        with pytest.raises(ParsingError) as exc_info:
            extract_value(text, shape)
        assert exc_info.value.kind is ParsingErrorKind.MALFORMED_JSON

    def test_invalid_json_between_brackets_is_malformed(self):
        with pytest.raises(ParsingError) as exc_info:
            extract_value("[1, 2,]", ExpectedShape.ARRAY)
        assert exc_info.value.kind is ParsingErrorKind.MALFORMED_JSON
        assert exc_info.value.cause is not None

    def test_two_separate_arrays_are_sliced_together(self):
        with pytest.raises(ParsingError) as exc_info:
            extract_value("[1] and [2]", ExpectedShape.ARRAY)
        assert exc_info.value.kind is ParsingErrorKind.MALFORMED_JSON

    @pytest.mark.parametrize(
        ("text", "shape"),
        [
            ("[NaN, Infinity]", ExpectedShape.ARRAY),
            ('{"score": -Infinity}', ExpectedShape.OBJECT),
        ],
    )
    def test_non_standard_constants_are_malformed(self, text, shape):
        with pytest.raises(ParsingError) as exc_info:
            extract_value(text, shape)
        assert exc_info.value.kind is ParsingErrorKind.MALFORMED_JSON

    def test_deeply_nested_input_is_malformed_not_a_crash(self):
        text = "[" * 100_000 + "]" * 100_000
        with pytest.raises(ParsingError) as exc_info:
            extract_value(text, ExpectedShape.ARRAY)
        assert exc_info.value.kind is ParsingErrorKind.MALFORMED_JSON


class TestPrimitiveExtraction:
    @pytest.mark.parametrize(
        ("text", "shape", "expected"),
        [
            ('"hello"', ExpectedShape.STRING, "hello"),
            ("hello world", ExpectedShape.STRING, "hello world"),
            ("42", ExpectedShape.STRING, "42"),
            ("42", ExpectedShape.NUMBER, 42),
            (" 3.5 ", ExpectedShape.NUMBER, 3.5),
            ('"7"', ExpectedShape.NUMBER, 7),
            ("true", ExpectedShape.BOOLEAN, True),
            ("false", ExpectedShape.BOOLEAN, False),
            ("null", ExpectedShape.NULL, None),
            ("anything", ExpectedShape.NULL, None),
        ],
    )
    def test_primitive_values(self, text, shape, expected):
        result = extract_value(text, shape)
        assert result == expected
        assert type(result) is type(expected)

    @pytest.mark.parametrize("text", ["NaN", "Infinity", "-Infinity"])
    def test_non_standard_number_constants_stay_text(self, text):
        assert extract_value(text, ExpectedShape.NUMBER) == text


class TestCoercePrimitive:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(True, 1), (False, 0), (None, 0), ("", 0), ("  12 ", 12), ("1e3", 1000.0)],
    )
    def test_number_coercion(self, value, expected):
        assert coerce_primitive(value, ExpectedShape.NUMBER) == expected

    @pytest.mark.parametrize("value", ["not a number", "nan", "inf", [1]])
    def test_unparsable_number_is_left_unchanged(self, value):
        assert coerce_primitive(value, ExpectedShape.NUMBER) == value

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("", False), (0, False), (None, False), ("no", True), ([1], True)],
    )
    def test_boolean_uses_truthiness(self, value, expected):
        assert coerce_primitive(value, ExpectedShape.BOOLEAN) is expected

    def test_string_renders_non_strings_as_json(self):
        assert coerce_primitive({"a": 1}, ExpectedShape.STRING) == '{"a": 1}'
        assert coerce_primitive(None, ExpectedShape.STRING) == "null"

    def test_container_shape_is_unsupported(self):
        with pytest.raises(ParsingError) as exc_info:
            coerce_primitive([1], ExpectedShape.ARRAY)
        assert exc_info.value.kind is ParsingErrorKind.UNSUPPORTED_SHAPE
