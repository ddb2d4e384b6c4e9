"""Embed validator tests.

Image checks go through RecordingProber so no test touches the network.
"""

import json
from typing import Any

import pytest

from embedcheck.contracts.check_result import CheckResult, ImageIssue, Severity
from embedcheck.core.image_cache import ImageCheckCache
from embedcheck.core.validation import check_json, parse_embed
from tests.fakes import RecordingProber

NO_CONTENT = "No content (title, description, author, footer, or fields)."


async def _check(document: Any, prober: RecordingProber | None = None) -> CheckResult:
    raw = document if isinstance(document, str) else json.dumps(document)
    return await check_json(raw, prober=prober, cache=ImageCheckCache())


class TestParsing:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["", "{", "hello", "{'title': 'x'}", '{"title": NaN}', "[1, 2", "nul"])
    async def test_non_json_is_invalid(self, raw: str) -> None:
        result = await check_json(raw)
        assert result.errors == ["JSON is invalid"]
        assert result.warnings == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", ["null", "0", "false", '""', "[]", "[1]", '"title"', "42"])
    async def test_non_object_json_is_invalid(self, raw: str) -> None:
        result = await check_json(raw)
        assert result.errors == ["JSON is invalid"]
        assert result.warnings == []

    @pytest.mark.asyncio
    async def test_deeply_nested_json_does_not_raise(self) -> None:
        raw = "[" * 100000 + "]" * 100000
        result = await check_json(raw)
        assert result.errors == ["JSON is invalid"]

    def test_parse_embed_returns_object(self) -> None:
        assert parse_embed('{"title": "x"}') == {"title": "x"}
        assert parse_embed("{}") == {}
        assert parse_embed("[]") is None


class TestScenarios:
    @pytest.mark.asyncio
    async def test_title_only_is_clean(self) -> None:
        result = await _check({"title": "Hi"})
        assert result.errors == []
        assert result.warnings == []

    @pytest.mark.asyncio
    async def test_url_without_title_warns(self) -> None:
        result = await _check({"url": "http://example.com"})
        assert result.errors == []
        assert result.warnings == ["URL will not be shown if there is no title"]

    @pytest.mark.asyncio
    async def test_empty_field_name(self) -> None:
        result = await _check({"fields": [{"name": "", "value": "x"}]})
        assert result.errors == ["1st field's name is empty"]

    @pytest.mark.asyncio
    async def test_too_many_fields(self) -> None:
        fields = [{"name": f"n{i}", "value": "v"} for i in range(26)]
        result = await _check({"title": "t", "fields": fields})
        assert "Too many fields (>25)" in result.errors

    @pytest.mark.asyncio
    async def test_twenty_five_fields_is_fine(self) -> None:
        fields = [{"name": f"n{i}", "value": "v"} for i in range(25)]
        result = await _check({"fields": fields})
        assert result.errors == []

    @pytest.mark.asyncio
    async def test_color_out_of_range(self) -> None:
        result = await _check({"color": 99999999})
        assert "Color is invalid" in result.errors

    @pytest.mark.asyncio
    async def test_unknown_key_warns(self) -> None:
        result = await _check({"title": "Hi", "foo": 1})
        assert result.errors == []
        assert result.warnings == ['"foo" is not a valid key']


class TestDocumentRules:
    @pytest.mark.asyncio
    async def test_empty_object_has_no_content(self) -> None:
        result = await _check({})
        assert result.errors == [NO_CONTENT]
        assert result.warnings == []

    @pytest.mark.asyncio
    async def test_unrecognized_keys_only(self) -> None:
        result = await _check({"foo": 1, "bar": {"title": "nested"}})
        assert result.errors == [NO_CONTENT]
        assert result.warnings == ['"foo" is not a valid key', '"bar" is not a valid key']

    @pytest.mark.asyncio
    async def test_whitespace_title_is_no_content(self) -> None:
        result = await _check({"title": " \n ", "fields": []})
        assert result.errors == [NO_CONTENT]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "document",
        [
            {"description": "d"},
            {"author": {"name": "a"}},
            {"footer": {"text": "f"}},
            {"fields": [{"name": "n", "value": "v"}]},
        ],
    )
    async def test_any_content_source_counts(self, document: dict[str, Any]) -> None:
        result = await _check(document)
        assert NO_CONTENT not in result.errors

    @pytest.mark.asyncio
    async def test_too_long(self) -> None:
        result = await _check({"description": "x" * 4000, "footer": {"text": "y" * 2000}})
        assert result.errors == ["JSON is too long (>6000 characters)"]

    @pytest.mark.asyncio
    async def test_exactly_at_length_limit(self) -> None:
        raw = json.dumps({"description": ""})
        raw = raw.replace('""', '"' + "x" * (6000 - len(raw)) + '"')
        assert len(raw) == 6000
        result = await check_json(raw)
        assert "Description is too long (>4096 characters)" in result.errors
        assert "JSON is too long (>6000 characters)" not in result.errors

    @pytest.mark.asyncio
    async def test_type_key_is_recognized(self) -> None:
        result = await _check({"title": "t", "type": "rich"})
        assert result.warnings == []


class TestScalarRules:
    @pytest.mark.asyncio
    async def test_title_and_description_limits(self) -> None:
        result = await _check({"title": "t" * 257, "description": "d" * 4097})
        assert result.errors == [
            "Title is too long (>256 characters)",
            "Description is too long (>4096 characters)",
        ]

    @pytest.mark.asyncio
    async def test_title_not_string(self) -> None:
        result = await _check({"title": ["a"], "description": "d"})
        assert result.errors == ["Title is not a string"]

    @pytest.mark.asyncio
    async def test_invalid_url(self) -> None:
        result = await _check({"title": "t", "url": "example.com"})
        assert result.errors == ["URL is invalid"]
        assert result.warnings == []

    @pytest.mark.asyncio
    async def test_timestamp(self) -> None:
        ok = await _check({"title": "t", "timestamp": "2024-05-01T10:00:00.000Z"})
        bad = await _check({"title": "t", "timestamp": "2024-05-01 10:00"})
        assert ok.errors == []
        assert bad.errors == ["Timestamp is invalid"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("color", [-1, 16777216, "red", True, {"r": 1}])
    async def test_invalid_colors(self, color: Any) -> None:
        result = await _check({"title": "t", "color": color})
        assert result.errors == ["Color is invalid"]

    @pytest.mark.asyncio
    async def test_oversized_integer_color_is_invalid_color(self) -> None:
        result = await _check('{"title": "t", "color": ' + "9" * 5000 + "}")
        assert result.errors == ["Color is invalid"]

    def test_oversized_integer_parses_as_float(self) -> None:
        document = parse_embed('{"color": ' + "1" * 4400 + "}")
        assert document is not None
        assert document["color"] == float("inf")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("color", [0, 16777215, 0x5865F2])
    async def test_valid_colors(self, color: int) -> None:
        result = await _check({"title": "t", "color": color})
        assert result.errors == []


class TestObjectRules:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("key", "label"),
        [("footer", "Footer"), ("image", "Image"), ("thumbnail", "Thumbnail"), ("author", "Author")],
    )
    async def test_non_object(self, key: str, label: str) -> None:
        result = await _check({"title": "t", key: "nope"})
        assert result.errors == [f"{label} is not an object"]

    @pytest.mark.asyncio
    async def test_footer_text_limit(self) -> None:
        result = await _check({"footer": {"text": "f" * 2049}})
        assert result.errors == ["Footer is too long (>2048 characters)"]

    @pytest.mark.asyncio
    async def test_footer_icon_without_text(self) -> None:
        result = await _check({"title": "t", "footer": {"icon_url": "https://example.com/i.png"}})
        assert result.errors == []
        assert result.warnings == ["Footer icon will not be shown without text"]

    @pytest.mark.asyncio
    async def test_author_rules(self) -> None:
        result = await _check(
            {"title": "t", "author": {"url": "nope", "icon_url": "https://example.com/a.png"}}
        )
        assert result.errors == ["Author has an invalid URL"]
        assert result.warnings == ["Author URL and icon will not be shown without a name"]

    @pytest.mark.asyncio
    async def test_author_name_limit(self) -> None:
        result = await _check({"author": {"name": "a" * 257}})
        assert result.errors == ["Author name is too long (>256 characters)"]

    @pytest.mark.asyncio
    async def test_image_url_syntax_errors_offline(self) -> None:
        result = await _check(
            {
                "title": "t",
                "image": {"url": 5},
                "thumbnail": {"url": "ftp://example.com/t.png"},
            }
        )
        assert result.errors == ["Image is not a string", "Thumbnail is not a valid URL"]

    @pytest.mark.asyncio
    async def test_space_in_image_path_is_probed_not_rejected(self, prober: RecordingProber) -> None:
        spaced = "https://example.com/my image.png"
        result = await _check({"title": "t", "image": {"url": spaced}}, prober=prober)
        assert result.errors == []
        assert prober.calls == [(spaced, "Image")]

    @pytest.mark.asyncio
    async def test_empty_image_object_is_fine(self) -> None:
        result = await _check({"title": "t", "image": {}})
        assert result.errors == []
        assert result.warnings == []


class TestFieldRules:
    @pytest.mark.asyncio
    async def test_fields_not_array(self) -> None:
        result = await _check({"title": "t", "fields": {"name": "n"}})
        assert result.errors == ["Fields is not an array"]

    @pytest.mark.asyncio
    async def test_entry_shapes(self) -> None:
        result = await _check(
            {
                "fields": [
                    None,
                    "text",
                    {"name": "n", "value": "v", "inline": "yes"},
                    {"name": "n" * 257, "value": "v" * 1025},
                    {"name": " ", "value": 7},
                ]
            }
        )
        assert result.errors == [
            "1st field is empty",
            "2nd field is not an object",
            "3rd field inline is not a boolean",
            "4th field's name is too long (>256 characters)",
            "4th field's value is too long (>1024 characters)",
            "5th field's name is empty",
            "5th field's value is empty",
        ]

    @pytest.mark.asyncio
    async def test_null_inline_is_not_boolean(self) -> None:
        result = await _check({"fields": [{"name": "n", "value": "v", "inline": None}]})
        assert result.errors == ["1st field inline is not a boolean"]

    @pytest.mark.asyncio
    async def test_eleventh_field_ordinal(self) -> None:
        fields = [{"name": "n", "value": "v"} for _ in range(10)] + [{"name": "n"}]
        result = await _check({"fields": fields})
        assert result.errors == ["11th field's value is empty"]


class TestImageProbing:
    @pytest.mark.asyncio
    async def test_probe_issues_land_in_field_order(self) -> None:
        warn = ImageIssue(text="could not be checked", severity=Severity.WARNING)
        prober = RecordingProber(
            issues={
                "https://example.com/a.png": warn,
                "https://example.com/f.png": warn,
                "https://example.com/t.png": warn,
            },
            delay=0.01,
        )
        result = await _check(
            {
                "title": "t",
                "author": {"name": "a", "icon_url": "https://example.com/a.png"},
                "thumbnail": {"url": "https://example.com/t.png"},
                "footer": {"text": "f", "icon_url": "https://example.com/f.png"},
            },
            prober=prober,
        )
        assert result.errors == []
        assert result.warnings == [
            "Footer icon could not be checked",
            "Thumbnail could not be checked",
            "Author icon could not be checked",
        ]
        assert sorted(label for _, label in prober.calls) == ["Author icon", "Footer icon", "Thumbnail"]

    @pytest.mark.asyncio
    async def test_probe_errors_are_errors(self, prober: RecordingProber) -> None:
        result = await _check({"title": "t", "image": {"url": "not a url"}}, prober=prober)
        assert result.errors == ["Image is not a valid URL"]

    @pytest.mark.asyncio
    async def test_non_object_parents_are_not_probed(self, prober: RecordingProber) -> None:
        await _check({"title": "t", "image": "https://example.com/i.png"}, prober=prober)
        assert prober.calls == []


class TestNeverRaises:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "document",
        [
            {"title": {"nested": [1, 2, {"x": None}]}},
            {"footer": {"text": [], "icon_url": {}}},
            {"author": {"name": 1, "url": [], "icon_url": 3.5}},
            {"fields": [[], {}, 0, False, {"name": {}, "value": []}]},
            {"timestamp": {}, "color": [], "url": {"a": 1}},
            {"image": {"url": None}, "thumbnail": []},
        ],
    )
    async def test_malformed_shapes_become_errors(self, document: dict[str, Any]) -> None:
        result = await _check(document, prober=RecordingProber())
        assert isinstance(result, CheckResult)
        assert result.errors
