"""Unit tests for tool result parsing and normalization."""

from types import SimpleNamespace

from mcp.types import CallToolResult, ImageContent, TextContent

from toolchat_server.tools import (
    ContentItem,
    ContentResult,
    OpaqueResult,
    normalize_tool_result,
    parse_tool_result,
)
from toolchat_server.tools.results import GENERIC_SUCCESS_MESSAGE


class TestParseToolResult:
    """Tests for converting raw MCP results into tagged results."""

    def test_mcp_text_content(self):
        raw = CallToolResult(content=[TextContent(type="text", text="done")])

        result = parse_tool_result(raw)

        assert isinstance(result, ContentResult)
        assert result.kind == "content"
        assert result.items == [ContentItem(type="text", text="done")]

    def test_mcp_mixed_content(self):
        raw = CallToolResult(
            content=[
                TextContent(type="text", text="saved"),
                ImageContent(type="image", data="aGVsbG8=", mimeType="image/png"),
            ]
        )

        result = parse_tool_result(raw)

        assert isinstance(result, ContentResult)
        assert result.items[1] == ContentItem(type="image", text=None)
        assert result.text_items == ["saved"]

    def test_dict_content(self):
        result = parse_tool_result({"content": [{"type": "text", "text": "ok"}]})

        assert isinstance(result, ContentResult)
        assert result.text_items == ["ok"]

    def test_payload_without_content_is_opaque(self):
        raw = {"status": "created"}

        result = parse_tool_result(raw)

        assert isinstance(result, OpaqueResult)
        assert result.kind == "opaque"
        assert result.payload == raw

    def test_structured_content_only_is_opaque(self):
        result = parse_tool_result({"content": [], "structuredContent": {"id": "7"}})

        assert isinstance(result, OpaqueResult)
        assert result.payload == {"id": "7"}

    def test_snake_case_structured_content_is_opaque(self):
        raw = SimpleNamespace(content=[], structured_content={"id": "8"}, is_error=False)

        result = parse_tool_result(raw)

        assert isinstance(result, OpaqueResult)
        assert result.payload == {"id": "8"}


class TestNormalizeToolResult:
    """Tests for turning tool results into user-facing messages."""

    def test_json_with_id_uses_template(self):
        result = ContentResult(items=[ContentItem(type="text", text='{"id":"42"}')])

        message = normalize_tool_result("create-contact", result)

        assert message == "create-contact completed successfully with ID: 42"
        assert '{"id"' not in message

    def test_plain_text_is_returned_verbatim(self):
        result = ContentResult(items=[ContentItem(type="text", text="done")])

        assert normalize_tool_result("create-contact", result) == "done"

    def test_text_items_joined_with_single_space(self):
        result = ContentResult(
            items=[
                ContentItem(type="text", text="Contact"),
                ContentItem(type="image"),
                ContentItem(type="text", text="saved"),
            ]
        )

        assert normalize_tool_result("create-contact", result) == "Contact saved"

    def test_json_without_id_returns_raw_text(self):
        text = '{"status": "ok"}'
        result = ContentResult(items=[ContentItem(type="text", text=text)])

        assert normalize_tool_result("create-contact", result) == text

    def test_invalid_json_returns_raw_text(self):
        text = "{not json}"
        result = ContentResult(items=[ContentItem(type="text", text=text)])

        assert normalize_tool_result("create-contact", result) == text

    def test_partially_bracketed_text_is_not_parsed(self):
        text = '{"id": "42"} created'
        result = ContentResult(items=[ContentItem(type="text", text=text)])

        assert normalize_tool_result("create-contact", result) == text

    def test_empty_content_falls_back_to_generic_message(self):
        assert normalize_tool_result("create-contact", ContentResult()) == GENERIC_SUCCESS_MESSAGE

    def test_non_text_content_falls_back_to_generic_message(self):
        result = ContentResult(items=[ContentItem(type="image")])

        assert normalize_tool_result("create-contact", result) == GENERIC_SUCCESS_MESSAGE

    def test_opaque_result_falls_back_to_generic_message(self):
        result = OpaqueResult(payload={"id": "42"})

        assert normalize_tool_result("create-contact", result) == GENERIC_SUCCESS_MESSAGE
