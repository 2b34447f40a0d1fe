"""Unit tests for tool intent extraction from completion text."""

from toolchat_server.tools import ToolInvocationIntent, extract_tool_intent


class TestNoIntent:
    """Completions that must not trigger a tool."""

    def test_plain_text(self):
        assert extract_tool_intent("Hello! How can I help you today?") is None

    def test_empty_text(self):
        assert extract_tool_intent("") is None

    def test_json_without_use_tool_key(self):
        text = 'Here is some data: {"toolName": "create-contact"}'
        assert extract_tool_intent(text) is None

    def test_use_tool_false(self):
        text = '{"useTool": false, "toolName": "create-contact", "toolArguments": {}}'
        assert extract_tool_intent(text) is None

    def test_malformed_json_is_swallowed(self):
        text = 'Sure {"useTool": true, "toolName": "create-contact", "toolArguments": {"name": }'
        assert extract_tool_intent(text) is None

    def test_use_tool_mentioned_in_prose(self):
        text = 'I would set "useTool" if I needed a tool, but I do not.'
        assert extract_tool_intent(text) is None

    def test_missing_tool_name(self):
        text = '{"useTool": true, "toolArguments": {"name": "Jane"}}'
        assert extract_tool_intent(text) is None

    def test_non_object_arguments(self):
        text = '{"useTool": true, "toolName": "create-contact", "toolArguments": ["Jane"]}'
        assert extract_tool_intent(text) is None


class TestIntentExtraction:
    """Completions that carry a tool intent."""

    def test_intent_surrounded_by_prose(self):
        text = (
            "Sure, I'll add Jane for you. "
            '{"useTool": true, "toolName": "create-contact", "toolArguments": {"name":"Jane"}} '
            "Let me know if you need anything else."
        )

        intent = extract_tool_intent(text)

        assert intent == ToolInvocationIntent(
            tool_name="create-contact", arguments={"name": "Jane"}
        )

    def test_intent_only(self):
        text = """{
  "useTool": true,
  "toolName": "create-contact",
  "toolArguments": { "name": "Jane", "email": "jane@example.com" }
}"""

        intent = extract_tool_intent(text)

        assert intent is not None
        assert intent.tool_name == "create-contact"
        assert intent.arguments == {"name": "Jane", "email": "jane@example.com"}

    def test_intent_in_code_fence(self):
        text = (
            "```json\n"
            '{"useTool": true, "toolName": "list-contacts", "toolArguments": {}}\n'
            "```"
        )

        intent = extract_tool_intent(text)

        assert intent is not None
        assert intent.tool_name == "list-contacts"
        assert intent.arguments == {}

    def test_missing_arguments_default_to_empty(self):
        intent = extract_tool_intent('{"useTool": true, "toolName": "list-contacts"}')

        assert intent is not None
        assert intent.arguments == {}

    def test_null_arguments_default_to_empty(self):
        text = '{"useTool": true, "toolName": "list-contacts", "toolArguments": null}'

        intent = extract_tool_intent(text)

        assert intent is not None
        assert intent.arguments == {}

    def test_braces_in_prose_before_intent(self):
        text = (
            "Use {curly} braces carefully. "
            '{"useTool": true, "toolName": "create-contact", "toolArguments": {"name": "Jo"}}'
        )

        intent = extract_tool_intent(text)

        assert intent is not None
        assert intent.arguments == {"name": "Jo"}

    def test_key_quoted_in_prose_before_intent(self):
        text = (
            'I will set "useTool" to true now: '
            '{"useTool": true, "toolName": "create-contact", "toolArguments": {"name": "Jane"}}'
        )

        assert extract_tool_intent(text) == ToolInvocationIntent(
            tool_name="create-contact", arguments={"name": "Jane"}
        )

    def test_first_intent_wins(self):
        text = (
            '{"useTool": true, "toolName": "first", "toolArguments": {}} and then '
            '{"useTool": true, "toolName": "second", "toolArguments": {}}'
        )

        intent = extract_tool_intent(text)

        assert intent is not None
        assert intent.tool_name == "first"

    def test_first_intent_is_authoritative_even_when_false(self):
        text = (
            '{"useTool": false} but maybe '
            '{"useTool": true, "toolName": "second", "toolArguments": {}}'
        )

        assert extract_tool_intent(text) is None

    def test_nested_arguments_preserved(self):
        text = (
            '{"useTool": true, "toolName": "create-contact", '
            '"toolArguments": {"name": "Jane", "address": {"city": "Oslo"}}}'
        )

        intent = extract_tool_intent(text)

        assert intent is not None
        assert intent.arguments["address"] == {"city": "Oslo"}
