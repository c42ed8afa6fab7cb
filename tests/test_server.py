"""
Tests for the MCP server registration.
"""

from unittest.mock import AsyncMock, patch

import pytest

from wiremcp import server
from wiremcp.tools import ToolResult

TOOL_NAMES = {
    "capture_packets",
    "get_summary_stats",
    "get_conversations",
    "check_threats",
    "check_ip_threats",
    "analyze_pcap",
    "extract_credentials",
}

PROMPT_NAMES = {
    "capture_packets_prompt",
    "summary_stats_prompt",
    "conversations_prompt",
    "check_threats_prompt",
    "check_ip_threats_prompt",
    "analyze_pcap_prompt",
    "extract_credentials_prompt",
}


class TestRegistration:
    """Tests for tool and prompt registration."""

    @pytest.mark.asyncio
    async def test_tools_registered(self):
        """Every tool is exposed by name."""
        tools = await server.mcp.list_tools()
        assert {tool.name for tool in tools} == TOOL_NAMES

    @pytest.mark.asyncio
    async def test_prompts_registered(self):
        """Every companion prompt is exposed by name."""
        prompts = await server.mcp.list_prompts()
        assert {prompt.name for prompt in prompts} == PROMPT_NAMES

    @pytest.mark.asyncio
    async def test_capture_defaults(self):
        """Live capture tools default to en0 for 5 seconds."""
        tools = {tool.name: tool for tool in await server.mcp.list_tools()}
        properties = tools["capture_packets"].inputSchema["properties"]

        assert properties["interface"]["default"] == "en0"
        assert properties["duration"]["default"] == 5


class TestToolWrappers:
    """Tests for the ToolResult to MCP adaptation."""

    def test_success_result(self):
        """Successful results are plain text content."""
        result = server.to_call_result(ToolResult.success("IP checked: 1.2.3.4"))

        assert not result.isError
        assert result.content[0].type == "text"
        assert result.content[0].text == "IP checked: 1.2.3.4"

    def test_error_result(self):
        """Failures set isError and keep the Error: text."""
        result = server.to_call_result(ToolResult.failure("File not found: x.pcap"))

        assert result.isError
        assert result.content[0].text == "Error: File not found: x.pcap"

    @pytest.mark.asyncio
    async def test_wrapper_delegates(self):
        """Wrappers pass their arguments to the tool implementation."""
        implementation = AsyncMock(return_value=ToolResult.success("ok"))

        with patch.object(server.tools, "extract_credentials", implementation):
            result = await server.extract_credentials("/tmp/x.pcap", "telnet")

        implementation.assert_awaited_once_with("/tmp/x.pcap", "telnet")
        assert result.content[0].text == "ok"


class TestPrompts:
    """Tests for the prompt texts."""

    def test_prompts_mention_arguments(self):
        """Prompt text includes the caller's arguments."""
        assert "eth1" in server.capture_packets_prompt("eth1", "10")
        assert "10 seconds" in server.conversations_prompt("eth1", "10")
        assert "203.0.113.7" in server.check_ip_threats_prompt("203.0.113.7")
        assert "/tmp/x.pcap" in server.extract_credentials_prompt("/tmp/x.pcap")
