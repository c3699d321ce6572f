from importlib.metadata import version

import mcp.types as types
import pytest

from ktour_mcp.server import create_server


@pytest.mark.asyncio
async def test_list_tools_handler(settings):
    server = create_server(settings)
    result = await server.request_handlers[types.ListToolsRequest](types.ListToolsRequest(method="tools/list"))
    names = [t.name for t in result.root.tools]
    assert names == ["get_area_code", "search_tour_info", "get_detail_common"]


@pytest.mark.asyncio
async def test_call_tool_handler_never_raises(settings):
    server = create_server(settings)
    req = types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name="get_weather", arguments={}),
    )
    result = await server.request_handlers[types.CallToolRequest](req)
    assert result.root.isError
    assert "get_weather" in result.root.content[0].text


def test_mcp_sdk_is_1x():
    # low-level Server decorators and CallToolResult.isError are the 1.x API
    assert version("mcp").split(".")[0] == "1"
