from typing import Any, Dict, List, Optional

import anyio
import mcp.types as types
from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server

from . import __version__
from .config import Settings, load_settings
from .tools import TourTools
from .utils import logger


def create_server(settings: Settings) -> Server:
    server = Server("ktour-api")
    tools = TourTools(settings)

    # ---------- tools catalog ----------
    @server.list_tools()
    async def handle_list_tools() -> List[types.Tool]:
        return tools.list_tools()

    # argument validation happens in TourTools so error messages name the tool
    @server.call_tool(validate_input=False)
    async def handle_call_tool(name: str, arguments: Optional[Dict[str, Any]]) -> types.CallToolResult:
        return await tools.call(name, arguments)

    return server


async def _main() -> None:
    server = create_server(load_settings())
    async with stdio_server() as (read, write):
        caps = server.get_capabilities(
            notification_options=NotificationOptions(),
            experimental_capabilities={}
        )

        init_opts = InitializationOptions(
            server_name="ktour-api",
            server_version=__version__,
            capabilities=caps
        )

        logger.info("server_started", extra={"server": "ktour-api", "version": __version__})
        await server.run(read, write, init_opts)


def main() -> None:
    anyio.run(_main)


if __name__ == "__main__":
    main()
