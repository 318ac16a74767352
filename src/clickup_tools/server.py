"""
Servidor MCP (stdio) que expõe o catálogo de tools do ClickUp.

Apenas traduz: list_tools vem do catálogo, call_tool delega para o handle()
do handler, que sempre retorna string.
"""

import asyncio
from typing import Any, Dict, List, Optional

from loguru import logger
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool, ToolAnnotations

from .client import ClickUpClient
from .config import Settings, validate_settings
from .log import setup_logging
from .registry import ToolCatalog, ToolDescriptor, build_catalog

SERVER_NAME = "clickup_tools"


def tool_definition(descriptor: ToolDescriptor) -> Tool:
    """Converte um descritor do catálogo em definição de tool MCP."""
    return Tool(
        name=descriptor.name,
        description=descriptor.description,
        inputSchema=descriptor.handler.parameters_schema(),
        annotations=ToolAnnotations(
            title=descriptor.label,
            readOnlyHint=descriptor.read_only,
            destructiveHint=descriptor.destructive,
            idempotentHint=descriptor.read_only,
            openWorldHint=True,
        ),
    )


def list_tool_definitions(catalog: ToolCatalog) -> List[Tool]:
    return [tool_definition(d) for d in catalog]


async def dispatch(
    catalog: ToolCatalog,
    client: ClickUpClient,
    name: str,
    arguments: Optional[Dict[str, Any]]
) -> List[TextContent]:
    """Executa uma tool pelo nome e embrulha o resultado em TextContent."""
    if name not in catalog:
        logger.warning(f"Tool desconhecida: {name}")
        return [TextContent(type="text", text=f"Unknown tool: {name}")]

    handler = catalog.instantiate(name, client)
    result = await handler.handle(arguments or {})
    return [TextContent(type="text", text=result)]


def create_server(catalog: ToolCatalog, client: ClickUpClient) -> Server:
    """Monta o servidor MCP com o catálogo e o cliente informados."""
    app = Server(SERVER_NAME)

    @app.list_tools()
    async def list_tools() -> List[Tool]:
        return list_tool_definitions(catalog)

    @app.call_tool()
    async def call_tool(name: str, arguments: Dict[str, Any]) -> List[TextContent]:
        logger.info(f"Tool chamada: {name}")
        return await dispatch(catalog, client, name, arguments)

    return app


async def main(settings: Optional[Settings] = None) -> None:
    """Run the MCP server."""
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level, settings.log_file)
    validate_settings(settings)

    catalog = build_catalog()
    if settings.read_only:
        catalog = catalog.read_only()
    logger.info(f"{len(catalog)} tools disponíveis")

    app = create_server(catalog, ClickUpClient(settings.credentials))
    async with stdio_server() as (read_stream, write_stream):
        await app.run(read_stream, write_stream, app.create_initialization_options())


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
