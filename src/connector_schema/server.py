"""FastAPI application and entry point for the schema tool server.

This module builds the schema client from configuration and registers the
MCP tools that expose it.
"""

import argparse
import os
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from fastmcp import FastMCP

from .annotations import AnnotationLoader
from .auth import OAuthTokenProvider
from .config import load_config
from .db import SchemaClient
from .logging_utils import configure_logging
from .tools import register_schema_tools


def _config_path() -> Path:
    """Get the configuration file path from environment or default."""
    path = os.environ.get("CONNECTOR_SCHEMA_CONFIG", "config.example.yml")
    return Path(path)


def create_app(config_path: Path | None = None) -> tuple[FastAPI, SchemaClient]:
    """Create and configure the schema tool server application.

    Args:
        config_path: Optional path to config file. If None, uses default from environment.

    Returns:
        tuple: (combined_app, schema_client)
    """
    if config_path is None:
        config_path = _config_path()

    config = load_config(config_path)
    configure_logging(config.observability.log_level)

    token_provider = OAuthTokenProvider(config.oauth)
    annotations = AnnotationLoader(
        config.annotations.directory, enabled=config.annotations.enabled
    )
    schema_client = SchemaClient(config, token_provider, annotations)

    mcp_server = FastMCP(name="connector-schema")
    register_schema_tools(mcp_server, schema_client)

    mcp_app = mcp_server.http_app()

    app = FastAPI(
        title="Connector Schema Server",
        description="Enriched table schemas for data connectors",
        version="0.1.0",
        lifespan=mcp_app.lifespan,
    )

    @app.get("/", include_in_schema=False)
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"message": "Connector schema server is running", "status": "healthy"}

    combined_app = FastAPI(
        title="Connector Schema App",
        routes=[
            *mcp_app.routes,
            *app.routes,
        ],
        lifespan=mcp_app.lifespan,
    )

    return combined_app, schema_client


def app_factory() -> FastAPI:
    """Application factory used by uvicorn."""
    combined_app, _ = create_app()
    return combined_app


def main() -> None:
    """Start the schema tool server using uvicorn.

    Configuration:
        - host: "0.0.0.0" - Binds to all network interfaces
        - port: Configurable via --port argument (default: 8000)
    """
    parser = argparse.ArgumentParser(description="Start the connector schema server")
    parser.add_argument(
        "--port", type=int, default=8000, help="Port to run the server on (default: 8000)"
    )
    args = parser.parse_args()

    uvicorn.run(
        "connector_schema.server:app_factory",
        host="0.0.0.0",
        port=args.port,
        factory=True,
    )


if __name__ == "__main__":
    main()
