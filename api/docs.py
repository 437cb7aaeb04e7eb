"""
OpenAPI document generation and the interactive documentation page.

The document is generated once from the declared routes and models, cached
on the application and served unchanged for the life of the process. Run
``python -m api.docs [path]`` to write it to a file.
"""

import json
import sys
from pathlib import Path
from typing import Any, Dict

from fastapi import FastAPI
from fastapi.openapi.docs import get_swagger_ui_html
from fastapi.openapi.utils import get_openapi
from fastapi.responses import HTMLResponse

API_TITLE = "API for Book Directory"
API_VERSION = "1.0.0"
API_DESCRIPTION = "This is a REST API application made with FastAPI for a Book Directory."


def build_openapi_schema(app: FastAPI, server_url: str) -> Dict[str, Any]:
    """Generate the OpenAPI document for every route registered on ``app``."""
    return get_openapi(
        title=API_TITLE,
        version=API_VERSION,
        description=API_DESCRIPTION,
        routes=app.routes,
        servers=[{"url": server_url, "description": "Development server"}],
    )


def install_docs(app: FastAPI, server_url: str) -> None:
    """
    Cache the OpenAPI document on ``app`` and serve Swagger UI at ``/``.

    Must be called after all routers are included.
    """

    def cached_openapi() -> Dict[str, Any]:
        if app.openapi_schema is None:
            app.openapi_schema = build_openapi_schema(app, server_url)
        return app.openapi_schema

    app.openapi = cached_openapi

    @app.get("/", include_in_schema=False, response_class=HTMLResponse)
    async def swagger_ui() -> HTMLResponse:
        return get_swagger_ui_html(openapi_url=app.openapi_url, title=API_TITLE)

    cached_openapi()


def write_openapi_schema(app: FastAPI, path: Path) -> None:
    """Write the application's OpenAPI document to ``path`` as JSON."""
    path.write_text(json.dumps(app.openapi(), indent=2) + "\n", encoding="utf-8")


if __name__ == "__main__":
    from api.main import app

    target = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("openapi.json")
    write_openapi_schema(app, target)
    print(f"OpenAPI document written to {target}")
