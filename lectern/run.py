"""
Librarium HTTP server.

    librarium-server                          # reads .env / environment
    uvicorn lectern.run:create_app --factory  # same, under an external uvicorn
"""

from __future__ import annotations

from typing import Optional

import uvicorn
from fastapi import FastAPI

from librarium import Config
from librarium.Config import Settings
from librarium.FileAccessGate import FileAccessManager
from librarium.PromptGate import EntryStore
from librarium.shared.gate import GateLogger

from lectern import lifecycle
from lectern.api import files as files_api
from lectern.api import health as health_api
from lectern.api import prompts as prompts_api


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application from validated settings.

    Args:
        settings: Settings to use; loaded from the environment when omitted

    Raises:
        ConfigError: If the environment is missing required values
    """
    settings = settings or Config.get_settings()
    GateLogger.set_level(settings.log_level)
    lifecycle.prepare(settings)

    files = FileAccessManager(settings.base_directory, settings.preview_extensions)
    store = EntryStore(
        FileAccessManager(settings.prompts_directory),
        settings.prompt_extensions,
    )

    app = FastAPI(title="Librarium")
    app.state.settings = settings
    app.state.files = files
    app.state.prompts = store

    @app.on_event("startup")
    async def startup_event():
        await lifecycle.startup(settings)

    @app.on_event("shutdown")
    async def shutdown_event():
        await lifecycle.shutdown()

    app.include_router(files_api.create_router(files, settings.static_base_url))
    app.include_router(prompts_api.create_router(store))
    app.include_router(health_api.create_router({
        "FileAccessGate": files,
        "PromptGate": store,
    }))

    return app


def main():
    settings = Config.get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
