from __future__ import annotations

import os
from typing import List, Optional
from urllib.parse import quote

from fastapi import APIRouter, Body, HTTPException
from fastapi.responses import Response, StreamingResponse
from pydantic import BaseModel

from librarium.FileAccessGate import FileAccessError, FileAccessManager
from librarium.FileAccessGate.archive import iter_chunks
from librarium.shared.gate import GateLogger

from .errors import attachment, to_http

_log = GateLogger.get("Lectern")


class DeleteRequest(BaseModel):
    """Model for deleting several paths at once."""
    paths: List[str]


def create_router(files: FileAccessManager, static_base_url: str = "") -> APIRouter:
    router = APIRouter()

    def download_url(ref: str) -> str:
        if static_base_url:
            return f"{static_base_url}/{quote(ref)}"
        return f"/api/files/download?path={quote(ref)}"

    @router.get("/api/files/list")
    def api_list_files(path: str = ""):
        """List directory contents."""
        try:
            entries = files.list_directory(path)
        except FileAccessError as e:
            raise to_http(e, "list")

        result = []
        for entry in entries:
            data = entry.to_dict()
            if entry.download_ref is not None:
                data["url"] = download_url(entry.download_ref)
            result.append(data)
        return result

    @router.get("/api/files/download")
    def api_download_file(path: str):
        """Stream a single file as an attachment."""
        try:
            stream = files.open_read_stream(path)
        except FileAccessError as e:
            raise to_http(e, "download")

        return StreamingResponse(
            iter_chunks(stream),
            media_type="application/octet-stream",
            headers={"Content-Disposition": attachment(os.path.basename(path))},
        )

    @router.get("/api/files/zip")
    def api_download_zip(path: str = ""):
        """Download a directory subtree as a zip archive."""
        try:
            data = files.create_archive(path)
        except FileAccessError as e:
            raise to_http(e, "zip")

        name = os.path.basename(path.rstrip("/\\")) or os.path.basename(files.base_directory) or "archive"
        return Response(
            content=data,
            media_type="application/zip",
            headers={"Content-Disposition": attachment(f"{name}.zip")},
        )

    @router.get("/api/files/content")
    def api_file_content(path: str):
        """Read a text file for preview."""
        try:
            return {"content": files.read_text(path)}
        except FileAccessError as e:
            raise to_http(e, "content")

    @router.delete("/api/files")
    def api_delete_files(path: Optional[str] = None, data: Optional[DeleteRequest] = Body(default=None)):
        """Delete one path, or every path in the request body."""
        if data is not None and data.paths:
            paths = data.paths
        elif path:
            paths = [path]
        else:
            raise HTTPException(status_code=400, detail="A path or a list of paths is required")

        outcome = files.delete_paths(paths)
        if not outcome.success:
            failures = "; ".join(f"{f.path}: {f.error}" for f in outcome.failed)
            _log.error(f"delete failed: {failures}")
            raise HTTPException(
                status_code=500,
                detail={
                    "error": "Failed to delete file",
                    "deleted": outcome.deleted,
                    "failed": [f.model_dump() for f in outcome.failed],
                },
            )

        message = "File deleted successfully" if len(paths) == 1 else f"Deleted {len(paths)} items"
        return {"message": message, "deleted": outcome.deleted, "failed": []}

    return router


__all__ = ["create_router"]
