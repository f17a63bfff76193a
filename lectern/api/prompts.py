from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from librarium.FileAccessGate import FileAccessError
from librarium.PromptGate import EntryStore

from .errors import to_http


class PromptWriteRequest(BaseModel):
    """Model for creating or updating a prompt file."""
    folder: Optional[str] = None
    action: Optional[str] = None
    filename: Optional[str] = None
    content: str = ""


class OrderUpdate(BaseModel):
    """Model for saving the action order of a folder."""
    folder: str
    order: List[str]


def create_router(store: EntryStore) -> APIRouter:
    router = APIRouter()

    @router.get("/api/prompts")
    def api_get_prompts(
        folder: Optional[str] = None,
        action: Optional[str] = None,
        filename: Optional[str] = None,
    ):
        """Read a prompt, or list prompts for the library, a folder, or an action."""
        try:
            if folder and filename:
                return {"content": store.read_entry(folder, action, filename)}

            if folder and action:
                prompts = [
                    {"name": name, "path": f"{folder}/{action}/{name}"}
                    for name in store.list_entries(folder, action)
                ]
                return {"folder": folder, "action": action, "prompts": prompts}

            if folder:
                prompts = [
                    {"name": name, "path": f"{folder}/{name}"}
                    for name in store.list_prompt_files(folder)
                ]
                return {
                    "folder": folder,
                    "actions": store.ordered_actions(folder),
                    "prompts": prompts,
                }

            return {"folders": [f.to_dict() for f in store.list_library()]}
        except FileAccessError as e:
            raise to_http(e, "get prompts")

    @router.post("/api/prompts")
    def api_write_prompt(data: PromptWriteRequest):
        """Create or update a prompt file."""
        if not data.folder or not data.filename:
            raise HTTPException(status_code=400, detail="Folder and filename are required")
        try:
            store.write_entry(data.folder, data.action, data.filename, data.content)
        except FileAccessError as e:
            raise to_http(e, "write prompt")
        return {"success": True}

    @router.delete("/api/prompts")
    def api_delete_prompt(
        folder: Optional[str] = None,
        filename: Optional[str] = None,
        action: Optional[str] = None,
    ):
        """Delete a prompt file."""
        if not folder or not filename:
            raise HTTPException(status_code=400, detail="Folder and filename are required")
        try:
            deleted = store.delete_entry(folder, action, filename)
        except FileAccessError as e:
            raise to_http(e, "delete prompt")
        if not deleted:
            raise HTTPException(status_code=404, detail="File not found")
        return {"message": "File deleted successfully"}

    @router.get("/api/prompts/order")
    def api_get_order(folder: str):
        """Get the saved action order of a folder."""
        try:
            return {"folder": folder, "order": store.get_order(folder)}
        except FileAccessError as e:
            raise to_http(e, "get order")

    @router.put("/api/prompts/order")
    def api_save_order(data: OrderUpdate):
        """Save the action order of a folder."""
        try:
            store.save_order(data.folder, data.order)
        except FileAccessError as e:
            raise to_http(e, "save order")
        return {"folder": data.folder, "order": data.order}

    @router.delete("/api/prompts/path")
    def api_delete_path(path: str):
        """Delete a folder, action, or file anywhere in the library."""
        try:
            store.delete_folder_or_file(path)
        except FileAccessError as e:
            raise to_http(e, "delete path")
        return {"message": "Deleted successfully"}

    return router


__all__ = ["create_router"]
