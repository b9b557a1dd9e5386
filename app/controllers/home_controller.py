from __future__ import annotations

import uuid
from typing import Optional

from fastapi import Response

from app.web.controllers import Controller, action


class HomeController(Controller):
    @action
    async def index(self, id: Optional[str] = None) -> Response:
        ensured = getattr(self.request.app.state, "ensured_resources", None) or {}
        return self.view("index", {"resources": sorted(ensured), "id": id})

    @action
    async def privacy(self) -> Response:
        return self.view("privacy")

    @action
    async def error(self) -> Response:
        request_id = self.request.headers.get("x-request-id") or uuid.uuid4().hex
        response = self.view("shared/error", {"request_id": request_id})
        response.headers["Cache-Control"] = "no-store"
        return response
