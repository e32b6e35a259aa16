"""Run the API with uvicorn: ``python -m action_items.api``."""

from __future__ import annotations

import uvicorn

from action_items.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "action_items.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )
