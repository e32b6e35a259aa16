from fastapi import FastAPI

from action_items.api.routes.dashboard import router as dashboard_router
from action_items.config import configure_logging

configure_logging()

app = FastAPI(
    title="Meeting Action Items API",
    description="Dashboard of unchecked checklist items from Trilium meeting notes",
    version="0.1.0",
)

app.include_router(dashboard_router)


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}
