from datetime import datetime, timezone
from typing import Optional
from uuid import UUID, uuid5, NAMESPACE_URL

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from galaxy_export.models.schemas import StarSystem
from galaxy_export.node.stars import generate_system


def system_id_for(name: str) -> UUID:
    return uuid5(NAMESPACE_URL, f"galaxy-node:{name}")


def create_app(name: str, system_id: Optional[UUID] = None, address: Optional[str] = None) -> FastAPI:
    """A single-system node answering on the endpoints galaxy-export polls."""
    app = FastAPI(title=f"galaxy node {name}")
    app.state.system = generate_system(name, system_id or system_id_for(name), address=address)

    @app.get("/system")
    async def system_info():
        system: StarSystem = app.state.system
        system = system.model_copy(update={"last_seen_at": datetime.now(timezone.utc).replace(microsecond=0)})
        app.state.system = system
        return JSONResponse(system.model_dump(mode="json", by_alias=True, exclude_none=True))

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app
