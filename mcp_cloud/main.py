from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import get_settings
from .database import engine, Base
from .routers import templates, template_instances, kubernetes
from .routers.kubernetes import get_resource_operations
from .services.kubernetes import (
    ConnectivityMonitor,
    ExecutionMode,
    ResourceOperations,
    init_kubernetes,
)
from . import models  # noqa: F401  (registers tables on Base.metadata)
from . import schemas

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI(title="MCP Cloud API")

# Kubernetes handle is loaded once on startup; None until then (or if loading fails)
app.state.kubernetes = None

if settings.cors_origin_list:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.on_event("startup")
async def startup():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created successfully")

    mode = ExecutionMode.from_string(settings.environment)
    app.state.kubernetes = init_kubernetes(mode)
    if app.state.kubernetes is None:
        logger.warning(f"Starting without Kubernetes access ({mode} mode), /health will report it")


app.include_router(templates.router)
app.include_router(template_instances.router)
app.include_router(kubernetes.router)


@app.get("/")
async def root():
    return {"message": "MCP Cloud API"}


@app.get("/health", response_model=schemas.HealthResponse)
async def health_check(operations: ResourceOperations = Depends(get_resource_operations)):
    connected = await ConnectivityMonitor(operations).is_connected()
    return {
        "status": "healthy" if connected else "degraded",
        "service": "mcp-cloud-api",
        "kubernetes": connected,
    }


def run_server():
    """Console entry point."""
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
