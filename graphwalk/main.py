import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from graphwalk.config import settings
from graphwalk.routers.graph import router as graph_router
from graphwalk.services.renderer import GraphRenderer
from graphwalk.services.session import GraphSession

logging.basicConfig(level=settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    session = GraphSession(GraphRenderer())
    session.open(settings.CANVAS_CONTAINER)
    app.state.session = session
    try:
        yield
    finally:
        await session.aclose()


app = FastAPI(title="Graph Traversal Playground API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(graph_router)


@app.get("/health")
async def health_check():
    return {"status": "ok"}
