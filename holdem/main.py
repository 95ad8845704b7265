"""FastAPI application factory."""
from __future__ import annotations
import os

import uvicorn
from fastapi import FastAPI

from holdem.api.routes import router


def create_app() -> FastAPI:
    app = FastAPI(
        title="Fixed-Limit Hold'em Engine",
        description="Fixed-limit Texas Hold'em tables for model-driven seats",
        version="1.0.0",
    )
    app.include_router(router)
    return app


app = create_app()


def serve() -> None:
    """Run the API with uvicorn; HOLDEM_HOST / HOLDEM_PORT override the bind address."""
    uvicorn.run(
        "holdem.main:app",
        host=os.environ.get("HOLDEM_HOST", "127.0.0.1"),
        port=int(os.environ.get("HOLDEM_PORT", "8000")),
        log_level="info",
    )


if __name__ == "__main__":
    serve()
