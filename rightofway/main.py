"""
Right-of-way referee - FastAPI Application Entry Point
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rightofway import __version__
from rightofway.api import phrase
from rightofway.config import get_cors_origins, get_log_level, setup_logging

# Package loggers only; the server keeps its own access and error logs
setup_logging(get_log_level(), "rightofway")

app = FastAPI(
    title="Right of Way",
    description="Builds fencing referee calls from a phrase of actions",
    version=__version__,
)

# Configure CORS for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(phrase.router, prefix="/api/phrase", tags=["phrase"])


@app.get("/")
async def root():
    """Health check endpoint"""
    return {"status": "ok", "name": "rightofway", "version": __version__}
