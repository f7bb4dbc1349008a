"""FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .api.routes import router
from .utils.logger import setup_logger

VERSION = "0.1.0"

settings = get_settings()
setup_logger(level=settings.log_level, log_file=settings.log_file)

# Create FastAPI app
app = FastAPI(
    title="Serpstat MCP Tools",
    description="Validated Serpstat SEO API tools with aggregated reports and insights",
    version=VERSION,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(router)


@app.get("/")
async def root():
    """Service index."""
    return {
        "name": "Serpstat MCP Tools",
        "version": VERSION,
        "docs": "/docs",
        "health": "/api/health",
        "tools": "/api/tools",
    }


def main():
    """Run the application."""
    import uvicorn

    uvicorn.run(
        "serpstat_mcp.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
