"""FastAPI application serving the read-only site configuration."""

import logging
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv('.env')

# Configure logging BEFORE importing any modules that use logger
log_level = os.getenv('LOG_LEVEL', 'INFO')
logging.basicConfig(
    level=getattr(logging, log_level.upper()),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Import after logging is configured
from fastapi import FastAPI
from blogsite import __version__
from blogsite.dependencies import get_plugin_host, get_site_config
from blogsite.routers import site_router

# Create FastAPI app
app = FastAPI(
    title="Blog Site Config Service",
    description="Read-only site metadata and plugin activations for the blog",
    version=__version__,
)

app.include_router(site_router)  # /api/site, /api/plugins


@app.get("/")
async def root():
    config = get_site_config()
    return {"title": config.site_metadata.title, "docs": "/docs"}


@app.on_event("startup")
async def startup_event():
    """Load the site config and start its plugins in declaration order."""
    logger.info("Starting Blog Site Config Service")
    logger.info(f"Working directory: {Path.cwd()}")

    config = get_site_config()
    logger.info(f"Site: {config.site_metadata.title} ({config.site_metadata.site_url})")
    logger.info(f"  - Plugins: {', '.join(config.plugin_ids) or 'none'}")

    await get_plugin_host().start_all()


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Shutting down Blog Site Config Service")
    await get_plugin_host().stop_all()


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", "9090"))
    uvicorn.run("app:app", host="0.0.0.0", port=port, reload=True)
