"""
FastAPI Main Application

Tick range computation and liquidity simulation API.
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from datetime import datetime

from range_lp.config import settings
from range_lp.api.v1 import health, liquidity, ranges

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Include routers
app.include_router(ranges.router, prefix="/api/v1", tags=["Ranges"])
app.include_router(liquidity.router, prefix="/api/v1", tags=["Liquidity"])
app.include_router(health.router, prefix="/api/v1", tags=["Health"])


@app.get("/")
async def root():
    """Root endpoint with API information"""
    return {
        "name": settings.API_TITLE,
        "version": settings.API_VERSION,
        "description": settings.API_DESCRIPTION,
        "docs": "/docs",
        "health": "/api/v1/health",
        "timestamp": datetime.utcnow().isoformat()
    }


@app.on_event("startup")
async def startup_event():
    """Actions to perform on application startup"""
    logger.info("Starting %s v%s", settings.API_TITLE, settings.API_VERSION)
    logger.info("Tick alignment: %s, default width: %s bps", settings.TICK_ALIGNMENT, settings.DEFAULT_WIDTH_BPS)
    if not settings.GRAPH_API_KEY:
        logger.warning("GRAPH_API_KEY not set; /pools/{pool_id}/range is unavailable")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "range_lp.api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )
