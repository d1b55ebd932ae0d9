import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import APP_NAME, APP_VERSION, get_settings
from routes.projection import router as projection_router

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(levelname)s: %(name)s: %(message)s",
)

app = FastAPI(
    title=APP_NAME,
    description="Deterministic retirement corpus projection: accumulation, withdrawal and solvency",
    version=APP_VERSION,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(projection_router, prefix="/api")


@app.get("/")
def root():
    return {
        "name": APP_NAME,
        "version": APP_VERSION,
        "endpoints": {
            "projection": "/api/projection/run",
            "table": "/api/projection/table",
            "compare": "/api/projection/compare",
            "quick_check": "/api/projection/quick-check",
            "defaults": "/api/projection/defaults",
        }
    }


@app.get("/health")
def health_check():
    return {"status": "healthy"}
