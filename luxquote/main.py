from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .routers import estimate, materials

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("luxquote")

app = FastAPI(
    title=f"{settings.APP_NAME} API",
    description="Laser cutting instant quotes: artwork measurement, manufacturability checks, tiered pricing",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(materials.router, prefix="/api")
app.include_router(estimate.router, prefix="/api")

logger.info("%s API ready (complexity cap %d)", settings.APP_NAME, settings.COMPLEXITY_CAP)


@app.get("/health")
def health():
    return {"status": "ok", "app": "luxquote"}
