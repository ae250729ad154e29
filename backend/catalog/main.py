from fastapi import FastAPI
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.middleware.cors import CORSMiddleware

from catalog.core.database import init_db
from catalog.utils.logger import logger
from catalog.api import catalog, library
from catalog.api.metrics_api import router as metrics_api_router


app = FastAPI(title="Catalog Cards API", version="1.0.0")

# Add GZip compression middleware for better transfer performance
app.add_middleware(GZipMiddleware, minimum_size=1000)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(catalog.router, prefix="/api/catalog", tags=["Catalog"])
app.include_router(library.router, prefix="/api/library", tags=["Library"])
app.include_router(metrics_api_router, prefix="/api", tags=["Metrics"])


@app.on_event("startup")
async def startup_event():
    init_db()
    logger.info("Catalog API started")


@app.get("/health")
def health():
    return {"status": "ok"}
