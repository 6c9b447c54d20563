"""
Desteli Studio site backend
App-link directory, store redirect pages and account deletion requests
"""
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
import logging

from config import CORS_ALLOW_ORIGINS, LOG_LEVEL
from database import ping
from lifespan import lifespan
from models import HealthResponse
from routers import app_links, deletion_requests, pages

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="Desteli Studio Site API", lifespan=lifespan)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(app_links.router)
app.include_router(deletion_requests.router)
app.include_router(pages.router)


@app.get("/health", response_model=HealthResponse)
async def health(request: Request):
    backend = request.app.state.store_backend
    mongo_client = getattr(request.app.state, "mongo_client", None)
    if mongo_client is not None and not await ping(mongo_client):
        raise HTTPException(status_code=503, detail="Database unhealthy")
    return HealthResponse(status="healthy", store=backend)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
