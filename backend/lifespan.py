"""
Lifespan module for the Desteli Studio site backend
Builds the stores and services on startup and releases them on shutdown
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
import logging
import os

import config
from database import create_client, get_kv_collection
from stores import JsonFileStore, MongoDocumentStore
from services.app_link_service import AppLinkService
from services.deletion_request_service import DeletionRequestService
from services.redirect_service import RedirectResolver

logger = logging.getLogger(__name__)


def build_stores(backend: str, data_dir: str, kv_collection=None):
    """Return (app_link_store, deletion_request_store) for the chosen backend."""
    if backend == "mongo":
        return (
            MongoDocumentStore(kv_collection, config.APP_LINKS_KEY),
            MongoDocumentStore(kv_collection, config.DELETION_REQUESTS_KEY),
        )
    return (
        JsonFileStore(os.path.join(data_dir, config.APP_LINKS_FILENAME)),
        JsonFileStore(os.path.join(data_dir, config.DELETION_REQUESTS_FILENAME)),
    )


def install_services(app: FastAPI, app_link_store, deletion_request_store) -> None:
    app_link_service = AppLinkService(app_link_store)
    app.state.store_backend = app_link_store.backend
    app.state.app_link_service = app_link_service
    app.state.redirect_resolver = RedirectResolver(app_link_service)
    app.state.deletion_request_service = DeletionRequestService(deletion_request_store)


@asynccontextmanager
async def lifespan(app: FastAPI):
    startup_logger = logging.getLogger("uvicorn")

    mongo_client = None
    kv_collection = None
    if config.LINK_STORE_BACKEND == "mongo":
        mongo_client = create_client()
        kv_collection = get_kv_collection(mongo_client)

    app_link_store, deletion_request_store = build_stores(
        config.LINK_STORE_BACKEND, config.DATA_DIR, kv_collection
    )
    install_services(app, app_link_store, deletion_request_store)
    app.state.mongo_client = mongo_client
    startup_logger.info(f"App link store ready: {app_link_store!r}")
    startup_logger.info(f"Deletion request store ready: {deletion_request_store!r}")

    yield

    shutdown_logger = logging.getLogger("uvicorn")
    if mongo_client is not None:
        mongo_client.close()
        shutdown_logger.info("MongoDB client closed")
