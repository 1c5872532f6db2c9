import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from integration_map import config
from integration_map.api.routes import router

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Integration Map",
    version="0.1.0",
)

# Middleware before routes
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)
