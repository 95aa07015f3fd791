import logging
import os

from fastapi import FastAPI

from api.dependencies import backend
from api.routers import analysis, assignments, ops

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Logging configuration
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(message)s"
)
logger = logging.getLogger(__name__)

app = FastAPI(title="TaskFlow AI")

app.include_router(ops.router)
app.include_router(analysis.router)
app.include_router(assignments.router)

if backend.extractor.llm_client is None:
    logger.info("No LLM provider configured, using pattern extraction")
