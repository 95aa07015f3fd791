import asyncio
import logging
import time
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, field_validator

from api.backend import BackendAPI
from api.dependencies import get_backend
from api.metrics import TASKS_EXTRACTED_TOTAL, record_request
from taskflow_ai.models import (
    ContextAnalysis,
    EmailMetadata,
    ExtractedTask,
    ReferenceData,
    TaskParseResult,
)
from taskflow_ai.normalize import parse_datetime

router = APIRouter()
logger = logging.getLogger(__name__)


class MessageIn(BaseModel):
    message: str
    reference: Optional[ReferenceData] = None
    now: Optional[datetime] = None

    @field_validator("now", mode="before")
    @classmethod
    def naive_now(cls, v):
        return parse_datetime(v)


class EmailIn(BaseModel):
    content: str
    metadata: EmailMetadata
    reference: Optional[ReferenceData] = None
    now: Optional[datetime] = None

    @field_validator("now", mode="before")
    @classmethod
    def naive_now(cls, v):
        return parse_datetime(v)


class EnhanceIn(BaseModel):
    task: ExtractedTask
    analysis: ContextAnalysis


class EnhanceOut(BaseModel):
    task: ExtractedTask = Field(..., description="The task with context folded in")


@router.post("/analyze", response_model=ContextAnalysis)
async def analyze(payload: MessageIn, backend: BackendAPI = Depends(get_backend)) -> ContextAnalysis:
    start = time.time()
    analysis = backend.analyze_context(payload.message, payload.reference, now=payload.now)
    record_request("/analyze", "ok", start)
    return analysis


@router.post("/tasks/extract", response_model=TaskParseResult)
async def extract_tasks(payload: MessageIn, backend: BackendAPI = Depends(get_backend)) -> TaskParseResult:
    start = time.time()
    # LLM providers block on network I/O
    result = await asyncio.to_thread(
        backend.extract_tasks, payload.message, payload.reference, payload.now
    )
    TASKS_EXTRACTED_TOTAL.labels(source="message").inc(len(result.tasks))
    record_request("/tasks/extract", "ok", start)
    return result


@router.post("/emails/extract", response_model=TaskParseResult)
async def extract_email_tasks(payload: EmailIn, backend: BackendAPI = Depends(get_backend)) -> TaskParseResult:
    start = time.time()
    result = await asyncio.to_thread(
        backend.extract_email_tasks,
        payload.content,
        payload.metadata,
        payload.reference,
        payload.now,
    )
    TASKS_EXTRACTED_TOTAL.labels(source="email").inc(len(result.tasks))
    record_request("/emails/extract", "ok", start)
    return result


@router.post("/tasks/enhance", response_model=EnhanceOut)
async def enhance(payload: EnhanceIn, backend: BackendAPI = Depends(get_backend)) -> EnhanceOut:
    start = time.time()
    task = backend.enhance_task(payload.task, payload.analysis)
    record_request("/tasks/enhance", "ok", start)
    return EnhanceOut(task=task)
