import logging
from datetime import datetime
from typing import Optional

from analysis.context_analyzer import ContextAnalyzer
from analysis.task_enhancer import enhance_task
from extraction.patterns import PatternTaskExtractor
from llm.llm_client import LLMClient, LLMError, get_provider
from taskflow_ai.models import EmailMetadata, ReferenceData, TaskParseResult

logger = logging.getLogger(__name__)


def default_llm_client() -> Optional[LLMClient]:
    try:
        provider = get_provider()
    except (RuntimeError, ValueError) as e:
        logger.warning(f"LLM provider unavailable, using pattern extraction only: {e}")
        return None
    return LLMClient(provider=provider) if provider is not None else None


class TaskExtractor:
    """Single entry point for turning text into enhanced tasks.

    The LLM path is tried first when a client is configured; any failure
    there degrades to the deterministic pattern extractor. Either way the
    draft tasks are then enhanced with a context analysis of the same text.
    """

    def __init__(
        self,
        llm_client: Optional[LLMClient] = None,
        analyzer: Optional[ContextAnalyzer] = None,
        use_default_llm: bool = False,
    ):
        if llm_client is None and use_default_llm:
            llm_client = default_llm_client()
        self.llm_client = llm_client
        self.analyzer = analyzer or ContextAnalyzer()
        self.patterns = PatternTaskExtractor(self.analyzer)

    def extract(
        self,
        message: str,
        reference: Optional[ReferenceData] = None,
        now: Optional[datetime] = None,
    ) -> TaskParseResult:
        now = now or datetime.now()
        draft = None

        if self.llm_client is not None and message.strip():
            try:
                draft = self.llm_client.extract_tasks(message, reference, now=now)
            except LLMError as e:
                logger.warning(f"LLM extraction failed, falling back to patterns: {e}")

        if draft is None:
            draft = self.patterns.parse_message(message, now=now)

        return self._enhance(draft, message, reference, now)

    def extract_email(
        self,
        content: str,
        metadata: EmailMetadata,
        reference: Optional[ReferenceData] = None,
        now: Optional[datetime] = None,
    ) -> TaskParseResult:
        now = now or datetime.now()
        is_client = metadata.is_client or "client" in metadata.from_address.lower()
        draft = None

        if self.llm_client is not None and content.strip():
            try:
                draft = self.llm_client.extract_email_tasks(
                    content, metadata, reference, is_client=is_client, now=now
                )
            except LLMError as e:
                logger.warning(f"LLM email extraction failed, falling back to patterns: {e}")

        if draft is None:
            draft = self.patterns.parse_email(content, metadata, now=now)

        text = f"{metadata.subject}. {content}" if metadata.subject else content
        return self._enhance(draft, text, reference, now)

    def _enhance(
        self,
        draft: TaskParseResult,
        text: str,
        reference: Optional[ReferenceData],
        now: datetime,
    ) -> TaskParseResult:
        if not draft.tasks:
            return draft

        analysis = self.analyzer.analyze(text, reference, now=now)
        tasks = [enhance_task(task, analysis) for task in draft.tasks]
        logger.info(f"Extracted {len(tasks)} task(s) (confidence {draft.confidence:.2f})")
        return draft.model_copy(update={"tasks": tasks})
