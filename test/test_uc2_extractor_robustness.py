import httpx

from extraction.task_extractor import TaskExtractor
from llm.llm_client import LLMClient
from taskflow_ai.models import EmailMetadata


def test_uc2_garbage_output(fake_provider_factory, now):
    provider = fake_provider_factory("THIS IS NOT JSON AT ALL")
    extractor = TaskExtractor(llm_client=LLMClient(provider=provider))
    result = extractor.extract("random text", now=now)
    assert result.tasks == []


def test_garbage_output_falls_back_to_patterns(fake_provider_factory, now):
    provider = fake_provider_factory("Sorry, I cannot help with that.")
    extractor = TaskExtractor(llm_client=LLMClient(provider=provider))
    result = extractor.extract("We need to ship the newsletter", now=now)
    assert result.tasks[0].title == "Ship the newsletter"
    assert result.tasks[0].confidence >= 0.85


def test_uc2_null_description(fake_provider_factory, now):
    provider = fake_provider_factory(
        '{"tasks":[{"title":"Dentist","description":null,"estimatedHours":1}]}'
    )
    extractor = TaskExtractor(llm_client=LLMClient(provider=provider))
    result = extractor.extract("Dentist", now=now)
    assert len(result.tasks) == 1
    assert result.tasks[0].description == ""


def test_llm_fields_are_normalized(fake_provider_factory, now):
    provider = fake_provider_factory(
        '{"tasks":[{"title":"  Invoice ","priority":"asap","estimatedHours":250,'
        '"dueDate":"2019-05-01T10:00:00","confidence":7,"tags":["a","a"]}],'
        '"confidence":"high"}'
    )
    extractor = TaskExtractor(llm_client=LLMClient(provider=provider))
    result = extractor.extract("Invoice", now=now)
    task = result.tasks[0]
    assert task.title == "Invoice"
    assert task.priority == "medium"
    assert task.estimated_hours == 100.0
    assert task.due_date is None
    assert task.confidence == 1.0
    assert task.tags == ["a"]
    assert result.confidence == 0.5


def test_schema_violation_falls_back(fake_provider_factory, now):
    provider = fake_provider_factory('{"tasks":[{"description":"no title"}]}')
    extractor = TaskExtractor(llm_client=LLMClient(provider=provider))
    result = extractor.extract("We should book the venue", now=now)
    assert result.tasks[0].title == "Book the venue"


def test_transport_error_falls_back(raising_provider_factory, now):
    provider = raising_provider_factory(httpx.ConnectError("connection refused"))
    extractor = TaskExtractor(llm_client=LLMClient(provider=provider))
    metadata = EmailMetadata(from_address="client@acme.com", subject="Meeting")
    result = extractor.extract_email("Could we have a call tomorrow?", metadata, now=now)
    assert [t.title for t in result.tasks] == ["Schedule client meeting"]


def test_empty_message_skips_llm(fake_provider_factory, now):
    provider = fake_provider_factory('{"tasks":[{"title":"Should not appear"}]}')
    extractor = TaskExtractor(llm_client=LLMClient(provider=provider))
    result = extractor.extract("   ", now=now)
    assert result.tasks == []
    assert provider.prompts == []


def test_odd_input_never_raises(now):
    extractor = TaskExtractor()
    for message in ["", "!!!", "need to", "due", "x" * 5000]:
        extractor.extract(message, now=now)
