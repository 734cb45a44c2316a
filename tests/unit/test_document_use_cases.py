"""Unit tests for document ingestion use cases."""

import asyncio
from datetime import timedelta
from uuid import uuid4

import pytest

from wikichat.application.dto.chunking_config import ChunkingConfig
from wikichat.application.dto.document_dto import DocumentUploadInput
from wikichat.application.use_cases.document.delete_document import DeleteDocumentUseCase
from wikichat.application.use_cases.document.get_document import GetDocumentUseCase
from wikichat.application.use_cases.document.get_document_chunks import (
    GetDocumentChunksUseCase,
)
from wikichat.application.use_cases.document.list_documents import ListDocumentsUseCase
from wikichat.application.use_cases.document.process_document import ProcessDocumentUseCase
from wikichat.application.use_cases.document.upload_document import UploadDocumentUseCase
from wikichat.domain.exceptions import (
    DocumentNotFound,
    UnsupportedContentType,
    UpstreamFailure,
    ValidationError,
)
from wikichat.domain.value_objects import DocumentStatus
from wikichat.infrastructure.chunking.semantic_chunker import SemanticChunker
from wikichat.infrastructure.document_parsers import PlainTextParser

from tests.conftest import FakeUnitOfWork, make_document

PARAGRAPH = (
    "WikiChat stores every uploaded document as a sequence of overlapping chunks. "
    "Each chunk is embedded so that questions can be matched against it later."
)
TEXT = "\n\n".join([PARAGRAPH] * 4)


def _process_use_case(uow_factory, embedding_provider) -> ProcessDocumentUseCase:
    return ProcessDocumentUseCase(
        unit_of_work_factory=uow_factory,
        parser=PlainTextParser(),
        chunker=SemanticChunker(),
        embedding_provider=embedding_provider,
        chunking_config=ChunkingConfig(chunk_size=200, chunk_overlap=20),
    )


def _upload_use_case(uow_factory, process: ProcessDocumentUseCase, max_size: int = 1024):
    return UploadDocumentUseCase(
        unit_of_work_factory=uow_factory,
        process_document=process,
        allowed_content_types=["text/plain", "text/markdown"],
        max_file_size=max_size,
    )


async def _stored(uow: FakeUnitOfWork, status: DocumentStatus = DocumentStatus.PROCESSING):
    return await uow.documents.create(make_document(status=status))


# --- ProcessDocumentUseCase ---


@pytest.mark.asyncio
async def test_process_stores_chunks_with_contiguous_indices(
    fake_uow: FakeUnitOfWork, uow_factory, mock_embedding_provider
) -> None:
    document = await _stored(fake_uow)
    use_case = _process_use_case(uow_factory, mock_embedding_provider)

    count = await use_case.execute(document.id, "text/markdown", TEXT.encode())

    chunks = await fake_uow.chunks.get_by_document_id(document.id)
    assert count == len(chunks) == 4
    assert [c.chunk_index for c in chunks] == [0, 1, 2, 3]
    assert all(c.embedding is not None for c in chunks)
    assert document.status == DocumentStatus.COMPLETED
    mock_embedding_provider.embed_batch.assert_awaited_once()


@pytest.mark.asyncio
async def test_process_blank_text_completes_without_chunks(
    fake_uow: FakeUnitOfWork, uow_factory, mock_embedding_provider
) -> None:
    document = await _stored(fake_uow)
    use_case = _process_use_case(uow_factory, mock_embedding_provider)

    assert await use_case.execute(document.id, "text/plain", b"   \n  ") == 0

    assert document.status == DocumentStatus.COMPLETED
    mock_embedding_provider.embed_batch.assert_not_awaited()


@pytest.mark.asyncio
async def test_process_failure_marks_document_failed(
    fake_uow: FakeUnitOfWork, uow_factory, mock_embedding_provider
) -> None:
    document = await _stored(fake_uow)
    mock_embedding_provider.embed_batch.side_effect = UpstreamFailure("quota exceeded")
    use_case = _process_use_case(uow_factory, mock_embedding_provider)

    with pytest.raises(UpstreamFailure):
        await use_case.execute(document.id, "text/plain", TEXT.encode())

    assert document.status == DocumentStatus.FAILED
    assert await fake_uow.chunks.get_by_document_id(document.id) == []


@pytest.mark.asyncio
async def test_scheduled_failure_is_logged_and_marks_failed(
    fake_uow: FakeUnitOfWork, uow_factory, mock_embedding_provider, caplog
) -> None:
    document = await _stored(fake_uow)
    use_case = _process_use_case(uow_factory, mock_embedding_provider)

    await use_case.schedule(document.id, "application/pdf", b"%PDF-1.7")

    assert document.status == DocumentStatus.FAILED
    assert use_case.pending == 0
    assert "Failed to process document" in caplog.text


@pytest.mark.asyncio
async def test_shutdown_cancels_and_marks_failed(
    fake_uow: FakeUnitOfWork, uow_factory, mock_embedding_provider
) -> None:
    document = await _stored(fake_uow)
    started = asyncio.Event()

    async def _slow_embed(texts: list[str]) -> list[list[float]]:
        started.set()
        await asyncio.sleep(60)
        return []

    mock_embedding_provider.embed_batch.side_effect = _slow_embed
    use_case = _process_use_case(uow_factory, mock_embedding_provider)

    use_case.schedule(document.id, "text/plain", TEXT.encode())
    await started.wait()
    await use_case.shutdown()

    assert document.status == DocumentStatus.FAILED
    assert use_case.pending == 0


# --- UploadDocumentUseCase ---


@pytest.mark.asyncio
async def test_upload_returns_processing_and_completes_in_background(
    fake_uow: FakeUnitOfWork, uow_factory, mock_embedding_provider
) -> None:
    process = _process_use_case(uow_factory, mock_embedding_provider)
    data = TEXT.encode()
    upload = _upload_use_case(uow_factory, process, max_size=len(data))

    output = await upload.execute(
        DocumentUploadInput(filename="guide.md", content_type="text/markdown", data=data)
    )

    assert output.status == DocumentStatus.PROCESSING
    assert output.file_size == len(data)
    assert process.pending == 1

    await asyncio.gather(*list(process._tasks))
    document = await fake_uow.documents.get_by_id(output.id)
    assert document.status == DocumentStatus.COMPLETED


@pytest.mark.asyncio
async def test_upload_accepts_content_type_parameters(
    uow_factory, mock_embedding_provider
) -> None:
    process = _process_use_case(uow_factory, mock_embedding_provider)
    upload = _upload_use_case(uow_factory, process)

    output = await upload.execute(
        DocumentUploadInput("notes.txt", "Text/Plain; charset=utf-8", b"hello world")
    )

    assert output.content_type == "Text/Plain; charset=utf-8"
    await asyncio.gather(*list(process._tasks))


@pytest.mark.asyncio
async def test_shutdown_before_start_marks_failed(
    fake_uow: FakeUnitOfWork, uow_factory, mock_embedding_provider
) -> None:
    """A task cancelled before its first step still leaves PROCESSING."""
    process = _process_use_case(uow_factory, mock_embedding_provider)
    upload = _upload_use_case(uow_factory, process)

    output = await upload.execute(DocumentUploadInput("notes.txt", "text/plain", b"hello world"))
    await process.shutdown()

    document = await fake_uow.documents.get_by_id(output.id)
    assert document.status == DocumentStatus.FAILED
    mock_embedding_provider.embed_batch.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("upload_input", "error"),
    [
        (DocumentUploadInput("a.pdf", "application/pdf", b"%PDF"), UnsupportedContentType),
        (DocumentUploadInput("a.txt", "text/plain", b""), ValidationError),
        (DocumentUploadInput("a.txt", "text/plain", b"x" * 1025), ValidationError),
        (DocumentUploadInput(" ", "text/plain", b"x"), ValidationError),
    ],
)
async def test_upload_rejects_invalid_input(
    fake_uow: FakeUnitOfWork, uow_factory, mock_embedding_provider, upload_input, error
) -> None:
    process = _process_use_case(uow_factory, mock_embedding_provider)
    upload = _upload_use_case(uow_factory, process, max_size=1024)

    with pytest.raises(error):
        await upload.execute(upload_input)

    assert await fake_uow.documents.list() == []
    assert process.pending == 0


# --- Read and delete ---


@pytest.mark.asyncio
async def test_get_document_includes_chunk_count(
    fake_uow: FakeUnitOfWork, uow_factory, mock_embedding_provider
) -> None:
    document = await _stored(fake_uow)
    await _process_use_case(uow_factory, mock_embedding_provider).execute(
        document.id, "text/plain", TEXT.encode()
    )

    output = await GetDocumentUseCase(uow_factory).execute(document.id)

    assert output.id == document.id
    assert output.chunk_count == 4


@pytest.mark.asyncio
async def test_list_documents_newest_first(fake_uow: FakeUnitOfWork, uow_factory) -> None:
    first = await _stored(fake_uow, DocumentStatus.COMPLETED)
    second = await _stored(fake_uow, DocumentStatus.COMPLETED)
    second.created_at = first.created_at + timedelta(seconds=1)

    outputs = await ListDocumentsUseCase(uow_factory).execute()

    assert [o.id for o in outputs] == [second.id, first.id]


@pytest.mark.asyncio
async def test_get_document_chunks_ordered(
    fake_uow: FakeUnitOfWork, uow_factory, mock_embedding_provider
) -> None:
    document = await _stored(fake_uow)
    await _process_use_case(uow_factory, mock_embedding_provider).execute(
        document.id, "text/plain", TEXT.encode()
    )

    chunks = await GetDocumentChunksUseCase(uow_factory).execute(document.id)

    assert [c.chunk_index for c in chunks] == [0, 1, 2, 3]


@pytest.mark.asyncio
async def test_delete_document_removes_chunks(
    fake_uow: FakeUnitOfWork, uow_factory, mock_embedding_provider
) -> None:
    document = await _stored(fake_uow)
    await _process_use_case(uow_factory, mock_embedding_provider).execute(
        document.id, "text/plain", TEXT.encode()
    )

    await DeleteDocumentUseCase(uow_factory).execute(document.id)

    assert await fake_uow.documents.get_by_id(document.id) is None
    assert await fake_uow.chunks.count_by_document_id(document.id) == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "use_case_cls", [GetDocumentUseCase, GetDocumentChunksUseCase, DeleteDocumentUseCase]
)
async def test_unknown_document_raises(uow_factory, use_case_cls) -> None:
    with pytest.raises(DocumentNotFound):
        await use_case_cls(uow_factory).execute(uuid4())
