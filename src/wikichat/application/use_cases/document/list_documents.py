"""List documents use case."""

from wikichat.application.dto.document_dto import DocumentOutput
from wikichat.application.ports import UnitOfWorkFactory


class ListDocumentsUseCase:
    """List all documents, newest first."""

    def __init__(self, unit_of_work_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = unit_of_work_factory

    async def execute(self) -> list[DocumentOutput]:
        async with self._uow_factory() as uow:
            documents = await uow.documents.list()
        return [DocumentOutput.from_entity(d) for d in documents]
