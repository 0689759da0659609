"""Repository port for Question persistence."""

from abc import abstractmethod
from typing import Protocol

from ficarchive.domain.faq.model.question import Question, QuestionId
from ficarchive.domain.shared.port import Port


class QuestionRepository(Port, Protocol):
    @abstractmethod
    async def next_id(self) -> QuestionId: ...

    @abstractmethod
    async def get(self, id: QuestionId) -> Question | None: ...

    @abstractmethod
    async def list_for_faq(self, archive_faq_id: int) -> list[Question]:
        """Questions of one FAQ ordered by position."""
        ...

    @abstractmethod
    async def save(self, question: Question) -> None: ...

    @abstractmethod
    async def delete(self, id: QuestionId) -> bool:
        """Delete a question. Returns True if deleted, False if not found."""
        ...
