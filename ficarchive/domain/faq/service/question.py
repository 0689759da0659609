"""FAQ question management."""

import logging

from ficarchive.config import ContentConfig
from ficarchive.domain.faq.model.question import Question, QuestionId
from ficarchive.domain.faq.port.repository import QuestionRepository
from ficarchive.domain.shared.error import NotFoundError, ValidationError
from ficarchive.domain.shared.service import Service

logger = logging.getLogger(__name__)


class QuestionService(Service):
    """Create, edit, reorder and remove the questions of an FAQ page."""

    _repo: QuestionRepository
    _content: ContentConfig

    async def list_for_faq(self, archive_faq_id: int) -> list[Question]:
        return await self._repo.list_for_faq(archive_faq_id)

    async def get(self, archive_faq_id: int, id: QuestionId) -> Question:
        """Look a question up within one FAQ; questions of other FAQs are not found."""
        question = await self._repo.get(id)
        if question is None or question.archive_faq_id != archive_faq_id:
            raise NotFoundError(f"Question not found: {id}", code="question_not_found")
        return question

    async def create(
        self,
        archive_faq_id: int,
        question: str,
        anchor: str,
        content: str,
        screencast: str | None = None,
    ) -> Question:
        """Append a new question at the bottom of the FAQ."""
        existing = await self._repo.list_for_faq(archive_faq_id)
        created = Question.create(
            id=await self._repo.next_id(),
            archive_faq_id=archive_faq_id,
            question=question,
            anchor=anchor,
            content=content,
            screencast=screencast,
            position=len(existing) + 1,
        )
        created.validate_content(self._content)
        await self._repo.save(created)
        logger.info("Created question %s in FAQ %s", created.id, archive_faq_id)
        return created

    async def update(
        self,
        archive_faq_id: int,
        id: QuestionId,
        *,
        question: str | None = None,
        anchor: str | None = None,
        content: str | None = None,
        screencast: str | None = None,
    ) -> Question:
        current = await self.get(archive_faq_id, id)
        updated = current.edit(
            question=question, anchor=anchor, content=content, screencast=screencast
        )
        updated.validate_content(self._content)
        await self._repo.save(updated)
        return updated

    async def delete(self, archive_faq_id: int, id: QuestionId) -> None:
        question = await self.get(archive_faq_id, id)
        await self._repo.delete(id)
        # Close the gap left in the list
        remaining = await self._repo.list_for_faq(question.archive_faq_id)
        for position, other in enumerate(remaining, start=1):
            if other.position != position:
                await self._repo.save(other.model_copy(update={"position": position}))
        logger.info("Deleted question %s from FAQ %s", id, question.archive_faq_id)

    async def reorder(self, archive_faq_id: int, ordered_ids: list[QuestionId]) -> list[Question]:
        """Set positions to follow ordered_ids, which must list every question once."""
        questions = {q.id: q for q in await self._repo.list_for_faq(archive_faq_id)}
        if set(ordered_ids) != set(questions) or len(ordered_ids) != len(questions):
            raise ValidationError(
                "Reorder must list every question of the FAQ exactly once",
                field="question_ids",
            )
        reordered = []
        for position, qid in enumerate(ordered_ids, start=1):
            question = questions[qid].model_copy(update={"position": position})
            await self._repo.save(question)
            reordered.append(question)
        return reordered
