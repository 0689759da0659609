"""One entry of an archive FAQ."""

from datetime import UTC, datetime

from pydantic import BaseModel, RootModel

from ficarchive.config import ContentConfig
from ficarchive.domain.shared.error import ValidationError


class QuestionId(RootModel[int]):
    """Unique identifier for a Question."""

    def __str__(self) -> str:
        return str(self.root)

    def __hash__(self) -> int:
        return hash(self.root)


class Question(BaseModel):
    """A question and its answer within one FAQ page, ordered by position.

    Invariants:
    - question, anchor and content are never blank
    - content length stays within the configured limits
    - sanitizer versions are managed by the content sanitizer, never by edits
    """

    id: QuestionId
    archive_faq_id: int
    question: str
    anchor: str
    content: str
    screencast: str | None = None
    position: int = 1
    content_sanitizer_version: int = 0
    screencast_sanitizer_version: int = 0
    created_at: datetime
    updated_at: datetime

    @classmethod
    def create(
        cls,
        id: QuestionId,
        archive_faq_id: int,
        question: str,
        anchor: str,
        content: str,
        screencast: str | None = None,
        position: int = 1,
    ) -> "Question":
        now = datetime.now(UTC)
        return cls(
            id=id,
            archive_faq_id=archive_faq_id,
            question=question,
            anchor=anchor,
            content=content,
            screencast=screencast,
            position=position,
            created_at=now,
            updated_at=now,
        )

    def validate_content(self, limits: ContentConfig) -> None:
        """Raise ValidationError for the first rule this question breaks."""
        for field in ("question", "anchor", "content"):
            if not getattr(self, field).strip():
                raise ValidationError(f"{field.capitalize()} can't be blank", field=field)
        if len(self.content) < limits.min_length:
            raise ValidationError(
                f"Content must be at least {limits.min_length} letters long.",
                field="content",
            )
        if len(self.content) > limits.max_length:
            raise ValidationError(
                f"Content cannot be more than {limits.max_length} characters long.",
                field="content",
            )

    def edit(
        self,
        *,
        question: str | None = None,
        anchor: str | None = None,
        content: str | None = None,
        screencast: str | None = None,
    ) -> "Question":
        changes = {
            key: value
            for key, value in (
                ("question", question),
                ("anchor", anchor),
                ("content", content),
                ("screencast", screencast),
            )
            if value is not None
        }
        changes["updated_at"] = datetime.now(UTC)
        return self.model_copy(update=changes)
