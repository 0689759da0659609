"""FAQ questions: public reads, admin-only writes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Response
from pydantic import BaseModel

from ficarchive.application.api.v1.guards import enforce
from ficarchive.domain.faq.model.question import Question, QuestionId
from ficarchive.domain.faq.service.question import QuestionService
from ficarchive.domain.shared.authorization.context import RequestContext, RequestFormat
from ficarchive.domain.shared.authorization.policy import AccessPolicy
from ficarchive.domain.shared.error import UnknownFormatError
from ficarchive.domain.shared.port.translator import Translator

router = APIRouter(
    prefix="/archive_faqs/{faq_id}/questions", tags=["FAQ"], route_class=DishkaRoute
)


class QuestionRequest(BaseModel):
    question: str
    anchor: str
    content: str
    screencast: str | None = None


class QuestionUpdateRequest(BaseModel):
    question: str | None = None
    anchor: str | None = None
    content: str | None = None
    screencast: str | None = None


class ReorderRequest(BaseModel):
    question_ids: list[int]


class QuestionResponse(BaseModel):
    id: int
    archive_faq_id: int
    question: str
    anchor: str
    content: str
    screencast: str | None
    position: int
    created_at: str
    updated_at: str

    @classmethod
    def of(cls, q: Question) -> "QuestionResponse":
        return cls(
            id=q.id.root,
            archive_faq_id=q.archive_faq_id,
            question=q.question,
            anchor=q.anchor,
            content=q.content,
            screencast=q.screencast,
            position=q.position,
            created_at=q.created_at.isoformat(),
            updated_at=q.updated_at.isoformat(),
        )


class QuestionListResponse(BaseModel):
    questions: list[QuestionResponse]


def _reject_script(ctx: RequestContext) -> None:
    # Pages are served as HTML or JSON only
    if ctx.format is RequestFormat.JS:
        raise UnknownFormatError("FAQ pages are not served as JavaScript")


@router.get("", response_model=QuestionListResponse)
async def list_questions(
    faq_id: int,
    ctx: FromDishka[RequestContext],
    service: FromDishka[QuestionService],
) -> QuestionListResponse:
    _reject_script(ctx)
    questions = await service.list_for_faq(faq_id)
    return QuestionListResponse(questions=[QuestionResponse.of(q) for q in questions])


@router.get("/{question_id}", response_model=QuestionResponse)
async def show_question(
    faq_id: int,
    question_id: int,
    ctx: FromDishka[RequestContext],
    service: FromDishka[QuestionService],
) -> QuestionResponse:
    _reject_script(ctx)
    return QuestionResponse.of(await service.get(faq_id, QuestionId(question_id)))


@router.post("", response_model=QuestionResponse, status_code=201)
async def create_question(
    faq_id: int,
    body: QuestionRequest,
    ctx: FromDishka[RequestContext],
    policy: FromDishka[AccessPolicy],
    service: FromDishka[QuestionService],
    translator: FromDishka[Translator],
) -> QuestionResponse:
    enforce(policy.admin_only(ctx))
    question = await service.create(
        faq_id,
        question=body.question,
        anchor=body.anchor,
        content=body.content,
        screencast=body.screencast,
    )
    ctx.flash.notice(translator.translate("questions.created"))
    return QuestionResponse.of(question)


@router.patch("/{question_id}", response_model=QuestionResponse)
async def update_question(
    faq_id: int,
    question_id: int,
    body: QuestionUpdateRequest,
    ctx: FromDishka[RequestContext],
    policy: FromDishka[AccessPolicy],
    service: FromDishka[QuestionService],
    translator: FromDishka[Translator],
) -> QuestionResponse:
    enforce(policy.admin_only(ctx))
    question = await service.update(
        faq_id, QuestionId(question_id), **body.model_dump(exclude_none=True)
    )
    ctx.flash.notice(translator.translate("questions.updated"))
    return QuestionResponse.of(question)


@router.delete("/{question_id}", status_code=204)
async def delete_question(
    faq_id: int,
    question_id: int,
    ctx: FromDishka[RequestContext],
    policy: FromDishka[AccessPolicy],
    service: FromDishka[QuestionService],
    translator: FromDishka[Translator],
) -> Response:
    enforce(policy.admin_only(ctx))
    await service.delete(faq_id, QuestionId(question_id))
    ctx.flash.notice(translator.translate("questions.deleted"))
    return Response(status_code=204)


@router.put("/order", response_model=QuestionListResponse)
async def reorder_questions(
    faq_id: int,
    body: ReorderRequest,
    ctx: FromDishka[RequestContext],
    policy: FromDishka[AccessPolicy],
    service: FromDishka[QuestionService],
) -> QuestionListResponse:
    enforce(policy.admin_only(ctx))
    questions = await service.reorder(faq_id, [QuestionId(i) for i in body.question_ids])
    return QuestionListResponse(questions=[QuestionResponse.of(q) for q in questions])
