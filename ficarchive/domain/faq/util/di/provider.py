"""DI provider for the FAQ domain."""

from dishka import provide

from ficarchive.config import Config
from ficarchive.domain.faq.port.repository import QuestionRepository
from ficarchive.domain.faq.service.question import QuestionService
from ficarchive.util.di.base import Provider
from ficarchive.util.di.scope import Scope


class FaqProvider(Provider):
    @provide(scope=Scope.UOW)
    def get_question_service(self, config: Config, repo: QuestionRepository) -> QuestionService:
        return QuestionService(_repo=repo, _content=config.content)
