"""In-memory repository adapters."""

import itertools

from ficarchive.domain.admin.model.banner import AdminBanner
from ficarchive.domain.admin.model.settings import AdminSettings
from ficarchive.domain.admin.port.repository import AdminSettingsRepository, BannerRepository
from ficarchive.domain.auth.model.value import UserId
from ficarchive.domain.auth.port.user_stats import UserMenuCounts, UserStatsReader
from ficarchive.domain.faq.model.question import Question, QuestionId
from ficarchive.domain.faq.port.repository import QuestionRepository


class InMemoryQuestionRepository(QuestionRepository):
    def __init__(self) -> None:
        self._questions: dict[QuestionId, Question] = {}
        self._ids = itertools.count(1)

    async def next_id(self) -> QuestionId:
        return QuestionId(next(self._ids))

    async def get(self, id: QuestionId) -> Question | None:
        return self._questions.get(id)

    async def list_for_faq(self, archive_faq_id: int) -> list[Question]:
        questions = [q for q in self._questions.values() if q.archive_faq_id == archive_faq_id]
        return sorted(questions, key=lambda q: (q.position, q.id.root))

    async def save(self, question: Question) -> None:
        self._questions[question.id] = question

    async def delete(self, id: QuestionId) -> bool:
        return self._questions.pop(id, None) is not None


class InMemoryAdminSettingsRepository(AdminSettingsRepository):
    def __init__(self, initial: AdminSettings | None = None) -> None:
        self._settings = initial or AdminSettings()

    async def current(self) -> AdminSettings:
        return self._settings

    async def save(self, settings: AdminSettings) -> None:
        self._settings = settings


class InMemoryBannerRepository(BannerRepository):
    def __init__(self) -> None:
        self._banners: dict[int, AdminBanner] = {}
        self._ids = itertools.count(1)

    async def next_id(self) -> int:
        return next(self._ids)

    async def latest_active(self) -> AdminBanner | None:
        active = [b for b in self._banners.values() if b.active]
        return max(active, key=lambda b: b.id, default=None)

    async def save(self, banner: AdminBanner) -> None:
        self._banners[banner.id] = banner


class InMemoryUserStatsReader(UserStatsReader):
    """Menu counts recorded per user; unknown users count zero everywhere."""

    def __init__(self, counts: dict[int, UserMenuCounts] | None = None) -> None:
        self._counts = dict(counts or {})

    def record(self, user_id: UserId, counts: UserMenuCounts) -> None:
        self._counts[user_id.root] = counts

    async def menu_counts(self, user_id: UserId) -> UserMenuCounts:
        return self._counts.get(user_id.root, UserMenuCounts())
