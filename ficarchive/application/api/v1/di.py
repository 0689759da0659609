"""DI provider for web-layer helpers."""

from dishka import provide

from ficarchive.application.api.v1.page import PageBuilder
from ficarchive.util.di.base import Provider
from ficarchive.util.di.scope import Scope


class WebProvider(Provider):
    page_builder = provide(PageBuilder, scope=Scope.UOW)
