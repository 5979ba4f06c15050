"""Dependency injection container for the dashboard."""

from __future__ import annotations

from dependency_injector import containers, providers

from .adapters import RestDataSource, RestSessionProvider
from .chat import ChatClient
from .core import ViewStateController
from .schemas.config import AppConfig, TableNames
from .services import CandidateRepository, JobDescriptionManager, QuestionListManager


class DashboardContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()

    tables = providers.Singleton(TableNames.model_validate, config.data_store.tables)

    data_source = providers.Singleton(
        RestDataSource,
        base_url=config.data_store.url,
        api_key=config.data_store.api_key,
        access_token=config.data_store.access_token,
        timeout=config.data_store.timeout,
    )

    session = providers.Singleton(
        RestSessionProvider,
        base_url=config.data_store.url,
        api_key=config.data_store.api_key,
        access_token=config.data_store.access_token,
        timeout=config.data_store.timeout,
    )

    chat_client = providers.Singleton(
        ChatClient,
        base_url=config.chat.base_url,
        timeout=config.chat.timeout,
    )

    candidates = providers.Factory(CandidateRepository, data_source=data_source, tables=tables)

    questions = providers.Factory(QuestionListManager, data_source=data_source, tables=tables)

    job_description = providers.Factory(JobDescriptionManager, data_source=data_source, tables=tables)

    view_state = providers.Factory(
        ViewStateController,
        in_progress_percent=config.dashboard.in_progress_percent,
        timezone=config.dashboard.timezone,
        top_applicants=config.dashboard.top_applicants,
    )


def create_container(*, settings: AppConfig | dict | None = None) -> DashboardContainer:
    """Instantiate container with optional overrides."""

    container = DashboardContainer()

    if isinstance(settings, AppConfig):
        app_config = settings
    else:
        app_config = AppConfig.model_validate(settings or {})
    container.config.from_dict(app_config.to_settings())
    return container
