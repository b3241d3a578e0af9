"""Dependency injection container for the hiring pipeline."""

from __future__ import annotations

from pathlib import Path

from dependency_injector import containers, providers

from .adapters import HTTPResumeExtractor, PdfResumeExtractor
from .core import EntityStore, EvaluationSettings, IntakeSettings, TransitionPolicy
from .extraction import ExtractorChain, UploadSession
from .pipeline import PipelineService, StoreLoader, StoreWriter


def _load_store(loader: StoreLoader, state_path: str | None) -> EntityStore:
    return loader.load(Path(state_path) if state_path else None)


def _extractors(
    http_extractor: HTTPResumeExtractor,
    pdf_extractor: PdfResumeExtractor,
    enable_pdf_fallback: bool,
) -> list:
    extractors: list = [http_extractor]
    if enable_pdf_fallback:
        extractors.append(pdf_extractor)
    return extractors


class PipelineContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()

    intake_settings = providers.Singleton(IntakeSettings)
    evaluation_settings = providers.Singleton(EvaluationSettings)

    transition_policy = providers.Singleton(
        TransitionPolicy.from_flag,
        config.pipeline.enforce_transitions.as_(bool),
    )

    store_loader = providers.Singleton(StoreLoader)
    store = providers.Singleton(_load_store, store_loader, config.state_path)
    store_writer = providers.Singleton(StoreWriter)

    http_extractor = providers.Singleton(
        HTTPResumeExtractor,
        endpoint=config.extraction.endpoint,
        api_key=config.extraction.api_key,
        timeout=config.extraction.timeout.as_float(),
    )
    pdf_extractor = providers.Singleton(PdfResumeExtractor)

    extractor_chain = providers.Singleton(
        ExtractorChain,
        extractors=providers.Callable(
            _extractors,
            http_extractor,
            pdf_extractor,
            config.extraction.enable_pdf_fallback.as_(bool),
        ),
    )

    upload_session = providers.Factory(UploadSession, chain=extractor_chain)

    service = providers.Singleton(
        PipelineService,
        store=store,
        policy=transition_policy,
        intake_settings=intake_settings,
        evaluation_settings=evaluation_settings,
        track_hired_count=config.pipeline.track_hired_count.as_(bool),
    )


DEFAULT_SETTINGS: dict = {
    "pipeline": {"enforce_transitions": False, "track_hired_count": True},
    "extraction": {"endpoint": None, "api_key": None, "timeout": 30.0, "enable_pdf_fallback": True},
    "state_path": None,
}


def create_container(*, settings: dict | None = None) -> PipelineContainer:
    """Instantiate container with optional overrides."""

    container = PipelineContainer()
    container.config.from_dict(DEFAULT_SETTINGS)

    if not settings:
        return container

    overrides = {
        key: value
        for key, value in settings.items()
        if key in ("pipeline", "extraction", "state_path")
    }
    if overrides:
        container.config.from_dict(overrides)

    intake_settings = settings.get("intake", {}) if isinstance(settings, dict) else {}
    if intake_settings:
        container.intake_settings.override(
            providers.Singleton(IntakeSettings, **intake_settings)
        )

    evaluation_settings = settings.get("evaluation", {}) if isinstance(settings, dict) else {}
    if evaluation_settings:
        container.evaluation_settings.override(
            providers.Singleton(EvaluationSettings, **evaluation_settings)
        )

    return container
