"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class IntakeConfig(BaseModel):
    default_role: str | None = None
    avatar_url_template: str | None = None
    email_case_sensitive: bool | None = None

    model_config = ConfigDict(extra="forbid")


class EvaluationConfig(BaseModel):
    max_rounds: int | None = Field(default=None, ge=1)
    reject_reason: str | None = None
    hold_reason: str | None = None

    model_config = ConfigDict(extra="forbid")


class PipelineConfig(BaseModel):
    enforce_transitions: bool | None = None
    track_hired_count: bool | None = None

    model_config = ConfigDict(extra="forbid")


class ExtractionConfig(BaseModel):
    endpoint: str | None = None
    api_key: str | None = None
    timeout: float | None = None
    enable_pdf_fallback: bool | None = None

    model_config = ConfigDict(extra="forbid")


class AppConfig(BaseModel):
    intake: IntakeConfig = Field(default_factory=IntakeConfig)
    evaluation: EvaluationConfig = Field(default_factory=EvaluationConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {}
        pipeline_settings = self.pipeline.model_dump(exclude_none=True)
        if pipeline_settings:
            settings["pipeline"] = pipeline_settings
        extraction_settings = self.extraction.model_dump(exclude_none=True)
        if extraction_settings:
            settings["extraction"] = extraction_settings
        intake_settings = self.intake.model_dump(exclude_none=True)
        if intake_settings:
            settings["intake"] = intake_settings
        evaluation_settings = self.evaluation.model_dump(exclude_none=True)
        if evaluation_settings:
            settings["evaluation"] = evaluation_settings
        return settings


def load_config(raw: Any) -> AppConfig:
    if not isinstance(raw, dict):
        raise ValidationError.from_exception_data(
            "AppConfig",
            [{"type": "dict_type", "loc": ("config",), "input": raw}],
        )
    return AppConfig.model_validate(raw)
