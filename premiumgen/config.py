"""premiumgen configuration.

Centralised, typed configuration for the generation process. All settings use
Pydantic v2 models so they can be validated at construction time and serialised
to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field


class ProcessConfig(BaseModel):
    """Timing and gating knobs for the phase orchestrator."""

    overall_budget_minutes: float = Field(
        default=30.0, gt=0, description="Wall-clock budget for the whole process"
    )
    minute_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Real seconds per budget minute (lower it to compress time)",
    )
    progress_interval_seconds: float = Field(
        default=1.0, gt=0, description="Cadence of progress events while a phase runs"
    )
    observer_timeout_seconds: float = Field(
        default=5.0, gt=0, description="Upper bound for a single progress observer call"
    )
    require_all_thresholds: bool = Field(
        default=False,
        description="Abort the run when any phase scores below its quality threshold",
    )


class EnrichmentConfig(BaseModel):
    """Configuration for the remote design-file enrichment call."""

    api_url: str = Field(default="https://api.figma.com/v1")
    access_token: Optional[str] = Field(default=None)
    timeout: float = Field(default=10.0, gt=0, description="Per-request timeout in seconds")

    @property
    def enabled(self) -> bool:
        """Enrichment is only attempted with an access token."""
        return bool(self.access_token)


class Config(BaseModel):
    """Global premiumgen configuration.

    Instances are typically created once by ``Pipeline`` or by the CLI entry
    point and then passed through the rest of the system.
    """

    process: ProcessConfig = Field(default_factory=ProcessConfig)
    enrichment: EnrichmentConfig = Field(default_factory=EnrichmentConfig)
    output_path: Path = Field(default=Path("./output/process-result.json"))

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path | None = None) -> Path:
        """Persist the configuration to a JSON file.

        The access token is never written to disk.

        Args:
            path: Destination file. Defaults to ``config.json`` next to
                ``output_path``.

        Returns:
            The resolved path where the file was written.
        """
        target = path or (self.output_path.parent / "config.json")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(
            self.model_dump_json(indent=2, exclude={"enrichment": {"access_token"}}),
            encoding="utf-8",
        )
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            PREMIUMGEN_BUDGET_MINUTES, PREMIUMGEN_MINUTE_SECONDS,
            PREMIUMGEN_PROGRESS_INTERVAL, PREMIUMGEN_OBSERVER_TIMEOUT,
            PREMIUMGEN_STRICT_THRESHOLDS, PREMIUMGEN_OUTPUT,
            FIGMA_API_URL, FIGMA_ACCESS_TOKEN, FIGMA_TIMEOUT.
        """
        process_kwargs: dict[str, Any] = {}
        if os.environ.get("PREMIUMGEN_BUDGET_MINUTES"):
            process_kwargs["overall_budget_minutes"] = float(
                os.environ["PREMIUMGEN_BUDGET_MINUTES"]
            )
        if os.environ.get("PREMIUMGEN_MINUTE_SECONDS"):
            process_kwargs["minute_seconds"] = float(os.environ["PREMIUMGEN_MINUTE_SECONDS"])
        if os.environ.get("PREMIUMGEN_PROGRESS_INTERVAL"):
            process_kwargs["progress_interval_seconds"] = float(
                os.environ["PREMIUMGEN_PROGRESS_INTERVAL"]
            )
        if os.environ.get("PREMIUMGEN_OBSERVER_TIMEOUT"):
            process_kwargs["observer_timeout_seconds"] = float(
                os.environ["PREMIUMGEN_OBSERVER_TIMEOUT"]
            )
        strict = os.environ.get("PREMIUMGEN_STRICT_THRESHOLDS", "")
        if strict:
            process_kwargs["require_all_thresholds"] = strict.strip().lower() in {
                "1",
                "true",
                "yes",
                "on",
            }

        enrichment_kwargs: dict[str, Any] = {}
        if os.environ.get("FIGMA_API_URL"):
            enrichment_kwargs["api_url"] = os.environ["FIGMA_API_URL"]
        if os.environ.get("FIGMA_ACCESS_TOKEN"):
            enrichment_kwargs["access_token"] = os.environ["FIGMA_ACCESS_TOKEN"]
        if os.environ.get("FIGMA_TIMEOUT"):
            enrichment_kwargs["timeout"] = float(os.environ["FIGMA_TIMEOUT"])

        return cls(
            process=ProcessConfig(**process_kwargs),
            enrichment=EnrichmentConfig(**enrichment_kwargs),
            output_path=Path(
                os.environ.get("PREMIUMGEN_OUTPUT", "./output/process-result.json")
            ),
        )
