"""Exporter configuration.

``ExporterOptions`` is the immutable value handed to the exporter at
construction.  ``ExporterSettings`` loads the same values from the
environment for processes that configure the exporter through env vars.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from mongodb_driver_metrics.core.protocols.info_logger import InfoLogger

DEFAULT_HISTOGRAM_BUCKETS: tuple[float, ...] = (
    0.001,
    0.005,
    0.01,
    0.02,
    0.03,
    0.04,
    0.05,
    0.1,
    0.2,
    0.5,
    1,
    2,
    5,
    10,
)


def _validate_buckets(buckets: tuple[float, ...]) -> tuple[float, ...]:
    if not buckets:
        raise ValueError("histogram buckets must not be empty")
    if any(bound <= 0 for bound in buckets):
        raise ValueError("histogram buckets must be positive seconds values")
    if any(lower >= upper for lower, upper in zip(buckets, buckets[1:])):
        raise ValueError("histogram buckets must be strictly ascending")
    return buckets


class ExporterOptions(BaseModel):
    """Options for ``MongoDBDriverExporter``.

    Attributes:
        prefix: Prepended verbatim to every metric name.
        default_labels: Static labels added to every series.
        mongodb_driver_commands_seconds_histogram_buckets: Bucket bounds in
            seconds for the command duration histogram.
        wait_queue_seconds_histogram_buckets: Bucket bounds in seconds for
            the connection wait-queue histogram.
        logger: Optional sink for the activation messages.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    prefix: str = ""
    default_labels: dict[str, str] = Field(default_factory=dict)
    mongodb_driver_commands_seconds_histogram_buckets: tuple[float, ...] = DEFAULT_HISTOGRAM_BUCKETS
    wait_queue_seconds_histogram_buckets: tuple[float, ...] = DEFAULT_HISTOGRAM_BUCKETS
    logger: Optional[InfoLogger] = None

    @field_validator(
        "mongodb_driver_commands_seconds_histogram_buckets",
        "wait_queue_seconds_histogram_buckets",
    )
    @classmethod
    def check_buckets(cls, value: tuple[float, ...]) -> tuple[float, ...]:
        return _validate_buckets(value)


class ExporterSettings(BaseSettings):
    """Environment-driven exporter settings.

    Mapping and list values are read as JSON, e.g.
    ``MONGODB_DRIVER_METRICS_DEFAULT_LABELS='{"app": "orders"}'``.
    """

    model_config = SettingsConfigDict(
        env_prefix="MONGODB_DRIVER_METRICS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    PREFIX: str = Field(default="", description="Metric name prefix")
    DEFAULT_LABELS: dict[str, str] = Field(
        default_factory=dict, description="Labels applied to every series"
    )
    COMMANDS_SECONDS_HISTOGRAM_BUCKETS: tuple[float, ...] = Field(
        default=DEFAULT_HISTOGRAM_BUCKETS, description="Command duration buckets in seconds"
    )
    WAIT_QUEUE_SECONDS_HISTOGRAM_BUCKETS: tuple[float, ...] = Field(
        default=DEFAULT_HISTOGRAM_BUCKETS, description="Wait queue duration buckets in seconds"
    )
    MONITOR_COMMANDS: bool = Field(
        default=False, description="Register a command listener on the driver"
    )

    def to_options(self, logger: InfoLogger | None = None) -> ExporterOptions:
        """Build exporter options from these settings."""
        return ExporterOptions(
            prefix=self.PREFIX,
            default_labels=self.DEFAULT_LABELS,
            mongodb_driver_commands_seconds_histogram_buckets=self.COMMANDS_SECONDS_HISTOGRAM_BUCKETS,
            wait_queue_seconds_histogram_buckets=self.WAIT_QUEUE_SECONDS_HISTOGRAM_BUCKETS,
            logger=logger,
        )


@lru_cache
def get_settings() -> ExporterSettings:
    return ExporterSettings()
