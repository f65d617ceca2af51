"""Environment and CLI runtime configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from typing import Self

from dotenv import load_dotenv

from marketpulse.domain.models import Severity, SortKey, TrendAlignment
from marketpulse.views.pages import DashboardLimits

DEFAULT_SEVERITY_ORDER = Severity.canonical_order()


def parse_csv_list(value: str | None, default: tuple[str, ...]) -> tuple[str, ...]:
    """Parse comma-separated lowercase identifiers."""
    if not value:
        return tuple(default)
    items = tuple(item.strip().lower() for item in value.split(",") if item.strip())
    return items or tuple(default)


def parse_positive_int(value: str | None, *, field_name: str, default: int) -> int:
    """Parse a positive integer from an env string."""
    if value is None or not value.strip():
        return default
    parsed = int(value.strip())
    if parsed <= 0:
        raise ValueError(f"{field_name} must be positive")
    return parsed


@dataclass(frozen=True)
class Settings:
    """Immutable view settings."""

    log_level: str = "INFO"
    log_file: str = ""
    assets_default_sort: str = SortKey.CHANGE_DESC.value
    trend_alignment: str = TrendAlignment.POSITION.value
    severity_order: tuple[str, ...] = field(default_factory=lambda: DEFAULT_SEVERITY_ORDER)
    dashboard_gainers_limit: int = 3
    dashboard_losers_limit: int = 3
    dashboard_news_limit: int = 5
    dashboard_alerts_limit: int = 5
    dashboard_events_limit: int = 5

    @classmethod
    def from_env(cls) -> Self:
        """Create settings from environment variables."""
        load_dotenv()
        raw = cls(
            log_level=str(os.getenv("LOG_LEVEL", "INFO")).strip().upper(),
            log_file=str(os.getenv("LOG_FILE", "")).strip(),
            assets_default_sort=str(
                os.getenv("ASSETS_DEFAULT_SORT", SortKey.CHANGE_DESC.value)
            ).strip().lower(),
            trend_alignment=str(
                os.getenv("TREND_ALIGNMENT", TrendAlignment.POSITION.value)
            ).strip().lower(),
            severity_order=parse_csv_list(os.getenv("SEVERITY_ORDER"), DEFAULT_SEVERITY_ORDER),
            dashboard_gainers_limit=parse_positive_int(
                os.getenv("DASHBOARD_GAINERS_LIMIT"), field_name="dashboard_gainers_limit", default=3
            ),
            dashboard_losers_limit=parse_positive_int(
                os.getenv("DASHBOARD_LOSERS_LIMIT"), field_name="dashboard_losers_limit", default=3
            ),
            dashboard_news_limit=parse_positive_int(
                os.getenv("DASHBOARD_NEWS_LIMIT"), field_name="dashboard_news_limit", default=5
            ),
            dashboard_alerts_limit=parse_positive_int(
                os.getenv("DASHBOARD_ALERTS_LIMIT"), field_name="dashboard_alerts_limit", default=5
            ),
            dashboard_events_limit=parse_positive_int(
                os.getenv("DASHBOARD_EVENTS_LIMIT"), field_name="dashboard_events_limit", default=5
            ),
        )
        return raw.validate()

    def with_overrides(self, **kwargs: object) -> Self:
        """Return a new settings object with updated values."""
        updated = replace(self, **kwargs)
        return updated.validate()

    def default_sort_key(self) -> SortKey:
        return SortKey(self.assets_default_sort)

    def alignment(self) -> TrendAlignment:
        return TrendAlignment(self.trend_alignment)

    def dashboard_limits(self) -> DashboardLimits:
        return DashboardLimits(
            gainers=self.dashboard_gainers_limit,
            losers=self.dashboard_losers_limit,
            news=self.dashboard_news_limit,
            alerts=self.dashboard_alerts_limit,
            events=self.dashboard_events_limit,
        )

    def validate(self) -> Self:
        """Validate settings fields."""
        supported_sorts = {key.value for key in SortKey}
        if self.assets_default_sort not in supported_sorts:
            supported = ", ".join(sorted(supported_sorts))
            raise ValueError(f"assets_default_sort must be one of {supported}")
        if self.trend_alignment not in {mode.value for mode in TrendAlignment}:
            raise ValueError("trend_alignment must be one of position, timestamp")
        if not self.severity_order:
            raise ValueError("severity_order must not be empty")
        if len(set(self.severity_order)) != len(self.severity_order):
            raise ValueError("severity_order must not repeat levels")
        limits = {
            "dashboard_gainers_limit": self.dashboard_gainers_limit,
            "dashboard_losers_limit": self.dashboard_losers_limit,
            "dashboard_news_limit": self.dashboard_news_limit,
            "dashboard_alerts_limit": self.dashboard_alerts_limit,
            "dashboard_events_limit": self.dashboard_events_limit,
        }
        for name, value in limits.items():
            if value <= 0:
                raise ValueError(f"{name} must be positive")
        return self
