"""Constants used across pybaseline."""

from __future__ import annotations

from typing import Final

DATA_URL: Final[str] = "https://unpkg.com/web-features/data.json"
EXPLORE_URL_TEMPLATE: Final[str] = "https://webstatus.dev/features/{feature_id}"

BROWSER_ORDER: Final[tuple[str, ...]] = (
    "chrome",
    "chrome_android",
    "edge",
    "firefox",
    "firefox_android",
    "safari",
    "safari_ios",
)

BASELINE_ICON_MAP: Final[dict[str, str]] = {
    "widely": "✅",
    "newly": "🆕",
    "limited": "⚠️",
}

WIDELY_AVAILABLE_TEMPLATE: Final[str] = "Widely available since {date}"
NEWLY_AVAILABLE_TEMPLATE: Final[str] = "Newly available since {date}"
WIDELY_AVAILABLE_LABEL: Final[str] = "Widely available"
NEWLY_AVAILABLE_LABEL: Final[str] = "Newly available"
LIMITED_AVAILABILITY_LABEL: Final[str] = "Limited availability across major browsers"

UNSUPPORTED_PLACEHOLDER: Final[str] = "❌"
UNKNOWN_RELEASE_DATE: Final[str] = "Unknown"

UNRECOGNIZED_FEATURE_MESSAGE: Final[str] = (
    "Unrecognized Baseline feature ID: {feature_id}\n\n"
    "Try using the 'Baseline search' command to find the feature you're looking for."
)

HOVER_SCAN_LIMIT: Final[int] = 100

DEFAULT_EXTENSIONS: Final[tuple[str, ...]] = (
    "css",
    "html",
    "js",
    "jsx",
    "ts",
    "tsx",
    "vue",
    "svelte",
    "scss",
    "less",
    "md",
)
DEFAULT_IGNORE_FILE: Final[str] = ".gitignore"
MAX_CONCURRENT_READS: Final[int] = 8

DEFAULT_TIMEOUT_SECONDS: Final[float] = 10.0
