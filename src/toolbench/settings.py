"""Persisted module settings and the JSON file store behind them."""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class ToolboxSettings(BaseModel):
    """Settings consumed by the registry when it mounts routes."""

    use_domain: Optional[str] = Field(
        default=None, description="Only answer requests for this host and its subdomains"
    )


class SettingsStore:
    """Reads and writes the settings document as JSON on disk."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def load(self) -> Optional[Any]:
        """Return the stored JSON value, or None if nothing was stored.

        Raises:
            ValueError: If the file exists but is not valid JSON.
        """
        if not self.path.exists():
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as handle:
                return json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in settings file {self.path}: {exc}") from exc

    def save(self, data: Any) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as handle:
            json.dump(data, handle, indent=2)
            handle.write("\n")


def load_settings(store: SettingsStore) -> ToolboxSettings:
    """Read settings, fall back to defaults, and write the result back."""
    raw = store.load()
    if raw is None:
        logger.info("No settings at %s, using defaults", store.path)
        settings = ToolboxSettings()
    else:
        settings = ToolboxSettings.model_validate(raw)
    store.save(settings.model_dump(mode="json"))
    return settings
