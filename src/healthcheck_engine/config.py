"""Engine configuration — reads settings from environment variables.

All settings have sensible defaults for local development.  Hosts that embed
the engine typically override them via env vars.
"""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class EngineSettings:
    """Immutable engine configuration read from environment at startup."""

    # Persona introduced in the greeting
    assistant_name: str = "Lisa"

    # Question catalog YAML (None → packaged data/questions.yaml)
    catalog_path: str | None = None

    # Jinja2 template directory (None → packaged dialogue/template/)
    template_dir: str | None = None

    # Logging
    log_level: str = "INFO"


def load_settings() -> EngineSettings:
    """Build settings from ``HEALTHCHECK_*`` environment variables."""
    return EngineSettings(
        assistant_name=os.getenv("HEALTHCHECK_ASSISTANT_NAME", "Lisa"),
        catalog_path=os.getenv("HEALTHCHECK_CATALOG_PATH") or None,
        template_dir=os.getenv("HEALTHCHECK_TEMPLATE_DIR") or None,
        log_level=os.getenv("HEALTHCHECK_LOG_LEVEL", "INFO").upper(),
    )
