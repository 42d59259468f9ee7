"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, depcontainer.toml only contains
overrides. An empty file (or no file at all) is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel

# --- depcontainer.toml sections ---


class EvaluationConfig(BaseModel):
    """[evaluation] section."""

    model_config = {"frozen": True}

    discriminator_suffix: str = "_type"
    namespace_separator: str = "\\"
    polymorphic_fallback: bool = True


class ContainerConfig(BaseModel):
    """[container] section."""

    model_config = {"frozen": True}

    component: str = "dependency-container"
    show_on_index: bool = False

