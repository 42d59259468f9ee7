"""Built-in discriminator strategy: namespace-qualified class-name suffix.

Polymorphic relations store the related model's fully qualified class
name (``App\\Models\\Admin``). A rule ``depends_on("role", "Admin")``
matches when the discriminator ends with ``separator + "Admin"``.
"""

from __future__ import annotations

from typing import Any

import pluggy

hookimpl = pluggy.HookimplMarker("depcontainer")


class NamespaceSuffixPlugin:
    """Match a discriminator whose last namespace segment is the operand."""

    @hookimpl(trylast=True)
    def match_discriminator(self, discriminator: str, operand: Any, separator: str) -> bool:
        if operand is None:
            return False
        return discriminator.endswith(f"{separator}{operand}")
