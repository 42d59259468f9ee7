"""Pluggy hook specifications for depcontainer.

One strategy hook decides whether a polymorphic discriminator value (the
``<property>_type`` attribute of a resource) names the type an ``equals``
rule expects.
"""

from __future__ import annotations

from typing import Any

import pluggy

hookspec = pluggy.HookspecMarker("depcontainer")


class DepContainerHookSpec:
    """Hook specifications for the depcontainer plugin system."""

    @hookspec(firstresult=True)
    def match_discriminator(
        self,
        discriminator: str,
        operand: Any,
        separator: str,
    ) -> bool | None:
        """Return True/False to decide the match, or None to defer.

        Args:
            discriminator: The stored type name, e.g. ``App\\Models\\Admin``.
            operand: The value the rule compares against, e.g. ``Admin``.
            separator: Configured namespace separator.
        """
