"""depcontainer: conditional dependency containers for admin-panel form fields."""

__version__ = "0.3.0"

from depcontainer.fields.base import Field  # noqa: E402
from depcontainer.fields.container import DependencyContainer  # noqa: E402

__all__ = ["DependencyContainer", "Field", "__version__"]
