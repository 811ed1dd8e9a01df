#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any, Callable

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from objectprinting.options import PrintOptions
from objectprinting.printer import ObjectPrinter


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def render() -> Callable[..., str]:
    """Fixture to print an object at a given depth with optional PrintOptions."""

    def _render(obj: Any, options: PrintOptions | None = None, depth: int = 0) -> str:
        return ObjectPrinter(options).render(obj, depth)

    return _render
