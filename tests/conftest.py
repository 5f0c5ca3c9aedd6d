#
# Pytest Fixtures
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from human_size.multiples import Multiple
from human_size.sizes import SpecificSize


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture(params=list(Multiple), ids=lambda m: m.name)
def multiple(request) -> Multiple:
    """Every registered multiple."""
    return request.param


@pytest.fixture
def specific_class(multiple) -> type[SpecificSize]:
    """The fixed-multiple size class of each registered multiple."""
    return SpecificSize.for_multiple(multiple)
