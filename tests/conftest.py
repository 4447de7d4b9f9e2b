import dataclasses

import pytest

from tabstat.config import opts


@pytest.fixture(autouse=True)
def restore_opts():
    """Tests may change verbosity or strictness; put them back afterwards."""
    saved = dataclasses.asdict(opts)
    yield
    for name, value in saved.items():
        setattr(opts, name, value)
