"""Shared well geometry for the test suite."""

import pytest

from wellsmith.config import set_config
from wellsmith.objects import AnnulusSection, PipeSection


@pytest.fixture
def scenario_annuli():
    """Cased 0-500 m at 0.340 m ID over open hole 500-2500 m at 0.311 m."""
    return [
        AnnulusSection(top=0, length=500, inner_diameter=0.340, is_cased=True, name="Casing"),
        AnnulusSection(top=500, length=2000, inner_diameter=0.311, name="Open hole"),
    ]


@pytest.fixture
def scenario_pipes():
    """One 5 in drill pipe string from surface to 2500 m."""
    return [
        PipeSection(top=0, length=2500, inner_diameter=0.0953, outer_diameter=0.127, name="DP")
    ]


@pytest.fixture(autouse=True)
def reset_global_config():
    """Each test starts from the default process-wide config."""
    set_config(None)
    yield
    set_config(None)
