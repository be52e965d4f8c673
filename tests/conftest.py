import os
import sys

import pytest

# Add project root and this directory to path to resolve imports
sys.path.append(os.path.join(os.path.dirname(os.path.dirname(__file__))))
sys.path.append(os.path.dirname(__file__))

from attributes.engine import AttributeEngine
from attribute_fixtures import ENDPOINT_TEMPLATE, TEST_YEAR, FakeFetcher, window_payloads


@pytest.fixture
def fetcher():
    return FakeFetcher(window_payloads(TEST_YEAR))


@pytest.fixture
def engine(fetcher):
    return AttributeEngine(fetcher, endpoint_template=ENDPOINT_TEMPLATE)


@pytest.fixture
def loaded_engine(engine):
    assert engine.ensure_year_loaded(TEST_YEAR)
    return engine
