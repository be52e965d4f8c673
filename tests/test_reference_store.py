import pytest

from attributes.exceptions import DecodeError, FetchError
from attributes.models import AttributeTable
from attributes.query_cache import AttributeKey
from attributes.reference_store import LoadingState, ReferenceStore, composite_key, year_window
from attribute_fixtures import ENDPOINT_TEMPLATE, TEST_YEAR, FakeFetcher, reference_payload, window_payloads


@pytest.fixture
def store(fetcher):
    return ReferenceStore(fetcher, endpoint_template=ENDPOINT_TEMPLATE)


def test_year_window_keys():
    keys = [composite_key(*pair) for pair in year_window(2024)]
    assert keys == ['202449', '202360', '202349', '202460']


def test_ensure_year_loaded_fetches_window(store, fetcher):
    assert store.ensure_year_loaded(TEST_YEAR) is True
    assert sorted(fetcher.calls) == ['202349', '202360', '202449', '202460']
    assert store.keys == {'202449', '202360', '202349', '202460'}
    assert store.loaded_years == {2023, 2024}
    assert store.last_error is None


def test_loading_is_idempotent(store, fetcher):
    assert store.ensure_year_loaded(TEST_YEAR)
    fetcher.calls.clear()
    assert store.ensure_year_loaded(str(TEST_YEAR)) is True
    assert fetcher.calls == []


def test_only_missing_keys_are_fetched(store, fetcher):
    fetcher.payloads.update(window_payloads(2025))
    assert store.ensure_year_loaded(2024)
    fetcher.calls.clear()
    # 2025 shares 202449 and 202460 with 2024
    assert store.ensure_year_loaded(2025)
    assert sorted(fetcher.calls) == ['202549', '202560']


def test_partial_failure_keeps_loaded_tables(store, fetcher):
    del fetcher.payloads['202360']
    assert store.ensure_year_loaded(TEST_YEAR) is False
    assert isinstance(store.last_error, FetchError)
    assert store.keys == {'202449', '202349', '202460'}
    
    fetcher.payloads['202360'] = reference_payload(2023, '60')
    fetcher.calls.clear()
    assert store.ensure_year_loaded(TEST_YEAR) is True
    assert fetcher.calls == ['202360']
    assert store.last_error is None


def test_decode_failure_is_reported(store, fetcher):
    fetcher.payloads['202449'] = '{broken'
    assert store.ensure_year_loaded(TEST_YEAR) is False
    assert isinstance(store.last_error, DecodeError)
    assert not store.has_key('202449')


def test_wrong_payload_shape_is_a_decode_error(store, fetcher):
    fetcher.payloads['202460'] = ['not', 'a', 'table']
    assert store.ensure_year_loaded(TEST_YEAR) is False
    assert isinstance(store.last_error, DecodeError)


def test_transport_os_error_becomes_fetch_error(store, fetcher):
    fetcher.payloads['202349'] = ConnectionError('connection reset')
    assert store.ensure_year_loaded(TEST_YEAR) is False
    assert isinstance(store.last_error, FetchError)


def test_unexpected_transport_error_keeps_sibling_tables(store, fetcher):
    fetcher.payloads['202449'] = RuntimeError('transport bug')
    assert store.ensure_year_loaded(TEST_YEAR) is False
    assert isinstance(store.last_error, FetchError)
    assert isinstance(store.last_error.__cause__, RuntimeError)
    assert store.keys == {'202349', '202360', '202460'}
    assert store.is_loading is False


def test_deeply_nested_payload_keeps_sibling_tables(store, fetcher):
    fetcher.payloads['202449'] = '[' * 100000
    assert store.ensure_year_loaded(TEST_YEAR) is False
    assert isinstance(store.last_error, DecodeError)
    assert store.keys == {'202349', '202360', '202460'}


def test_invalid_year_fails_without_fetch(store, fetcher):
    assert store.ensure_year_loaded('next year') is False
    assert isinstance(store.last_error, ValueError)
    assert fetcher.calls == []


def test_ensure_years_loaded(store, fetcher):
    fetcher.payloads.update(window_payloads(2022))
    assert store.ensure_years_loaded({2022, 2024, '2024'}) is True
    assert store.loaded_years == {2021, 2022, 2023, 2024}


def test_ensure_years_loaded_reports_any_failure(store, fetcher):
    assert store.ensure_years_loaded([2024, 2019]) is False
    # 2024 still loaded completely
    assert {'202449', '202360', '202349', '202460'} <= store.keys


def test_ensure_years_loaded_empty_is_true(store, fetcher):
    assert store.ensure_years_loaded([]) is True
    assert fetcher.calls == []


def test_get_table_resolves_range_and_type(store):
    store.ensure_year_loaded(TEST_YEAR)
    assert store.get_table(49, 2024).get('3', '红') is not None
    # lottery type 3 is a 60-number draw
    assert store.get_table('3', 2024) is store.get_table(60, 2024)
    assert store.get_table('1', 2024) is store.get_table('49', 2024)


def test_get_table_missing_is_empty(store):
    assert not store.get_table(49, 1999)
    assert not store.get_table(77, 2024)
    assert len(store.get_table('x', 'y')) == 0


def test_store_mutation_clears_cache(store):
    store.ensure_year_loaded(TEST_YEAR)
    store.cache.get_attribute(AttributeKey('07', 'color', '49', 2024), lambda: '红')
    assert len(store.cache) == 1
    store.store_table(2024, '49', AttributeTable())
    assert len(store.cache) == 0
    assert not store.get_table(49, 2024)


def test_refresh_year_refetches_everything(store, fetcher):
    store.ensure_year_loaded(TEST_YEAR)
    fetcher.calls.clear()
    assert store.refresh_year(TEST_YEAR) is True
    assert len(fetcher.calls) == 4


def test_loading_state_is_observable(store, fetcher):
    states = []
    seen_while_fetching = []
    store.subscribe(states.append)
    fetcher.on_fetch = lambda endpoint: seen_while_fetching.append(store.is_loading)
    
    del fetcher.payloads['202460']
    store.ensure_year_loaded(TEST_YEAR)
    
    assert all(seen_while_fetching)
    assert states[0] == LoadingState(True, None)
    assert states[-1].is_loading is False
    assert isinstance(states[-1].last_error, FetchError)
    assert store.is_loading is False
    
    store.unsubscribe(states.append)
    count = len(states)
    store.ensure_year_loaded(TEST_YEAR)
    assert len(states) == count


def test_failing_listener_does_not_break_loading(store):
    def broken(state):
        raise RuntimeError('listener bug')
    
    store.subscribe(broken)
    assert store.ensure_year_loaded(TEST_YEAR) is True


def test_default_endpoint_template_comes_from_config():
    store = ReferenceStore(FakeFetcher({}))
    assert store.endpoint_template.format(year=2024, number_type='49') == \
        '/api/attribute?year=2024&number_type=49'
