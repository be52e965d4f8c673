from attributes.query_cache import AttributeKey, NumbersKey, QueryCache


def test_key_string_format():
    assert str(AttributeKey('07', 'color', '49', 2024)) == '07:color:49:2024'
    assert str(NumbersKey('color', '红', '60', 2023)) == 'color:红:60:2023'


def test_keys_are_hashable_records():
    assert AttributeKey('07', 'color', '49', 2024) == AttributeKey('07', 'color', '49', 2024)
    assert AttributeKey('07', 'color', '49', 2024) != AttributeKey('07', 'color', '60', 2024)
    # Delimiters inside values cannot make two keys collide
    assert AttributeKey('0:7', 'a', '49', 1) != AttributeKey('0', '7:a', '49', 1)


def test_read_through_computes_once():
    cache = QueryCache()
    calls = []
    key = AttributeKey('07', 'color', '49', 2024)
    
    def compute():
        calls.append(1)
        return '红'
    
    assert cache.get_attribute(key, compute) == '红'
    assert cache.get_attribute(key, compute) == '红'
    assert len(calls) == 1
    assert cache.stats() == {'hits': 1, 'misses': 1, 'size': 1}


def test_number_lists_are_copies():
    cache = QueryCache()
    key = NumbersKey('color', '红', '49', 2024)
    first = cache.get_numbers(key, lambda: ['01', '02'])
    first.append('99')
    second = cache.get_numbers(key, lambda: ['never'])
    assert second == ['01', '02']
    second.clear()
    assert cache.get_numbers(key, lambda: ['never']) == ['01', '02']


def test_clear_drops_both_maps():
    cache = QueryCache()
    cache.get_attribute(AttributeKey('07', 'color', '49', 2024), lambda: '红')
    cache.get_numbers(NumbersKey('color', '红', '49', 2024), lambda: ['07'])
    assert len(cache) == 2
    cache.clear()
    assert len(cache) == 0
    assert cache.get_attribute(AttributeKey('07', 'color', '49', 2024), lambda: '蓝') == '蓝'


def test_result_computed_across_clear_is_not_stored():
    cache = QueryCache()
    key = AttributeKey('07', 'color', '49', 2024)
    
    def compute_during_refresh():
        cache.clear()
        return 'stale'
    
    assert cache.get_attribute(key, compute_during_refresh) == 'stale'
    assert cache.get_attribute(key, lambda: 'fresh') == 'fresh'
