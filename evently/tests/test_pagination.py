import pytest

from evently.db import MAX_PAGE_SIZE, PageInfo, PageRequest
from evently.db.pagination import parse_optional_int, parse_positive_int

def test_defaults_when_nothing_given():
    request = PageRequest.from_query()
    assert request.page == 1
    assert request.limit == 10
    assert request.offset == 0

def test_offset_follows_page_and_limit():
    request = PageRequest.from_query('3', '20')
    assert request.offset == 40

@pytest.mark.parametrize("page,limit", [
    ('abc', 'xyz'),
    ('0', '0'),
    ('-2', '-5'),
    ('', ''),
    ('1.5', '2.5'),
])
def test_malformed_values_fall_back_to_defaults(page, limit):
    request = PageRequest.from_query(page, limit)
    assert request == PageRequest(page=1, limit=10)

def test_limit_is_capped():
    assert PageRequest.from_query(1, 10_000).limit == MAX_PAGE_SIZE
    assert PageRequest.from_query(1, MAX_PAGE_SIZE).limit == MAX_PAGE_SIZE

def test_endpoint_default_limit():
    assert PageRequest.from_query(None, None, default_limit=5).limit == 5
    assert PageRequest.from_query(None, '7', default_limit=5).limit == 7

def test_parse_optional_int():
    assert parse_optional_int(None) is None
    assert parse_optional_int(True) is None
    assert parse_optional_int(' 42 ') == 42
    assert parse_optional_int('-3') == -3
    assert parse_optional_int('forty') is None

def test_parse_positive_int():
    assert parse_positive_int('5', 1) == 5
    assert parse_positive_int('0', 9) == 9
    assert parse_positive_int(None, 9) == 9

@pytest.mark.parametrize("total,limit,pages", [
    (0, 10, 0),
    (1, 10, 1),
    (10, 10, 1),
    (11, 10, 2),
    (25, 3, 9),
])
def test_pages_is_ceiling_of_total_over_limit(total, limit, pages):
    info = PageInfo.build(PageRequest(page=1, limit=limit), total)
    assert info.pages == pages

def test_page_info_headers():
    info = PageInfo.build(PageRequest(page=2, limit=5), 12)
    assert info.headers() == {
        'X-Total-Count': '12',
        'X-Total-Pages': '3',
        'X-Current-Page': '2',
        'X-Per-Page': '5',
    }
    assert info.to_dict() == {'page': 2, 'limit': 5, 'total': 12, 'pages': 3}

def test_page_info_from_dict():
    info = PageInfo.from_dict({'page': '2', 'limit': 5, 'total': 12, 'pages': 3})
    assert info == PageInfo(page=2, limit=5, total=12, pages=3)

@pytest.mark.parametrize("data", [
    {'page': 1, 'limit': 10, 'total': 3},
    {'page': 'one', 'limit': 10, 'total': 3, 'pages': 1},
    {'page': None, 'limit': 10, 'total': 3, 'pages': 1},
])
def test_page_info_from_dict_rejects_bad_metadata(data):
    with pytest.raises(ValueError):
        PageInfo.from_dict(data)

def test_out_of_range_integers_are_treated_as_malformed():
    assert parse_optional_int(str(10**20)) is None
    assert parse_optional_int(-(2**31)) is None
    assert parse_optional_int(2**31 - 1) == 2**31 - 1

def test_huge_page_is_clamped():
    request = PageRequest.from_query(str(10**20), '10')

    assert request.page == 2**31 - 1
    assert request.offset == (2**31 - 2) * 10

def test_parse_positive_int_clamps_to_maximum():
    assert parse_positive_int('500', 10, maximum=100) == 100
    assert parse_positive_int(str(10**20), 1) == 2**31 - 1
