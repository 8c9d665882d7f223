import pytest

from evently.db import ListQuery, SortOrder, SortSpec
from evently.db.sorting import EventSortField, ReviewSortField, parse_sort_field
from evently.models import Event, Review

@pytest.mark.parametrize("value,expected", [
    ('asc', SortOrder.ASC),
    ('ASC', SortOrder.ASC),
    (' desc ', SortOrder.DESC),
    ('sideways', SortOrder.DESC),
    ('', SortOrder.DESC),
    (None, SortOrder.DESC),
])
def test_sort_order_parse(value, expected):
    assert SortOrder.parse(value, SortOrder.DESC) is expected

def test_parse_sort_field_accepts_only_allow_listed_tokens():
    assert parse_sort_field(EventSortField, 'event_date') is EventSortField.EVENT_DATE
    assert parse_sort_field(ReviewSortField, 'rating') is ReviewSortField.RATING
    assert parse_sort_field(EventSortField, 'password_hash') is None
    assert parse_sort_field(EventSortField, 'name; DROP TABLE events') is None
    assert parse_sort_field(EventSortField, None) is None

def test_sort_spec_appends_primary_key_tiebreaker():
    spec = SortSpec(column=Event.name, order=SortOrder.ASC, tiebreaker=Event.event_id)
    clauses = [str(clause) for clause in spec.clauses()]
    assert clauses == ['events.name ASC', 'events.event_id ASC']

def test_sort_spec_skips_tiebreaker_when_sorting_by_primary_key():
    spec = SortSpec(column=Event.event_id, order=SortOrder.DESC, tiebreaker=Event.event_id)
    assert [str(clause) for clause in spec.clauses()] == ['events.event_id DESC']

def test_list_query_resolves_sort_fields():
    listing = ListQuery(
        entity=Review,
        primary_key=Review.review_id,
        default_sort=Review.created_at,
        default_order=SortOrder.DESC,
        sort_fields=ReviewSortField,
        sort_columns={
            ReviewSortField.CREATED_AT: Review.created_at,
            ReviewSortField.RATING: Review.rating,
            ReviewSortField.EVENT_ID: Review.event_id,
            ReviewSortField.USER_ID: Review.user_id,
        },
    )

    spec = listing.sort_spec('rating', 'asc')
    assert spec.column is Review.rating
    assert spec.order is SortOrder.ASC

    fallback = listing.sort_spec('review_text', 'nonsense')
    assert fallback.column is Review.created_at
    assert fallback.order is SortOrder.DESC

def test_list_query_requires_a_column_for_every_sort_field():
    with pytest.raises(ValueError):
        ListQuery(
            entity=Event,
            primary_key=Event.event_id,
            default_sort=Event.created_at,
            sort_fields=EventSortField,
            sort_columns={EventSortField.NAME: Event.name},
        )
