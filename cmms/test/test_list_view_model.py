"""
Tests for ListViewModel sorting and filtering
"""

from datetime import date, datetime, timezone

import pytest
from cmms.business.core.entity_kinds import get_entity_kind
from cmms.business.core.list_view_model import ASC, DESC, EPOCH, ListViewModel, to_timestamp


def _names(rows):
    return [row.get('name') for row in rows]


def test_string_sort_ascending_and_descending():
    view = ListViewModel([{'name': 'b'}, {'name': 'c'}, {'name': 'a'}])

    assert _names(view.sort_by('name', ASC)) == ['a', 'b', 'c']
    assert _names(view.sort_by('name', DESC)) == ['c', 'b', 'a']


def test_string_sort_is_case_sensitive():
    view = ListViewModel([{'name': 'apple'}, {'name': 'Banana'}, {'name': 'cherry'}])

    # Uppercase code points come before lowercase ones
    assert _names(view.sort_by('name')) == ['Banana', 'apple', 'cherry']


def test_nullish_strings_sort_first():
    view = ListViewModel([{'name': 'b'}, {'name': None}, {'name': 'a'}, {}])

    assert _names(view.sort_by('name'))[:2] == [None, None]
    assert _names(view.sort_by('name'))[2:] == ['a', 'b']


def test_dates_compare_as_instants():
    rows = [
        {'name': 'late', 'due_date': '2024-03-01'},
        {'name': 'none', 'due_date': None},
        {'name': 'early', 'due_date': '2023-12-31'},
        {'name': 'garbage', 'due_date': 'not a date'},
    ]
    view = ListViewModel(rows)

    ordered = _names(view.sort_by('due_date'))
    assert ordered[:2] == ['none', 'garbage']
    assert ordered[2:] == ['early', 'late']


def test_date_with_time_and_plain_date_compare():
    rows = [
        {'name': 'noon', 'created_at': '2024-01-01T12:00:00'},
        {'name': 'midnight', 'created_at': '2024-01-01'},
        {'name': 'utc', 'created_at': '2024-01-01T06:00:00Z'},
    ]
    assert _names(ListViewModel(rows).sort_by('created_at')) == ['midnight', 'utc', 'noon']


def test_to_timestamp_values():
    assert to_timestamp(None) == EPOCH
    assert to_timestamp('') == EPOCH
    assert to_timestamp('31/12/2023') == EPOCH
    assert to_timestamp(date(1970, 1, 2)) == 86400.0
    assert to_timestamp(datetime(1970, 1, 1, 0, 1, tzinfo=timezone.utc)) == 60.0


def test_descending_is_exact_reverse_without_ties():
    rows = [{'name': name} for name in ('m', 'x', 'a', 'q', 'd')]
    view = ListViewModel(rows)

    assert view.sort_by('name', DESC) == list(reversed(view.sort_by('name', ASC)))


def test_sort_is_stable_for_equal_keys():
    rows = [
        {'id': 1, 'status': 'Open'},
        {'id': 2, 'status': 'Closed'},
        {'id': 3, 'status': 'Open'},
        {'id': 4, 'status': 'Closed'},
    ]
    view = ListViewModel(rows)

    assert [row['id'] for row in view.sort_by('status', ASC)] == [2, 4, 1, 3]
    assert [row['id'] for row in view.sort_by('status', DESC)] == [1, 3, 2, 4]


def test_toggle_sort():
    view = ListViewModel([{'name': 'a', 'code': 'z'}, {'name': 'b', 'code': 'y'}])

    assert _names(view.toggle_sort('name')) == ['a', 'b']
    assert view.direction == ASC
    assert _names(view.toggle_sort('name')) == ['b', 'a']
    assert view.direction == DESC
    assert _names(view.toggle_sort('name')) == ['a', 'b']

    view.toggle_sort('name')
    assert view.direction == DESC
    # Switching field always starts ascending
    assert _names(view.toggle_sort('code')) == ['b', 'a']
    assert (view.sort_field, view.direction) == ('code', ASC)


def test_sort_does_not_mutate_input():
    rows = [{'name': 'b'}, {'name': 'a'}]
    view = ListViewModel(rows)

    view.sort_by('name')
    assert _names(rows) == ['b', 'a']
    assert _names(view.items) == ['b', 'a']


def test_numbers_sort_numerically():
    rows = [
        {'name': 'ten', 'quantity': 10},
        {'name': 'two', 'quantity': 2},
        {'name': 'none', 'quantity': None},
        {'name': 'thirty', 'quantity': 30},
    ]
    assert _names(ListViewModel(rows).sort_by('quantity')) == ['none', 'two', 'ten', 'thirty']


def test_mixed_values_fall_back_to_strings():
    rows = [{'name': 'int', 'ref': 10}, {'name': 'str', 'ref': '9'}]
    # '10' < '9' as strings
    assert _names(ListViewModel(rows).sort_by('ref')) == ['int', 'str']


def test_objects_are_sorted_by_attribute():
    class Row:
        def __init__(self, name):
            self.name = name

    view = ListViewModel([Row('b'), Row('a')])
    assert [row.name for row in view.sort_by('name')] == ['a', 'b']


def test_rows_follow_current_sort():
    view = ListViewModel([{'name': 'b'}, {'name': 'a'}])
    assert _names(view.rows()) == ['b', 'a']

    view.sort_by('name', DESC)
    assert _names(view.rows()) == ['b', 'a']
    view.sort_by('name', ASC)
    assert _names(view.rows()) == ['a', 'b']


def test_for_kind_uses_default_sort():
    rows = [
        {'request_number': 'SR-1', 'created_at': '2024-01-01T00:00:00'},
        {'request_number': 'SR-2', 'created_at': '2024-02-01T00:00:00'},
    ]
    view = ListViewModel.for_kind(get_entity_kind('ServiceRequest'), rows)

    assert [row['request_number'] for row in view.rows()] == ['SR-2', 'SR-1']
    assert ListViewModel.for_kind(get_entity_kind('Asset'), rows).sort_field is None


def test_filter_text_matches_any_field_case_insensitively():
    rows = [
        {'name': 'Feed Pump', 'manufacturer': 'Grundfos', 'location': {'name': 'Pump House'}},
        {'name': 'Air Handler', 'manufacturer': 'Trane', 'location': None},
        {'name': 'Chiller', 'manufacturer': 'PUMPCO', 'location': None},
    ]
    view = ListViewModel(rows)

    assert _names(view.filter_text('pump')) == ['Feed Pump', 'Chiller']
    assert _names(view.filter_text('pump', fields=['name'])) == ['Feed Pump']
    assert _names(view.filter_text('house')) == []
    assert len(view.filter_text('  ')) == 3


def test_invalid_direction_is_rejected():
    with pytest.raises(ValueError):
        ListViewModel([], direction='up')

    view = ListViewModel([{'name': 'a'}])
    with pytest.raises(ValueError):
        view.sort_by('name', 'sideways')
