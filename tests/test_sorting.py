"""Tests for multi-key and column sorting of catalog records."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from catalog.display.sorting import (
    ASC,
    DEFAULT_GUITAR_ORDER,
    DESC,
    GUITAR_SORT_FIELDS,
    MANUFACTURER_SORT_FIELDS,
    MODEL_SORT_FIELDS,
    PRODUCT_LINE_SORT_FIELDS,
    ColumnSort,
    SortConfigurationError,
    SortKey,
    parse_sort_keys,
    sort_guitars,
    sort_records,
)
from catalog.records import ManufacturerRecord, ProductLineRecord


def ids(records):
    return [record.id for record in records]


# ---------------------------------------------------------------------------
# Multi-key sorting
# ---------------------------------------------------------------------------


def test_significance_then_value_with_null_value_last(make_guitar):
    guitars = [
        make_guitar('rare-100', significance_level='rare', current_estimated_value=Decimal('100')),
        make_guitar('notable-500', significance_level='notable', current_estimated_value=Decimal('500')),
        make_guitar('notable-none', significance_level='notable', current_estimated_value=None),
    ]
    keys = [SortKey('significance_level', ASC), SortKey('current_estimated_value', DESC)]
    assert ids(sort_guitars(guitars, keys)) == ['notable-500', 'notable-none', 'rare-100']


def test_default_order_breaks_ties_on_serial_number(make_guitar):
    guitars = [
        make_guitar('b', significance_level='historic', current_estimated_value=Decimal('10'),
                    serial_number='B-2'),
        make_guitar('none', significance_level='historic', current_estimated_value=Decimal('10')),
        make_guitar('a', significance_level='historic', current_estimated_value=Decimal('10'),
                    serial_number='A-1'),
    ]
    assert ids(sort_guitars(guitars)) == ['a', 'b', 'none']


def test_missing_significance_sorts_last(make_guitar):
    guitars = [
        make_guitar('none', current_estimated_value=Decimal('9999999')),
        make_guitar('rare', significance_level='rare'),
        make_guitar('historic', significance_level='historic'),
    ]
    assert ids(sort_guitars(guitars)) == ['historic', 'rare', 'none']


def test_nulls_last_in_both_directions(make_guitar):
    guitars = [
        make_guitar('none', serial_number=None),
        make_guitar('b', serial_number='B'),
        make_guitar('a', serial_number='A'),
    ]
    assert ids(sort_guitars(guitars, [SortKey('serial_number', ASC)])) == ['a', 'b', 'none']
    assert ids(sort_guitars(guitars, [SortKey('serial_number', DESC)])) == ['b', 'a', 'none']


def test_values_compare_numerically(make_guitar):
    guitars = [
        make_guitar('nine', current_estimated_value=Decimal('9')),
        make_guitar('ten', current_estimated_value=Decimal('10')),
        make_guitar('float', current_estimated_value=9.5),
    ]
    keys = [SortKey('current_estimated_value', ASC)]
    assert ids(sort_guitars(guitars, keys)) == ['nine', 'float', 'ten']


def test_nan_value_sorts_as_missing(make_guitar):
    guitars = [
        make_guitar('nan', current_estimated_value=Decimal('NaN')),
        make_guitar('five', current_estimated_value=Decimal('5')),
        make_guitar('fifty', current_estimated_value=Decimal('50')),
    ]
    keys = [SortKey('current_estimated_value', DESC)]
    assert ids(sort_guitars(guitars, keys)) == ['fifty', 'five', 'nan']
    assert ids(sort_guitars(guitars, [SortKey('current_estimated_value', ASC)])) == ['five', 'fifty', 'nan']


def test_sort_is_stable_for_equal_keys(make_guitar):
    guitars = [make_guitar(f'g-{i}', significance_level='notable') for i in range(6)]
    assert ids(sort_guitars(guitars)) == ids(guitars)


def test_stability_holds_for_descending_keys(make_guitar):
    guitars = [
        make_guitar('first', current_estimated_value=Decimal('5')),
        make_guitar('top', current_estimated_value=Decimal('7')),
        make_guitar('second', current_estimated_value=Decimal('5')),
    ]
    keys = [SortKey('current_estimated_value', DESC)]
    assert ids(sort_guitars(guitars, keys)) == ['top', 'first', 'second']


def test_sort_is_idempotent(catalog_queries):
    once = sort_guitars(catalog_queries.guitars)
    assert sort_guitars(once) == once


def test_sort_does_not_mutate_input(make_guitar):
    guitars = [make_guitar('b', serial_number='B'), make_guitar('a', serial_number='A')]
    sort_guitars(guitars, [SortKey('serial_number')])
    assert ids(guitars) == ['b', 'a']


def test_sort_by_derived_display_name(catalog_queries):
    keys = [SortKey('display_name', ASC)]
    assert ids(sort_guitars(catalog_queries.guitars, keys)) == ['g-strat', 'g-blackie', 'g-burst']


def test_count_fields_default_to_zero(make_guitar):
    guitars = [
        make_guitar('two', counts={'market_valuations': 2}),
        make_guitar('none'),
    ]
    keys = [SortKey('market_valuations', ASC)]
    assert ids(sort_guitars(guitars, keys)) == ['none', 'two']


def test_unknown_field_fails_before_any_row_is_read():
    with pytest.raises(SortConfigurationError):
        sort_guitars([], [SortKey('colour')])


def test_invalid_direction_fails_when_key_is_built():
    with pytest.raises(SortConfigurationError):
        SortKey('serial_number', 'sideways')


def test_default_order_matches_guitar_list():
    assert [(key.field, key.direction) for key in DEFAULT_GUITAR_ORDER] == [
        ('significance_level', ASC),
        ('current_estimated_value', DESC),
        ('serial_number', ASC),
    ]


def test_parse_sort_keys():
    keys = parse_sort_keys('significance_level, -current_estimated_value,+serial_number,',
                           GUITAR_SORT_FIELDS)
    assert keys == [
        SortKey('significance_level', ASC),
        SortKey('current_estimated_value', DESC),
        SortKey('serial_number', ASC),
    ]


def test_parse_sort_keys_rejects_unknown_fields():
    with pytest.raises(SortConfigurationError):
        parse_sort_keys('year,-colour', MODEL_SORT_FIELDS)


def test_date_field_mixes_naive_and_aware_datetimes():
    lines = [
        ProductLineRecord(id='aware', name='A', updated_at=datetime(2024, 1, 2, tzinfo=timezone.utc)),
        ProductLineRecord(id='naive', name='B', updated_at=datetime(2024, 1, 1)),
        ProductLineRecord(id='string', name='C', updated_at='2023-06-01T00:00:00'),
    ]
    ordered = sort_records(lines, [SortKey('updated_at', ASC)], PRODUCT_LINE_SORT_FIELDS)
    assert ids(ordered) == ['string', 'naive', 'aware']


# ---------------------------------------------------------------------------
# Column sorting
# ---------------------------------------------------------------------------


def test_column_sort_starts_unsorted(catalog_queries):
    sorter = ColumnSort(MODEL_SORT_FIELDS)
    assert ids(sorter.apply(catalog_queries.models)) == ids(catalog_queries.models)


def test_clicking_a_column_sorts_ascending():
    sorter = ColumnSort(MODEL_SORT_FIELDS).toggle('year')
    assert (sorter.key, sorter.direction) == ('year', ASC)


def test_clicking_the_same_column_flips_direction():
    sorter = ColumnSort(MODEL_SORT_FIELDS).toggle('year').toggle('year')
    assert (sorter.key, sorter.direction) == ('year', DESC)
    assert sorter.toggle('year').direction == ASC


def test_clicking_another_column_resets_to_ascending():
    sorter = ColumnSort(MODEL_SORT_FIELDS).toggle('year').toggle('year').toggle('name')
    assert (sorter.key, sorter.direction) == ('name', ASC)


def test_toggling_twice_from_ascending_restores_ascending_order(catalog_queries):
    ascending = ColumnSort(MODEL_SORT_FIELDS).toggle('year')
    round_trip = ascending.toggle('year').toggle('year')
    assert round_trip == ascending
    assert ids(round_trip.apply(catalog_queries.models)) == ids(ascending.apply(catalog_queries.models))
    assert ids(ascending.apply(catalog_queries.models)) == ['model-strat54', 'model-lp59', 'model-proto']


def test_descending_year(catalog_queries):
    sorter = ColumnSort(MODEL_SORT_FIELDS, 'year', DESC)
    assert ids(sorter.apply(catalog_queries.models)) == ['model-proto', 'model-lp59', 'model-strat54']


def test_manufacturer_column_resolves_nested_name(catalog_queries):
    sorter = ColumnSort(MODEL_SORT_FIELDS, 'manufacturer')
    # Fender < Gibson Guitar Corporation < Unknown
    assert ids(sorter.apply(catalog_queries.models)) == ['model-strat54', 'model-lp59', 'model-proto']


def test_numeric_column_treats_missing_as_zero():
    lines = [
        ProductLineRecord(id='1958', name='Flying V', introduced_year=1958),
        ProductLineRecord(id='none', name='Mystery'),
        ProductLineRecord(id='1952', name='Les Paul', introduced_year=1952),
    ]
    sorter = ColumnSort(PRODUCT_LINE_SORT_FIELDS, 'introduced_year')
    assert ids(sorter.apply(lines)) == ['none', '1952', '1958']


def test_numeric_column_treats_nan_as_zero(make_model):
    models = [
        make_model('m-500', msrp_original=Decimal('500')),
        make_model('m-nan', msrp_original=Decimal('NaN')),
        make_model('m-100', msrp_original=Decimal('100')),
    ]
    sorter = ColumnSort(MODEL_SORT_FIELDS, 'msrp_original', DESC)
    assert ids(sorter.apply(models)) == ['m-500', 'm-100', 'm-nan']


def test_missing_text_sorts_as_empty_string(catalog_queries):
    sorter = ColumnSort(MODEL_SORT_FIELDS, 'product_line')
    assert ids(sorter.apply(catalog_queries.models)) == ['model-strat54', 'model-proto', 'model-lp59']


def test_count_column_reads_nested_counts():
    manufacturers = [
        ManufacturerRecord(id='many', name='A', counts={'models': 12}),
        ManufacturerRecord(id='none', name='B'),
        ManufacturerRecord(id='few', name='C', counts={'models': 3}),
    ]
    sorter = ColumnSort(MANUFACTURER_SORT_FIELDS, 'models', DESC)
    assert ids(sorter.apply(manufacturers)) == ['many', 'few', 'none']


def test_missing_dates_sort_as_epoch():
    lines = [
        ProductLineRecord(id='recent', name='A', updated_at=datetime(2024, 3, 1)),
        ProductLineRecord(id='never', name='B'),
    ]
    sorter = ColumnSort(PRODUCT_LINE_SORT_FIELDS, 'updated_at')
    assert ids(sorter.apply(lines)) == ['never', 'recent']


def test_column_sort_is_stable_for_ties():
    manufacturers = [ManufacturerRecord(id=str(i), name='Same') for i in range(5)]
    sorter = ColumnSort(MANUFACTURER_SORT_FIELDS, 'name', DESC)
    assert ids(sorter.apply(manufacturers)) == ['0', '1', '2', '3', '4']


def test_unknown_column_fails_at_toggle():
    with pytest.raises(SortConfigurationError):
        ColumnSort(MODEL_SORT_FIELDS).toggle('colour')


def test_unknown_column_fails_at_construction():
    with pytest.raises(SortConfigurationError):
        ColumnSort(MODEL_SORT_FIELDS, 'colour')
