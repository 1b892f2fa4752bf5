"""Тесты таблицы сдвигов и сканера Хорспула."""
import pytest
from hypothesis import given, strategies as st

from horspool import (ALPHABET, ALPHABET_SIZE, InvalidPatternError, ShiftTable,
                      Violation, build_shift_table, classify, find_violation,
                      first_occurrence, is_match, is_valid, search,
                      symbol_to_index)


def test_alphabet_layout():
    assert ALPHABET_SIZE == 52
    assert symbol_to_index('a') == 0
    assert symbol_to_index('z') == 25
    assert symbol_to_index('A') == 26
    assert symbol_to_index('Z') == 51
    assert symbol_to_index('_') is None
    assert symbol_to_index('1') is None
    assert symbol_to_index('é') is None


@pytest.mark.parametrize("symbol, reason", [
    ('a', None),
    ('Q', None),
    ('[', Violation.RESERVED_GAP),
    ('`', Violation.RESERVED_GAP),
    ('@', Violation.OUT_OF_RANGE),
    ('{', Violation.OUT_OF_RANGE),
    ('5', Violation.OUT_OF_RANGE),
    ('ж', Violation.OUT_OF_RANGE),
])
def test_classify(symbol, reason):
    assert classify(symbol) is reason


def test_find_violation_reports_first_bad_symbol():
    assert find_violation("hello") is None
    assert find_violation("hi5x_") == (2, '5', Violation.OUT_OF_RANGE)
    assert find_violation("a_b") == (1, '_', Violation.RESERVED_GAP)


def test_is_valid():
    assert is_valid("feather")
    assert is_valid("")
    assert not is_valid("hi5")
    assert not is_valid("don't")


def test_shift_table_for_the():
    table = build_shift_table("the")
    assert len(table) == ALPHABET_SIZE
    assert table['t'] == 2
    assert table['h'] == 1
    # последний символ шаблона сам в таблицу не попадает
    assert table['e'] == 3
    assert table.non_default() == {'t': 2, 'h': 1}
    assert all(shift == 3 for symbol, shift in zip(ALPHABET, table.entries)
               if symbol not in 'th')


def test_shift_table_rightmost_occurrence_wins():
    table = build_shift_table("abab")
    assert table['a'] == 1
    assert table['b'] == 2
    assert table['c'] == 4


def test_shift_table_is_case_sensitive():
    table = build_shift_table("Tt")
    assert table['T'] == 1
    assert table['t'] == 2


def test_single_symbol_pattern_shifts_by_one():
    table = build_shift_table("x")
    assert set(table.entries) == {1}


def test_shift_table_is_idempotent_and_read_only():
    first = build_shift_table("mathematics")
    second = build_shift_table("mathematics")
    assert first == second
    assert hash(first) == hash(second)
    with pytest.raises(AttributeError):
        first.entries = ()


def test_shift_table_rejects_wrong_size():
    with pytest.raises(ValueError):
        ShiftTable("ab", [2] * 10)


def test_shift_table_render():
    rendered = build_shift_table("the").render().split()
    assert len(rendered) == ALPHABET_SIZE
    assert rendered[ALPHABET.index('t')] == '2'


def test_invalid_pattern_with_digit():
    with pytest.raises(InvalidPatternError) as info:
        build_shift_table("The1")
    assert info.value.position == 3
    assert info.value.symbol == '1'
    assert info.value.reason is Violation.OUT_OF_RANGE
    assert isinstance(info.value, ValueError)


def test_invalid_pattern_in_gap():
    with pytest.raises(InvalidPatternError) as info:
        build_shift_table("snake_case")
    assert info.value.reason is Violation.RESERVED_GAP


def test_empty_pattern_is_rejected():
    with pytest.raises(InvalidPatternError) as info:
        build_shift_table("")
    assert info.value.position is None


@pytest.mark.parametrize("pattern, text, expected", [
    ("the", "feather", 3),
    ("the", "other", 1),
    ("the", "ostrich", None),
    ("abc", "xyzabcxyz", 3),
    ("the", "the", 0),
    ("abab", "aabababab", 1),
    ("x", "aaax", 3),
    ("the", "th", None),
    ("the", "", None),
])
def test_first_occurrence(pattern, text, expected):
    table = build_shift_table(pattern)
    assert first_occurrence(pattern, text, table) == expected


def test_is_match_scenarios():
    table = build_shift_table("the")
    assert is_match("the", "feather", table)
    assert is_match("the", "other", table)
    assert not is_match("the", "ostrich", table)
    assert not is_match("the", "hi5", table)
    assert not is_match("the", "the5", table)


def test_first_occurrence_on_unvalidated_text():
    table = build_shift_table("the")
    assert table.shift('5') == 3
    assert first_occurrence("the", "xx5the", table) == 3
    assert first_occurrence("the", "th5", table) is None


def test_scanner_requires_matching_table():
    with pytest.raises(ValueError):
        first_occurrence("the", "feather", build_shift_table("they"))


def test_scanner_does_not_mutate_inputs():
    pattern, text = "the", "weather"
    table = build_shift_table(pattern)
    entries = table.entries
    assert is_match(pattern, text, table)
    assert is_match(pattern, text, table)
    assert table.entries == entries
    assert (pattern, text) == ("the", "weather")


def test_search_keeps_order_and_skips_invalid_texts():
    texts = ["other", "hi5", "ostrich", "feather", "thé"]
    assert search("the", texts) == ["other", "feather"]


def test_search_invalid_pattern():
    with pytest.raises(InvalidPatternError):
        search("The1", ["The"])


@given(st.text(alphabet="abAB", min_size=1, max_size=6), st.text(alphabet="abAB", max_size=40))
def test_first_occurrence_agrees_with_str_find(pattern, text):
    table = build_shift_table(pattern)
    position = text.find(pattern)
    assert first_occurrence(pattern, text, table) == (position if position != -1 else None)


@given(st.text(alphabet=ALPHABET, min_size=1, max_size=12))
def test_table_bounds_and_self_match(pattern):
    table = build_shift_table(pattern)
    assert all(1 <= shift <= len(pattern) for shift in table.entries)
    assert is_match(pattern, pattern, table)
    assert not is_match(pattern, pattern[:-1], table)
