import logging
from datetime import date, datetime

from fastcal.parser import parse_entries, parse_entry, parse_events

TODAY = date(2026, 2, 5)


def test_parses_two_entries_in_input_order():
    events = parse_events("Meeting with Team 9:00-10:00 am; Lunch 12:00-1:00 pm", TODAY)

    assert [e.title for e in events] == ["Meeting with Team", "Lunch"]
    assert events[0].start == datetime(2026, 2, 5, 9, 0)
    assert events[0].end == datetime(2026, 2, 5, 10, 0)
    assert events[1].start == datetime(2026, 2, 5, 12, 0)
    assert events[1].end == datetime(2026, 2, 5, 13, 0)


def test_strips_brackets_and_whitespace_from_title():
    assert parse_events("[Standup] 9:15 - 9:30 am", TODAY)[0].title == "Standup"
    assert parse_events("[Standup 9:15-9:30 am", TODAY)[0].title == "Standup"
    assert parse_events("  Standup]   9:15-9:30 am  ", TODAY)[0].title == "Standup"


def test_empty_title_is_accepted():
    events = parse_events("[] 9:00-10:00 am", TODAY)

    assert len(events) == 1
    assert events[0].title == ""


def test_designator_is_case_insensitive_and_shared():
    events = parse_events("Review 1:00-2:30 PM", TODAY)

    assert events[0].start == datetime(2026, 2, 5, 13, 0)
    assert events[0].end == datetime(2026, 2, 5, 14, 30)


def test_single_designator_applies_to_both_times():
    # 11:30 and 12:15 both read as pm, so the span never crosses noon
    event = parse_events("Brunch 11:30-12:15 pm", TODAY)[0]

    assert event.start == datetime(2026, 2, 5, 23, 30)
    assert event.end == datetime(2026, 2, 6, 12, 15)


def test_end_before_start_rolls_over_one_day():
    event = parse_events("Night Shift 11:00-2:00 pm", TODAY)[0]

    assert event.start == datetime(2026, 2, 5, 23, 0)
    assert event.end == datetime(2026, 2, 6, 14, 0)
    assert event.end > event.start


def test_twelve_am_is_midnight():
    event = parse_events("Late 12:00-12:30 am", TODAY)[0]

    assert event.start == datetime(2026, 2, 5, 0, 0)
    assert event.end == datetime(2026, 2, 5, 0, 30)


def test_bad_entry_is_dropped_and_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="fastcal.parser"):
        events = parse_events("Bad Entry", TODAY)

    assert events == []
    assert len(caplog.records) == 1
    assert "Bad Entry" in caplog.records[0].getMessage()


def test_failures_do_not_affect_sibling_entries(caplog):
    with caplog.at_level(logging.WARNING, logger="fastcal.parser"):
        events = parse_events("Gym 7:00-8:00 am; nonsense; Clock 13:00-14:00 pm; Dinner 6:00-7:00 pm", TODAY)

    assert [e.title for e in events] == ["Gym", "Dinner"]
    assert len(caplog.records) == 2


def test_empty_entries_are_skipped_silently(caplog):
    with caplog.at_level(logging.WARNING, logger="fastcal.parser"):
        events = parse_events(" ; ;Gym 7:00-8:00 am;  ", TODAY)

    assert [e.title for e in events] == ["Gym"]
    assert caplog.records == []


def test_parse_entries_keeps_errors_as_results():
    results = parse_entries("Gym 7:00-8:00 am; Bad Entry", TODAY)

    assert [r.ok for r in results] == [True, False]
    assert results[1].error.entry == "Bad Entry"
    assert results[1].error.reason == "Invalid format"


def test_out_of_range_hour_is_a_resolution_failure():
    result = parse_entry("Odd 0:30-1:00 am", TODAY)

    assert not result.ok
    assert "Hour out of range" in result.error.reason


def test_missing_designator_does_not_match():
    assert parse_entry("Lunch 12:00-1:00", TODAY).error.reason == "Invalid format"


def test_zero_length_entry_is_kept_without_rollover():
    events = parse_events("Z 9:00-9:00 am", TODAY)

    assert len(events) == 1
    assert events[0].start == events[0].end == datetime(2026, 2, 5, 9, 0)
