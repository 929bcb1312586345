import time

from flightxml.queries import (
    ONE_DAY,
    AirlineInsightReportType,
    airline_insight_query,
    flight_schedule_query,
    search_query,
    search_query_string,
)


def test_schedule_defaults_to_one_day_from_now():
    before = int(time.time())
    q = flight_schedule_query({"origin": "KSJC", "howMany": 1})
    after = int(time.time())
    assert before <= q["startDate"] <= after
    assert q["endDate"] - q["startDate"] == 86400
    assert q["origin"] == "KSJC"


def test_schedule_end_date_follows_given_start():
    q = flight_schedule_query({"startDate": 1000})
    assert q == {"startDate": 1000, "endDate": 1000 + ONE_DAY}


def test_schedule_keeps_explicit_window():
    q = flight_schedule_query({"startDate": 1, "endDate": 2}, now=500)
    assert q == {"startDate": 1, "endDate": 2}


def test_schedule_does_not_mutate_input():
    original = {"origin": "KSJC"}
    flight_schedule_query(original, now=10)
    assert original == {"origin": "KSJC"}


def test_insight_report_type_default():
    q = airline_insight_query({"origin": "SJC", "destination": "LAX"})
    assert q["reportType"] == 2
    assert q["reportType"] == AirlineInsightReportType.PERCENTAGE_SCHEDULED_ACTUALLY_FLOWN


def test_schedule_none_dates_treated_as_missing():
    q = flight_schedule_query({"startDate": None, "endDate": None}, now=1000)
    assert q == {"startDate": 1000, "endDate": 1000 + ONE_DAY}


def test_insight_none_report_type_defaults():
    assert airline_insight_query({"reportType": None})["reportType"] == 2


def test_insight_report_type_kept():
    q = airline_insight_query({"reportType": AirlineInsightReportType.CARRIERS_BY_CARGO_WEIGHT})
    assert q["reportType"] == 4


def test_search_parameters_only():
    assert search_query_string(parameters={"type": "B77*"}).endswith(" -type B77*")


def test_search_query_then_parameters():
    assert search_query_string("-a b", {"c": "d"}) == "-a b -c d"


def test_search_parameters_keep_insertion_order():
    text = search_query_string(parameters={"idents": "UAL*", "type": "B77*"})
    assert text == " -idents UAL* -type B77*"


def test_search_query_replaces_parameters():
    q = search_query({"parameters": {"belowAltitude": 100}, "howMany": 1})
    assert q == {"query": " -belowAltitude 100", "howMany": 1}


def test_search_query_without_parameters_untouched():
    q = search_query({"query": "-destination KLAX -prefix H"})
    assert q == {"query": "-destination KLAX -prefix H"}
