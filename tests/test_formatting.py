from __future__ import annotations

from conftest import make_points
from route_elevation.core.chart import SPARK_LEVELS, elevation_chart, render_sparkline
from route_elevation.core.formatting import format_distance, format_elevation, format_grade, summarize_stats
from route_elevation.core.models import RouteStats
from route_elevation.core.stats import aggregate_route_stats


def test_format_distance():
    assert format_distance(0) == "0 m"
    assert format_distance(999.4) == "999 m"
    assert format_distance(999.5) == "1000 m"
    assert format_distance(1000) == "1.0 km"
    assert format_distance(12_345) == "12.3 km"
    assert format_distance(350, compact=True) == "350m"
    assert format_distance(1260, compact=True) == "1.3km"


def test_format_elevation_and_grade():
    assert format_elevation(12.5) == "13 m"
    assert format_elevation(-3.2, compact=True) == "-3m"
    assert format_grade(5) == "5.0%"
    assert format_grade(-10.04) == "-10.0%"


def test_summary_for_no_data_is_empty():
    assert summarize_stats(None) == []


def test_summary_hides_minimums_for_zero_length_route():
    rows = summarize_stats(RouteStats())
    assert [label for label, _ in rows] == [
        "Total Distance",
        "Elevation Gain",
        "Elevation Loss",
        "Max Elevation",
        "Max Grade",
    ]


def test_summary_for_worked_example(example_points):
    rows = dict(summarize_stats(aggregate_route_stats(example_points)))
    assert rows == {
        "Total Distance": "300 m",
        "Elevation Gain": "20 m",
        "Elevation Loss": "10 m",
        "Max Elevation": "20 m",
        "Max Grade": "15.0%",
        "Min Elevation": "5 m",
        "Min Grade": "-10.0%",
    }


def test_chart_series_and_hover(example_points):
    chart = elevation_chart(example_points)
    assert chart.labels == ["0m", "100m", "200m", "300m"]
    assert chart.elevations == [10, 15, 5, 20]
    assert chart.point_at(2) == example_points[2]
    assert chart.point_at(4) is None
    assert chart.point_at(None) is None
    assert chart.tooltip(3) == ["Distance: 300m", "Elevation: 20m"]


def test_empty_chart():
    chart = elevation_chart([])
    assert chart.is_empty
    assert chart.tooltip(0) is None
    assert render_sparkline([]) == ""


def test_sparkline_spans_lowest_to_highest_block(example_points):
    line = render_sparkline(example_points, width=10)
    assert len(line) == 4
    assert line[2] == SPARK_LEVELS[0]
    assert line[3] == SPARK_LEVELS[-1]


def test_sparkline_downsamples_to_width():
    pts = make_points([(i * 10, i) for i in range(500)])
    assert len(render_sparkline(pts, width=40)) == 40


def test_flat_sparkline():
    pts = make_points([(0, 50), (10, 50), (20, 50)])
    assert render_sparkline(pts) == SPARK_LEVELS[0] * 3
