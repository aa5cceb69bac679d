"""
Test every lesson end to end: its UI declares the inputs its server reads,
and interactions re-render the expected outputs.
"""

import base64

import pytest

from starlesson import Session, ui
from starlesson.lessons import LESSONS, Lesson, get_lesson
from starlesson.lessons.data import MTCARS, sample
from starlesson.lessons.file_upload import parse_csv


def start(slug):
    lesson = get_lesson(slug)
    session = Session()
    session.declare_inputs(ui.collect_inputs(lesson.ui))
    session.run_server(lesson.server)
    return session, dict(session.output.drain())


def test_lesson_registry():
    """Test the lesson list and its metadata."""
    assert [lesson.slug for lesson in LESSONS] == [
        "inputs", "outputs", "dynamic-ui", "file-upload",
        "reactive-calc", "observers", "events", "conditional",
    ]
    for lesson in LESSONS:
        assert isinstance(lesson, Lesson)
        assert lesson.title and lesson.summary
        assert "def server(input, output, session)" in lesson.source
    assert get_lesson("nope") is None
    print("✓ Lesson registry works")


@pytest.mark.parametrize("slug", [lesson.slug for lesson in LESSONS])
def test_lesson_runs_with_defaults(slug):
    """Test that a lesson renders its outputs from the declared defaults without errors."""
    session, fragments = start(slug)
    assert fragments, "Every lesson renders something on load"
    for html in fragments.values():
        assert "starlesson-error" not in html
    assert not session.graph.errors
    print(f"✓ Lesson {slug} runs")


def test_inputs_lesson():
    """Test that the inputs lesson echoes coerced values."""
    session, fragments = start("inputs")
    assert "obs        10" in fragments["values"]
    assert "with the mean" in fragments["sentence"]

    fragments = dict(session.apply({"obs": "25", "show_mean": False, "columns": ["wt"]}))
    assert "25 norm observations" in fragments["sentence"]
    assert "without the mean" in fragments["sentence"]
    assert "columns wt" in fragments["sentence"]
    print("✓ Inputs lesson works")


def test_outputs_lesson():
    """Test that the plot and the table react to their own inputs only."""
    session, fragments = start("outputs")
    assert "<uk-chart" in fragments["hist"]
    assert "Mazda RX4" in fragments["cars"]

    fragments = dict(session.apply({"cyl": "8"}))
    assert list(fragments) == ["cars"]
    assert "Duster 360" in fragments["cars"]
    assert "Mazda RX4" not in fragments["cars"]

    fragments = dict(session.apply({"n": 500}))
    assert list(fragments) == ["hist"]
    assert "500 normal draws" in fragments["hist"]
    print("✓ Outputs lesson works")


def test_dynamic_ui_lesson():
    """Test that the generated widget becomes a readable input."""
    session, fragments = start("dynamic-ui")
    assert 'id="dynamic_slider-widget"' in fragments["control"]
    assert "dynamic_slider = 5" in fragments["dynamic_value"]

    fragments = dict(session.apply({"kind": "text"}))
    assert 'id="dynamic_text-widget"' in fragments["control"]
    assert "dynamic_text = &#x27;starlesson&#x27;" in fragments["dynamic_value"] or \
        "dynamic_text = 'starlesson'" in fragments["dynamic_value"]

    fragments = dict(session.apply({"dynamic_text": "changed"}))
    assert list(fragments) == ["dynamic_value"]
    print("✓ Dynamic UI lesson works")


def test_dynamic_ui_rerender_restores_default():
    """Test that a widget rendered again shows the same value on the page and the server."""
    session, _ = start("dynamic-ui")
    fragments = dict(session.apply({"dynamic_slider": 8}))
    assert "dynamic_slider = 8" in fragments["dynamic_value"]

    session.apply({"kind": "text"})
    fragments = dict(session.apply({"kind": "slider"}))
    assert 'value="5"' in fragments["control"]
    assert "dynamic_slider = 5" in fragments["dynamic_value"]
    assert session.input.dynamic_slider() == 5
    print("✓ Re-rendered widgets start from their default")


def test_file_upload_lesson():
    """Test the default message and a parsed upload."""
    session, fragments = start("file-upload")
    assert "No file uploaded" in fragments["summary"]
    assert 'id="preview"' in fragments["preview"]
    assert "<table" not in fragments["preview"]

    csv_bytes = b"name,score\nada,10\ngrace,12\n"
    fragments = dict(session.apply({
        "upload": [base64.b64encode(csv_bytes).decode()],
        "uploadNames": ["scores.csv"],
        "uploadMimes": ["text/csv"],
    }))
    assert f"scores.csv: {len(csv_bytes)} bytes, 2 rows, 2 columns" in fragments["summary"]
    assert "<th>score</th>" in fragments["preview"]
    assert "grace" in fragments["preview"]

    fragments = dict(session.apply({"header": False}))
    assert "3 rows" in fragments["summary"]
    assert "<th>V1</th>" in fragments["preview"]
    print("✓ File upload lesson works")


def test_parse_csv():
    """Test CSV parsing with and without a header row."""
    text = "a,b\n1,2\n\n3\n"
    assert parse_csv(text) == [{"a": "1", "b": "2"}, {"a": "3", "b": ""}]
    assert parse_csv(text, header=False) == [
        {"V1": "a", "V2": "b"},
        {"V1": "1", "V2": "2"},
        {"V1": "3", "V2": ""},
    ]
    assert parse_csv("") == []
    assert parse_csv("\n \n") == []
    print("✓ parse_csv works")


def test_reactive_calc_lesson():
    """Test that the shared sample is drawn once per relevant change."""
    session, fragments = start("reactive-calc")
    assert "Sample drawn 1 time(s)" in fragments["draws"]
    assert "mean" in fragments["stats"]

    fragments = dict(session.apply({"title": "Renamed"}))
    assert list(fragments) == ["plot"], "A new title does not draw a new sample"

    fragments = dict(session.apply({"n": 200}))
    assert "Sample drawn 2 time(s)" in fragments["draws"]
    assert "n       200" in fragments["stats"]
    print("✓ Reactive expression lesson works")


def test_observers_lesson():
    """Test the observer keeping a history of messages."""
    session, fragments = start("observers")
    assert "hello" in fragments["history"]

    session.apply({"message": "world"})
    fragments = dict(session.apply({"message": "again"}))
    history = fragments["history"]
    assert history.index("hello") < history.index("world") < history.index("again")

    fragments = dict(session.apply({"clear": 1}))
    assert "(empty)" in fragments["history"]
    print("✓ Observers lesson works")


def test_events_lesson():
    """Test that the sample is drawn on click only."""
    session, fragments = start("events")
    assert "<uk-chart" not in fragments["hist"], "Nothing is drawn before the first click"
    assert "drawn" not in fragments["summary"]

    fragments = dict(session.apply({"n": 300}))
    assert fragments == {}, "Moving the slider alone does nothing"

    fragments = dict(session.apply({"go": 1}))
    assert "Draw #1" in fragments["hist"]
    assert "300 values drawn, 1 draw(s) since the last reset" in fragments["summary"]

    fragments = dict(session.apply({"go": 2}))
    assert "2 draw(s)" in fragments["summary"]

    fragments = dict(session.apply({"reset": 1}))
    assert list(fragments) == ["summary"]
    assert "0 draw(s)" in fragments["summary"]
    print("✓ Events lesson works")


def test_conditional_lesson():
    """Test the conditional panels and the scaled outputs."""
    session, fragments = start("conditional")
    assert {"plot_type", "breaks", "advanced", "scale", "unit"} <= set(session.input)
    assert "<uk-chart" in fragments["hist"]
    assert "scaled by 1.0" in fragments["description"]

    fragments = dict(session.apply({"scale": "2", "unit": "mi"}))
    assert "Distances (mi)" in fragments["hist"]
    assert "<th>mi</th>" in fragments["values"]
    assert "scaled by 2.0" in fragments["description"]
    print("✓ Conditional panels lesson works")


def test_sample():
    """Test the reproducible sampler."""
    assert sample("norm", 5, seed=1) == sample("norm", 5, seed=1)
    assert len(sample("unif", 10)) == 10
    assert all(v >= 0 for v in sample("exp", 20))
    assert sample("norm", 0) == []
    with pytest.raises(ValueError):
        sample("cauchy", 3)
    assert len(MTCARS) == 16
    print("✓ sample works")
