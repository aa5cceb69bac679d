"""
Test input widgets, output placeholders, layout helpers and charts.
"""

import json

import pytest
from fasthtml.common import Div, to_xml

from starlesson import ui
from starlesson.ui.widgets import INPUT_ATTR


def test_widget_markup():
    """Test that a widget carries its signal, binding and update action."""
    html = to_xml(ui.input_slider("n", "Sample size", min=1, max=100, value=30))
    assert 'id="n-widget"' in html
    assert 'data-bind="n"' in html
    assert "data-on-input__debounce.250ms" in html
    assert "@post(&#x27;_update&#x27;)" in html or "@post('_update')" in html
    assert INPUT_ATTR in html
    assert 'type="range"' in html
    print("✓ Widget markup works")


def test_collect_defaults():
    """Test discovering every input default in a nested tree."""
    tree = ui.sidebar_layout(
        [
            ui.input_numeric("obs", "Observations", 10),
            ui.input_text("caption", "Caption", "Summary"),
            ui.input_text_area("notes", "Notes"),
            ui.input_checkbox("show", "Show"),
            ui.input_radio_buttons("dist", "Distribution", {"norm": "Normal", "unif": "Uniform"}),
            ui.input_select("cols", "Columns", ["a", "b", "c"], selected=["b"], multiple=True),
            ui.input_select("one", "One", ["x", "y"]),
            ui.input_date("day", "Day", "2024-02-29"),
            ui.panel_conditional("$show", ui.input_slider("bins", "Bins", min=1, max=50, value=20)),
        ],
        [ui.output_text("out"), ui.input_action_button("go", "Go")],
    )
    assert ui.collect_defaults(tree) == {
        "obs": 10,
        "caption": "Summary",
        "notes": "",
        "show": False,
        "dist": "norm",
        "cols": ["b"],
        "one": "x",
        "day": "2024-02-29",
        "bins": 20,
        "go": 0,
    }
    print("✓ collect_defaults works")


def test_collect_inputs_kinds():
    """Test that action buttons and uploads are tagged with their kind."""
    specs = ui.collect_inputs([ui.input_action_button("go", "Go"), ui.input_file("upload", "File")])
    assert specs["go"].kind == "action"
    assert specs["upload"].kind == "file"
    assert specs["upload"].default is None, "Nothing uploaded yet"
    print("✓ Input kinds work")


def test_file_widget_signals():
    """Test the three Datastar signals of a file input."""
    widget = ui.input_file("upload", "CSV", accept=".csv")
    signals = json.loads(widget.attrs["data-signals"])
    assert signals == {"upload": [], "uploadNames": [], "uploadMimes": []}
    print("✓ File widget signals work")


def test_invalid_ids():
    """Test that ids unusable as Datastar signals are rejected."""
    for bad in ("", "1st", "my-input", "_private", ui.SESSION_SIGNAL):
        with pytest.raises(ValueError):
            ui.input_text(bad, "Label")
    with pytest.raises(ValueError):
        ui.input_slider("n", "N", min=1, max=10, value=11)
    with pytest.raises(ValueError):
        ui.input_radio_buttons("r", "R", [])
    print("✓ Invalid ids rejected")


def test_output_placeholders():
    """Test that placeholders are empty elements with the output id."""
    for factory in (ui.output_text, ui.output_table, ui.output_plot, ui.output_ui):
        html = to_xml(factory("result"))
        assert 'id="result"' in html
        assert "starlesson-output" in html
    assert to_xml(ui.output_text_verbatim("code")).startswith("<pre")
    print("✓ Output placeholders work")


def test_panel_conditional():
    """Test that a conditional panel is driven by data-show."""
    panel = ui.panel_conditional(f"{ui.signal('n')} > 50", Div("many"))
    assert ui.signal("n") == "$n"
    html = to_xml(panel)
    assert 'data-show="$n &gt; 50"' in html or 'data-show="$n > 50"' in html
    assert "many" in html
    print("✓ panel_conditional works")


def test_session_signals():
    """Test the hidden element seeding the session id."""
    widget = ui.session_signals("abc123", {"extra": 1})
    assert json.loads(widget.attrs["data-signals"]) == {"extra": 1, ui.SESSION_SIGNAL: "abc123"}
    print("✓ session_signals works")


def test_histogram():
    """Test equal-width binning."""
    chart = ui.histogram([0, 1, 2, 3, 4, 5, 6, 7, 8, 10], bins=5, title="t")
    assert chart.values == [2, 2, 2, 2, 2]
    assert chart.edges == [0, 2, 4, 6, 8, 10]
    assert chart.labels[0] == "0"
    assert chart.max_value == 2
    assert sum(ui.histogram([3, 3, 3], bins=4).values) == 3, "A constant sample still lands in a bin"
    assert ui.histogram([], bins=3).values == []
    with pytest.raises(ValueError):
        ui.histogram([1, 2], bins=0)
    print("✓ histogram works")


def test_bar_chart_validation():
    """Test that labels and values must pair up."""
    with pytest.raises(ValueError):
        ui.BarChart(labels=["a"], values=[1, 2])
    print("✓ BarChart validation works")


def test_bar_chart():
    """Test the ApexCharts rendering of a chart."""
    chart = ui.BarChart(labels=["a", "b"], values=[1, 3], title="Counts", y_label="n")
    opts = chart.apex_options()
    assert opts["chart"]["type"] == "bar"
    assert opts["series"] == [{"name": "n", "data": [1, 3]}]
    assert opts["xaxis"]["categories"] == ["a", "b"]
    assert opts["title"]["text"] == "Counts"

    html = to_xml(ui.bar_chart(chart))
    assert "<uk-chart" in html
    assert "starlesson-chart" in html
    assert json.dumps(opts) in html
    print("✓ bar_chart works")
