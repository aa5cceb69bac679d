"""Widgets created by the server at run time."""

from starlesson import render, req, ui

TITLE = "Dynamic UI"
SUMMARY = [
    "`render.ui` returns markup instead of a value. Widgets inside that markup "
    "become inputs as soon as they are rendered, and other outputs can read "
    "them like any other input.",
    "Until the generated widget exists, `req()` keeps the dependent output "
    "empty instead of raising an error.",
]

WIDGETS = {
    "slider": "Slider",
    "text": "Text box",
    "numeric": "Number box",
    "checkbox": "Checkbox",
}

app_ui = ui.sidebar_layout(
    [
        ui.input_radio_buttons("kind", "Kind of widget", WIDGETS),
        ui.output_ui("control"),
    ],
    [ui.card(ui.output_text_verbatim("dynamic_value"), header="Value of the generated widget")],
)


def server(input, output, session):
    @render.ui
    def control():
        kind = input.kind()
        if kind == "slider":
            return ui.input_slider("dynamic_slider", "Generated slider", min=0, max=10, value=5)
        if kind == "text":
            return ui.input_text("dynamic_text", "Generated text", "starlesson")
        if kind == "numeric":
            return ui.input_numeric("dynamic_numeric", "Generated number", 12)
        return ui.input_checkbox("dynamic_checkbox", "Generated checkbox", True)

    @render.code
    def dynamic_value():
        input_id = f"dynamic_{input.kind()}"
        req(input_id in input)
        return f"{input_id} = {input[input_id]()!r}"
