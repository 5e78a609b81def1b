"""NiceGUI application for placing defects on an inspection rectangle."""

from __future__ import annotations

from typing import Dict, Optional

from nicegui import app, ui

from .controller import EditorController
from .errors import DefectMapError

# ---------------------------------------------------------------------------
# Global state shared between UI and backend
# ---------------------------------------------------------------------------
controller = EditorController()
settings = controller.settings

# UI element references (populated in create_ui)
width_input: Optional[ui.number] = None  # type: ignore[assignment]
height_input: Optional[ui.number] = None  # type: ignore[assignment]
margin_label: Optional[ui.label] = None  # type: ignore[assignment]
dot_size_label: Optional[ui.label] = None  # type: ignore[assignment]
defect_container: Optional[ui.column] = None  # type: ignore[assignment]
preview_html: Optional[ui.html] = None  # type: ignore[assignment]
preview_caption: Optional[ui.label] = None  # type: ignore[assignment]
canvas_size_label: Optional[ui.label] = None  # type: ignore[assignment]
status_area: Optional[ui.textarea] = None  # type: ignore[assignment]


# ---------------------------------------------------------------------------
# Helper functions
# ---------------------------------------------------------------------------

def _sync_status_to_ui() -> None:
    if status_area is not None:
        status_area.value = "\n".join(controller.status_messages())


def _render_preview() -> None:
    if preview_html is not None:
        preview_html.content = controller.svg(css_class="w-full max-h-[420px]")
    summary = controller.summary()
    percent = summary["margin_percent"]
    if margin_label is not None:
        margin_label.text = f"{percent:g}%"
    if dot_size_label is not None:
        dot_size_label.text = f"{summary['dot']['size']:g}px"
    if preview_caption is not None:
        preview_caption.text = f"Canvas is the rectangle expanded by {percent:g}%."
    if canvas_size_label is not None:
        w, h = summary["canvas"]["rounded"]
        canvas_size_label.text = f"Canvas: {w} × {h}"


def _update_defect_list() -> None:
    if defect_container is None:
        return
    defect_container.clear()
    rows = controller.defect_rows()
    if not rows:
        with defect_container:
            ui.label("No defects yet.").classes("text-sm text-gray-500")
        return
    for row in rows:
        with defect_container:
            with ui.row().classes(
                "w-full items-center justify-between rounded-md border border-slate-100 bg-slate-50 px-3 py-2"
            ):
                ui.label(row["label"]).classes("text-sm")
                ui.button("Remove", on_click=lambda _, d=row["id"]: _remove_defect(d)).props("outline dense")


def _refresh() -> None:
    _update_defect_list()
    _render_preview()


def _set_rectangle(width, height) -> None:
    try:
        controller.set_rectangle(width, height)
    except DefectMapError as exc:
        controller.append_status(f"Rectangle unchanged: {exc}")
        return
    _render_preview()


def _set_margin(value) -> None:
    try:
        controller.set_margin_percent(value)
    except DefectMapError as exc:
        controller.append_status(f"Margin unchanged: {exc}")
        return
    _render_preview()


def _set_dot_size(value) -> None:
    try:
        controller.set_dot_size(value)
    except DefectMapError as exc:
        controller.append_status(f"Dot size unchanged: {exc}")
        return
    _render_preview()


def _set_dot_color(value) -> None:
    try:
        controller.set_dot_color(value)
    except DefectMapError as exc:
        controller.append_status(f"Dot colour unchanged: {exc}")
        return
    _render_preview()


def _add_defect() -> None:
    if controller.add_pending() is None:
        ui.notify("Enter numeric X and Y coordinates.", type="warning")
        return
    _refresh()


def _remove_defect(defect_id: str) -> None:
    controller.remove_defect(defect_id)
    _refresh()


def _reset_defects() -> None:
    controller.reset_defects()
    _refresh()


# ---------------------------------------------------------------------------
# UI construction
# ---------------------------------------------------------------------------

def create_ui() -> None:
    global width_input, height_input, margin_label, dot_size_label
    global defect_container
    global preview_html, preview_caption, canvas_size_label, status_area

    ui.page_title("Defect Map")
    with ui.column().classes("w-full max-w-6xl mx-auto gap-6"):
        ui.label("Defect Map").classes("text-2xl font-semibold")
        ui.label(
            "The origin is the centre of the rectangle. Enter defect coordinates to place dots on the canvas."
        ).classes("text-sm text-gray-600")

        with ui.row().classes("w-full gap-6 no-wrap"):
            # Rectangle parameters
            with ui.card().classes("w-[340px] gap-3"):
                ui.label("Rectangle").classes("text-lg font-semibold")
                ui.label("Units are up to you.").classes("text-xs text-gray-500")
                width_input = ui.number(
                    label="Width", value=controller.rectangle.width, min=1, step=1,
                    on_change=lambda e: _set_rectangle(e.value, height_input.value if height_input else controller.rectangle.height),
                )
                height_input = ui.number(
                    label="Height", value=controller.rectangle.height, min=1, step=1,
                    on_change=lambda e: _set_rectangle(width_input.value if width_input else controller.rectangle.width, e.value),
                )
                with ui.row().classes("w-full items-center justify-between"):
                    ui.label("Canvas margin")
                    margin_label = ui.label().classes("text-sm text-gray-600")
                lo, hi = settings.margin_range
                ui.slider(min=lo, max=hi, step=1, value=controller.margin_percent,
                          on_change=lambda e: _set_margin(e.value))
                with ui.row().classes("w-full items-center justify-between"):
                    ui.label("Dot size")
                    dot_size_label = ui.label().classes("text-sm text-gray-600")
                lo, hi = settings.dot_size_range
                ui.slider(min=lo, max=hi, step=1, value=controller.dot_style.size,
                          on_change=lambda e: _set_dot_size(e.value))
                ui.color_input(label="Dot colour", value=controller.dot_style.color,
                               on_change=lambda e: _set_dot_color(e.value))

            # Defect list
            with ui.card().classes("flex-grow gap-3"):
                with ui.row().classes("w-full items-center justify-between"):
                    with ui.column().classes("gap-0"):
                        ui.label("Defects").classes("text-lg font-semibold")
                        ui.label("Enter coordinates and add as many defects as needed.").classes(
                            "text-xs text-gray-500"
                        )
                    ui.button("Clear defects", on_click=_reset_defects).props("outline dense")
                with ui.row().classes("w-full items-end gap-3"):
                    ui.input(
                        label="X", value=controller.pending_x,
                        on_change=lambda e: controller.set_pending(x=e.value),
                    )
                    ui.input(
                        label="Y", value=controller.pending_y,
                        on_change=lambda e: controller.set_pending(y=e.value),
                    )
                    ui.button("Add defect", on_click=_add_defect)
                defect_container = ui.column().classes("w-full gap-2")

        # Preview
        with ui.card().classes("w-full"):
            with ui.row().classes("w-full items-center justify-between"):
                with ui.column().classes("gap-0"):
                    ui.label("Preview").classes("text-lg font-semibold")
                    preview_caption = ui.label().classes("text-xs text-gray-500")
                canvas_size_label = ui.label().classes("text-xs text-gray-500")
            preview_html = ui.html("", sanitize=False).classes(
                "w-full flex justify-center rounded-md border border-dashed border-slate-200 bg-white p-4"
            )

        # Status log
        with ui.card().classes("w-full"):
            ui.label("Status log").classes("text-lg font-semibold")
            status_area = ui.textarea(value="").classes("w-full")
            status_area.props("readonly")

    ui.timer(0.5, _sync_status_to_ui)
    _refresh()


@app.get("/api/status")
def api_status() -> Dict:
    return controller.summary()


def run(**kwargs) -> None:
    ui.run(**kwargs)


@ui.page("/")
def index() -> None:
    # each page load starts a fresh session; the shared id counter keeps ids unique
    controller.restore_defaults()
    create_ui()
