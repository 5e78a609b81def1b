"""
Tests for the editor controller that backs the UI and the HTTP API.

Covers:
- Session defaults and seed defects
- Geometry / style commands validate before committing
- Reject-on-submit for pending coordinate text
- Display rows, summary and status log
"""
import pytest

from defectmap.config import EditorSettings
from defectmap.controller import EditorController
from defectmap.errors import InvalidGeometry, InvalidStyle


@pytest.fixture
def controller():
    return EditorController()


class TestDefaults:

    def test_default_state(self, controller):
        summary = controller.summary()
        assert summary["rectangle"] == {"width": 200, "height": 120}
        assert summary["margin_percent"] == 20
        assert summary["canvas"]["rounded"] == [240, 144]
        assert summary["dot"] == {"size": 6, "color": "#ef4444"}
        assert summary["defect_count"] == 2

    def test_seed_defects(self, controller):
        assert [(d.x, d.y) for d in controller.defects] == [(-30, 20), (40, -10)]
        assert [d.id for d in controller.defects] == ["d1", "d2"]

    def test_pending_defaults(self, controller):
        assert (controller.pending_x, controller.pending_y) == ("0", "0")

    def test_restore_defaults_starts_a_new_session(self, controller):
        controller.reset_defects()
        controller.set_rectangle(10, 10)
        controller.restore_defaults()
        assert controller.summary()["canvas"]["rounded"] == [240, 144]
        assert len(controller.defects) == 2

    def test_custom_settings(self):
        settings = EditorSettings(rect_width=50, rect_height=50, margin_percent=0, seed_defects=[])
        controller = EditorController(settings)
        assert controller.summary()["canvas"]["rounded"] == [50, 50]
        assert controller.defect_rows() == []


class TestGeometryCommands:

    def test_set_rectangle(self, controller):
        controller.set_rectangle("300", 100)
        canvas = controller.canvas()
        assert canvas.width == 300 * 1.2
        assert canvas.height == 100 * 1.2

    def test_set_margin(self, controller):
        controller.set_margin_percent(50)
        assert controller.canvas().width == 200 * 1.5

    @pytest.mark.parametrize("width,height", [(0, 10), (10, -3), (None, 10), ("abc", 10), (float("nan"), 1)])
    def test_bad_rectangle_keeps_previous(self, controller, width, height):
        with pytest.raises(InvalidGeometry):
            controller.set_rectangle(width, height)
        assert (controller.rectangle.width, controller.rectangle.height) == (200, 120)

    def test_negative_margin_keeps_previous(self, controller):
        with pytest.raises(InvalidGeometry):
            controller.set_margin_percent(-5)
        assert controller.margin_percent == 20

    def test_transform_tracks_geometry(self, controller):
        controller.set_margin_percent(0)
        assert controller.transform().view_box == (-100, -60, 200, 120)


class TestStyleCommands:

    def test_dot_size_is_clamped(self, controller):
        assert controller.set_dot_size(50) == 20
        assert controller.set_dot_size(0.5) == 2
        assert controller.set_dot_size("8") == 8

    @pytest.mark.parametrize("size", [0, -1, "big", None, float("inf")])
    def test_bad_dot_size(self, controller, size):
        with pytest.raises(InvalidStyle):
            controller.set_dot_size(size)
        assert controller.dot_style.size == 6

    def test_dot_color(self, controller):
        assert controller.set_dot_color("#00AAFF") == "#00aaff"
        assert all(c.fill == "#00aaff" for c in controller.scene().circles)

    @pytest.mark.parametrize("color", ["red", "#12345", "", None, '#fff" onload="x'])
    def test_bad_dot_color(self, controller, color):
        with pytest.raises(InvalidStyle):
            controller.set_dot_color(color)
        assert controller.dot_style.color == "#ef4444"


class TestDefectCommands:

    def test_add_pending(self, controller):
        controller.set_pending(x="12.5", y="-3")
        defect = controller.add_pending()
        assert (defect.x, defect.y) == (12.5, -3)
        assert defect.id == "d3"

    def test_add_pending_rejects_bad_text(self, controller):
        controller.set_pending(x="", y="4")
        assert controller.add_pending() is None
        controller.set_pending(x="1", y="four")
        assert controller.add_pending() is None
        assert len(controller.defects) == 2
        assert "Defect not added" in controller.status_messages()[-1]

    def test_remove_and_idempotent_remove(self, controller):
        assert controller.remove_defect("d1") is True
        assert controller.remove_defect("d1") is False
        assert [d.id for d in controller.defects] == ["d2"]

    def test_reset_then_add_uses_fresh_id(self, controller):
        controller.reset_defects()
        assert controller.defect_rows() == []
        assert controller.add_defect(0, 0).id == "d3"

    def test_defect_rows(self, controller):
        rows = controller.defect_rows()
        assert [r["index"] for r in rows] == [1, 2]
        assert rows[0]["label"] == "#1: X: -30, Y: 20"
        assert rows[1]["label"] == "#2: X: 40, Y: -10"

    def test_rows_reindex_after_remove(self, controller):
        controller.remove_defect("d1")
        assert controller.defect_rows()[0]["label"] == "#1: X: 40, Y: -10"


class TestRendering:

    def test_scene_matches_state(self, controller):
        scene = controller.scene()
        assert len(scene.primitives) == 4
        assert [c.defect_id for c in scene.circles] == ["d1", "d2"]

    def test_svg(self, controller):
        svg = controller.svg(css_class="preview")
        assert 'class="preview"' in svg
        assert svg.count("<circle") == 2


class TestStatusLog:

    def test_messages_are_timestamped(self, controller):
        controller.set_margin_percent(30)
        last = controller.status_messages()[-1]
        assert last.startswith("[")
        assert last.endswith("Canvas margin set to 30%")

    def test_history_is_bounded(self):
        controller = EditorController(EditorSettings(status_history=5))
        for i in range(20):
            controller.append_status(f"message {i}")
        messages = controller.status_messages()
        assert len(messages) == 5
        assert messages[-1].endswith("message 19")


class TestSessionReset:

    def test_restore_defaults_never_reuses_ids(self, controller):
        controller.add_defect(1, 1)
        before = {d.id for d in controller.defects}
        controller.restore_defaults()
        after = {d.id for d in controller.defects}
        assert len(after) == 2
        assert not before & after

    def test_restored_seeds_keep_their_coordinates(self, controller):
        controller.restore_defaults()
        assert [(d.x, d.y) for d in controller.defects] == [(-30, 20), (40, -10)]

    def test_stale_id_cannot_remove_a_new_defect(self, controller):
        controller.restore_defaults()
        assert controller.remove_defect("d1") is False
        assert len(controller.defects) == 2


class TestAtomicUpdates:

    def test_geometry_rejects_all_or_nothing(self, controller):
        with pytest.raises(InvalidGeometry):
            controller.set_geometry(width=300, margin_percent=-5)
        assert (controller.rectangle.width, controller.rectangle.height) == (200, 120)
        assert controller.margin_percent == 20

    def test_geometry_partial_update(self, controller):
        canvas = controller.set_geometry(height=60, margin_percent=0)
        assert (canvas.width, canvas.height) == (200, 60)

    def test_style_rejects_all_or_nothing(self, controller):
        with pytest.raises(InvalidStyle):
            controller.set_style(size=10, color="blue")
        assert controller.dot_style.size == 6
        assert controller.dot_style.color == "#ef4444"

    def test_style_accepts_both(self, controller):
        style = controller.set_style(size=9, color="#ABC")
        assert (style.size, style.color) == (9, "#abc")

    @pytest.mark.parametrize("width,height", [(True, 5), (5, False)])
    def test_rectangle_rejects_booleans(self, controller, width, height):
        with pytest.raises(InvalidGeometry):
            controller.set_rectangle(width, height)
        assert (controller.rectangle.width, controller.rectangle.height) == (200, 120)

    def test_margin_and_dot_size_reject_booleans(self, controller):
        with pytest.raises(InvalidGeometry):
            controller.set_margin_percent(True)
        with pytest.raises(InvalidStyle):
            controller.set_dot_size(True)

    def test_add_status_reports_position(self, controller):
        controller.add_defect(1, 2)
        assert "Added defect #3 at X: 1, Y: 2" in controller.status_messages()[-1]
