"""FastAPI application exposing the defect map editor over HTTP."""
from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, Response

from ..controller import EditorController
from ..errors import DefectMapError


def create_controller() -> EditorController:
    return EditorController()


controller = create_controller()
app = FastAPI(title="Defect Map Server")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _defect_list() -> Dict[str, Any]:
    return {"defects": controller.defect_rows()}


@app.get("/", response_class=HTMLResponse)
def index() -> str:
    summary = controller.summary()
    w, h = summary["canvas"]["rounded"]
    return (
        "<!doctype html><html><head><title>Defect Map</title></head><body>"
        f"<p>Canvas: {w} × {h}, defects: {summary['defect_count']}</p>"
        f'<div style="max-width:960px">{controller.svg()}</div>'
        "</body></html>"
    )


@app.get("/api/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/api/status")
def status() -> Dict[str, Any]:
    return controller.summary()


@app.get("/api/scene")
def get_scene() -> Dict[str, Any]:
    try:
        return controller.scene().to_dict()
    except DefectMapError as exc:  # pragma: no cover - state is validated on write
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@app.get("/api/preview.svg")
def get_preview() -> Response:
    return Response(content=controller.svg(), media_type="image/svg+xml")


def _reject_nulls(payload: Dict[str, Any], keys) -> None:
    for key in keys:
        if key in payload and payload[key] is None:
            raise HTTPException(status_code=400, detail=f"{key} must not be null")


@app.put("/api/geometry")
def put_geometry(payload: Dict[str, Any]) -> Dict[str, Any]:
    _reject_nulls(payload, ("width", "height", "margin_percent"))
    try:
        controller.set_geometry(
            width=payload.get("width"),
            height=payload.get("height"),
            margin_percent=payload.get("margin_percent"),
        )
    except DefectMapError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return controller.summary()


@app.put("/api/style")
def put_style(payload: Dict[str, Any]) -> Dict[str, Any]:
    _reject_nulls(payload, ("size", "color"))
    try:
        controller.set_style(size=payload.get("size"), color=payload.get("color"))
    except DefectMapError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return controller.summary()


@app.get("/api/defects")
def list_defects() -> Dict[str, Any]:
    return _defect_list()


@app.post("/api/defects")
def post_defect(payload: Dict[str, Any]) -> Dict[str, Any]:
    defect = controller.add_defect(payload.get("x"), payload.get("y"))
    if defect is None:
        raise HTTPException(status_code=400, detail="x and y must be finite numbers")
    return {"ok": True, "defect": defect.to_dict(), **_defect_list()}


@app.delete("/api/defects")
def clear_defects() -> Dict[str, Any]:
    controller.reset_defects()
    return {"ok": True, **_defect_list()}


@app.delete("/api/defects/{defect_id}")
def delete_defect(defect_id: str) -> Dict[str, Any]:
    removed = controller.remove_defect(defect_id)
    return {"ok": True, "removed": removed, **_defect_list()}


@app.post("/api/session/reset")
def reset_session() -> Dict[str, Any]:
    controller.restore_defaults()
    return controller.summary()


__all__ = ["app", "controller", "create_controller"]
