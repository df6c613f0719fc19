"""FastAPI server exposing the style engine."""

from fastapi import FastAPI, HTTPException, Request

from decor_app.app import StyleEngine
from decor_app.logging_config import CORRELATION_HEADER, configure_logging, correlation_context
from logic.validation import (
    CompatibilityRequest,
    FindMatchesRequest,
    MatchScoreRequest,
    PaletteRequest,
    RoomAnalysisRequest,
)
from models.color_theory import ColorFormatError

configure_logging()

engine = StyleEngine()
app = FastAPI(title="Decor Style Engine", version="0.1.0")


@app.middleware("http")
async def correlation_middleware(request: Request, call_next):
    """Scope each request to one correlation id and echo it back."""

    with correlation_context(request.headers.get(CORRELATION_HEADER)) as correlation_id:
        response = await call_next(request)
    response.headers[CORRELATION_HEADER] = correlation_id
    return response


@app.get("/healthz")
async def healthcheck() -> dict:
    """Lightweight readiness check."""

    return {
        "status": "ok",
        "service": "decor-style-engine",
        "environment": engine.config.environment or "local",
    }


@app.post("/room-style/analyze")
async def analyze_room(request: RoomAnalysisRequest) -> dict:
    """Classify the room made up of the submitted items."""

    summary = engine.analyze_room_style([item.to_raw() for item in request.items])
    return {
        "success": True,
        "room_type": request.room_type or "unknown",
        "analysis": summary.as_dict(),
        "item_count": len(request.items),
    }


@app.get("/room-style/suggestions/{room_type}")
async def room_style_suggestions(room_type: str) -> dict:
    """Return the styles that usually suit ``room_type``."""

    return {
        "success": True,
        "room_type": room_type,
        "suggestions": engine.room_style_suggestions(room_type),
    }


@app.post("/room-style/compatibility")
async def item_compatibility(request: CompatibilityRequest) -> dict:
    """Compare two items by dominant style and color."""

    try:
        result = engine.item_compatibility(request.item1.to_raw(), request.item2.to_raw())
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"success": True, **result}


@app.get("/room-style/palettes/{style}")
async def style_palette(style: str, room_type: str | None = None) -> dict:
    """Expand a style's palette into accent, neutral and secondary colors."""

    palette = engine.style_palette(style, room_type)
    if palette is None:
        raise HTTPException(status_code=404, detail="Style not found")
    return {"success": True, **palette}


@app.post("/matching/find-matches")
async def find_matches(request: FindMatchesRequest) -> dict:
    """Rank candidate items for the selected item."""

    if not request.selected_item.id:
        raise HTTPException(status_code=400, detail="Selected item is required")
    selected = request.selected_item.to_raw()
    try:
        options = request.options.to_options() if request.options else None
        matches = engine.rank_matches(
            selected,
            [candidate.to_raw() for candidate in request.candidates],
            mode=request.mode,
            options=options,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {
        "success": True,
        "selected_item": selected,
        "room_type": engine.room_type_for(selected),
        "matches": [match.to_dict() for match in matches],
        "count": len(matches),
    }


@app.post("/matching/score")
async def match_score(request: MatchScoreRequest) -> dict:
    """Score a single candidate against the selected item."""

    try:
        score = engine.compute_match_score(request.selected_item.to_raw(), request.candidate.to_raw())
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"success": True, "match_score": score.as_dict()}


@app.post("/colors/palette")
async def room_palette(request: PaletteRequest) -> dict:
    """Suggest room colors around a primary color."""

    try:
        palette = engine.get_room_color_palette(request.primary_color, request.room_type)
    except ColorFormatError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"success": True, "primary_color": request.primary_color, "palette": palette.as_dict()}


def get_app() -> FastAPI:
    """Expose the FastAPI instance for ASGI servers."""

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:app", host="0.0.0.0", port=int("8080"), reload=False)
