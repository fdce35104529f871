import os
import time
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from pydantic import BaseModel

# Utilities
import utils_config
import utils_cv
import utils_ph
from errors import InvalidColor, RenderingUnavailable, UnsupportedFile
from utils_color import hex_to_rgb

INDEX_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "index.html")
NO_COLOR_MESSAGE = "Couldn't detect pH strip color. Try a clearer image."

app = FastAPI(title="pH Strip Analyzer")

# The page is served from here, but keep it usable from a dev server too
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

class AnalyzeRequest(BaseModel):
    image: str # data URL or bare base64, one file
    mime_type: Optional[str] = None
    request_id: Optional[int] = None

class MatchRequest(BaseModel):
    color: str # #rrggbb from the picker
    request_id: Optional[int] = None

@app.on_event("startup")
async def startup_event():
    print(f"pH Strip Analyzer ready: {len(utils_ph.PH_COLOR_MAP)} reference colors, "
          f"{len(utils_ph.PH_EXAMPLES)} examples")

@app.get("/status")
async def get_status():
    return {"ready": True, "palette_size": len(utils_ph.PH_COLOR_MAP)}

@app.get("/reference")
async def get_reference():
    """Palette and examples for the always-visible reference guide."""
    return utils_ph.reference_chart()

@app.post("/analyze")
async def analyze_image(req: AnalyzeRequest):
    started = time.perf_counter()
    try:
        mime, raw = utils_cv.decode_data_url(req.image)
        # Explicit field wins over the data URL header
        mime = (req.mime_type or mime or "").lower() or None
        rgb = utils_cv.sample_image_bytes(raw, mime)
    except UnsupportedFile as e:
        print(f"Rejected upload (request {req.request_id}): {e.reason}")
        raise HTTPException(status_code=415, detail=e.reason)
    except RenderingUnavailable as e:
        print(f"No color detected (request {req.request_id}): {e}")
        return {"detected": False, "request_id": req.request_id, "message": NO_COLOR_MESSAGE}

    result = utils_ph.analyze_color(rgb)
    elapsed = (time.perf_counter() - started) * 1000
    print(f"Analyzed upload (request {req.request_id}): {result.color} -> pH {result.ph} "
          f"({result.description}) in {elapsed:.1f}ms")
    return {"detected": True, "request_id": req.request_id, **result.to_dict()}

@app.post("/match")
async def match_color(req: MatchRequest):
    try:
        rgb = hex_to_rgb(req.color)
    except InvalidColor as e:
        raise HTTPException(status_code=422, detail=str(e))
    result = utils_ph.analyze_color(rgb)
    return {"request_id": req.request_id, **result.to_dict()}

@app.get("/")
async def read_root():
    if os.path.exists(INDEX_PATH):
        with open(INDEX_PATH, "r", encoding="utf-8") as f:
            return HTMLResponse(content=f.read())
    return {"status": "ok", "service": "pH Strip Analyzer", "port": utils_config.PORT}
