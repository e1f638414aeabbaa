"""FastAPI application - serves the beat detection API."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fluxbeat.api.detect import router as detect_router
from fluxbeat.api.websocket import router as ws_router

app = FastAPI(title="Fluxbeat", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(detect_router, prefix="/api")
app.include_router(ws_router, prefix="/api")


@app.get("/api/health")
async def health():
    return {"status": "ok"}


def run():
    import uvicorn
    from fluxbeat.config import settings
    uvicorn.run(
        "fluxbeat.main:app",
        host=settings.host,
        port=settings.port,
    )
