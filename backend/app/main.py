import logging
import os

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.models import SessionReadResponse
from routes import session_ws

# Load .env from backend dir so CORS and server settings can live there
load_dotenv(os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env"))
logger = logging.getLogger(__name__)


def _cors_origins() -> list[str]:
    raw = os.environ.get("CORS_ALLOW_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()] or ["*"]


app = FastAPI(title="RPS Session API", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(session_ws.router)
app.include_router(session_ws.router, prefix="/api")


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/api/session", response_model=SessionReadResponse, response_model_by_alias=True)
async def read_session() -> SessionReadResponse:
    """
    Read-only view of the shared session, same shape as the websocket state payload.

    Runs on the event loop so the snapshot never interleaves with a join, input or leave.
    """
    registry = session_ws.session_registry
    snapshot = registry.snapshot()
    return SessionReadResponse(
        slots=snapshot["slots"],
        result_message=snapshot["resultMessage"],
        winner=snapshot["winner"],
        capacity=registry.capacity,
        open_slots=registry.capacity - len(snapshot["slots"]),
    )


def run() -> None:
    logging.basicConfig(
        level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", "4400"))
    logger.info("Listening on http://%s:%d", host, port)
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run()
