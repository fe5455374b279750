import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from netdesk.app.api.errors import register_exception_handlers
from netdesk.app.api.routes.ledger import router as ledger_router
from netdesk.app.api.routes.receipts import router as receipts_router


logger = logging.getLogger(__name__)

DEV_ORIGINS = ("http://localhost:5000", "http://127.0.0.1:5000")


def _cors_origins() -> list[str]:
    raw = os.getenv("CORS_ALLOW_ORIGINS")
    if raw is None:
        origins = list(DEV_ORIGINS)
    else:
        origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    if not origins:
        raise RuntimeError("CORS_ALLOW_ORIGINS must not be empty.")
    if not any(origin in origins for origin in DEV_ORIGINS):
        logger.warning("CORS allowlist does not include local dev origins: %s", origins)
    return origins


app = FastAPI(title="NetDesk Finance API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(ledger_router)
app.include_router(receipts_router)


@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}
