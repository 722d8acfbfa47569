"""FastAPI app: /health, /check, /analyze, /registry/validate."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from baseline_checker import __version__

from .config import get_host, get_port
from .routes import analyze_router, check_router, health_router, registry_router, root_router
from .startup import configure_logging, validate_config

configure_logging()

app = FastAPI(
    title="Baseline Compatibility Checker API",
    description="Detects web-platform feature usage and grades it against a Baseline target.",
    version=__version__,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(root_router)
app.include_router(health_router)
app.include_router(check_router)
app.include_router(analyze_router)
app.include_router(registry_router)


@app.on_event("startup")
def _validate_config() -> None:
    """Reject malformed configuration before serving requests."""
    validate_config()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=get_host(), port=get_port())
