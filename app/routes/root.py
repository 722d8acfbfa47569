"""Root route."""

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from baseline_checker import __version__

router = APIRouter()

_ROOT_HTML = f"""
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>Baseline Compatibility Checker API</title>
  <style>
    body {{ font-family: system-ui, sans-serif; max-width: 42rem; margin: 2rem auto; padding: 0 1rem; }}
    h1 {{ font-size: 1.25rem; font-weight: 600; }}
    ul {{ list-style: none; padding: 0; }}
    li {{ margin: 0.5rem 0; }}
    a {{ color: #2563eb; text-decoration: none; }}
    .meta {{ color: #64748b; font-size: 0.875rem; margin-top: 1.5rem; }}
  </style>
</head>
<body>
  <h1>Baseline Compatibility Checker API</h1>
  <p>Endpoints:</p>
  <ul>
    <li><a href="/docs">/docs</a>: Swagger UI</li>
    <li><a href="/health">/health</a>: Liveness</li>
    <li>POST /check: one file (<code>{{"code": "...", "filename": "app.component.ts"}}</code>)</li>
    <li>POST /analyze: a project folder (<code>{{"project_root": "/abs/path"}}</code>)</li>
    <li><a href="/registry/validate">/registry/validate</a>: registry vs. dataset</li>
  </ul>
  <p class="meta">Version {__version__}</p>
</body>
</html>
"""


@router.get("/", response_class=HTMLResponse)
def root() -> str:
    """Root: welcome page with clickable links."""
    return _ROOT_HTML
