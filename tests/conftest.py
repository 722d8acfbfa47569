"""Test fixtures and helpers.

This module provides:
- A provider over the bundled dataset and a factory for providers over
  small hand-written datasets (so statuses can be chosen per test)
- Helper factories for evidence records
- A temporary Angular-style project tree for orchestrator and API tests
"""

from pathlib import Path
from typing import Dict, Optional

import pytest

from baseline_checker.baseline_provider import BaselineProvider
from baseline_checker.models import FeatureEvidence, Language, Position, Range

_BASELINE_VALUES = {"widely": "high", "newly": "low", "limited": False}


def make_feature(status: str, year: Optional[int] = None) -> Dict:
    """One dataset entry with the given classification ('widely', 'newly', 'limited')."""
    entry: Dict = {"baseline": _BASELINE_VALUES[status], "support": {"chrome": "100", "firefox": "100"}}
    if year is not None:
        entry["baseline_low_date"] = f"{year}-01-15"
    return {"name": "test feature", "status": entry}


def make_provider(statuses: Dict[str, str], years: Optional[Dict[str, int]] = None) -> BaselineProvider:
    """Provider over an in-memory dataset: feature id -> status name."""
    years = years or {}
    dataset = {fid: make_feature(status, years.get(fid)) for fid, status in statuses.items()}
    return BaselineProvider(dataset=dataset)


def make_evidence(feature_id: str, file: str = "src/app/a.ts", line: int = 1, col: int = 1,
                  lang: Language = Language.SCRIPT, code: str = "x") -> FeatureEvidence:
    return FeatureEvidence(
        file=file,
        lang=lang,
        range=Range(Position(line, col), Position(line, col + len(code))),
        code=code,
        feature_id=feature_id,
    )


@pytest.fixture
def bundled_provider() -> BaselineProvider:
    """Provider over the bundled web-features snapshot."""
    return BaselineProvider()


def write(root: Path, relative: str, text: str) -> Path:
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def angular_project(tmp_path: Path) -> Path:
    """A small Angular-style project with one file per analyzer plus excluded files."""
    write(tmp_path, "src/app/app.component.ts", (
        "export class AppComponent {\n"
        "  init() {\n"
        "    requestIdleCallback(() => {});\n"
        "    new IntersectionObserver((e) => {});\n"
        "  }\n"
        "}\n"
    ))
    write(tmp_path, "src/app/app.component.html", '<div popover="auto">x</div>\n')
    write(tmp_path, "src/app/app.component.css", ".title { text-wrap: balance; }\n")
    write(tmp_path, "src/app/app.component.spec.ts", "requestIdleCallback(() => {});\n")
    write(tmp_path, "src/node_modules/lib/index.ts", "requestIdleCallback(() => {});\n")
    write(tmp_path, "src/app/readme.md", "requestIdleCallback\n")
    return tmp_path
