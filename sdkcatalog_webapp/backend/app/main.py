"""FastAPI app: parse SDK manager reports into a package catalog for the frontend."""

from __future__ import annotations

from typing import Literal

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from sdkcatalog import filter_packages, parse_report, sort_packages, summarize
from sdkcatalog.core.parser import InstallState

app = FastAPI(
    title="sdkcatalog API",
    description="Android SDK package catalog backend",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class ReportBody(BaseModel):
    """Captured output of 'sdkmanager --list'."""

    report: str


@app.post("/api/catalog")
def post_catalog(
    body: ReportBody,
    order: Literal["asc", "desc"] | None = Query(None),
    state: list[InstallState] | None = Query(None),
) -> dict:
    """Parse a report. Optional order (asc/desc) and repeatable state filters."""
    catalog = parse_report(body.report)
    packages = filter_packages(catalog, states=state) if state else catalog
    if order:
        packages = sort_packages(packages, order)
    return {
        "packages": [p.to_dict() for p in packages],
        "summary": summarize(catalog),
    }


@app.post("/api/catalog/updates")
def post_updates(body: ReportBody) -> dict:
    """Return only installed packages with a newer version available."""
    catalog = parse_report(body.report)
    updates = filter_packages(catalog, states=[InstallState.UPDATEABLE])
    return {"packages": [p.to_dict() for p in updates]}
