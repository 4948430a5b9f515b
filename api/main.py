from __future__ import annotations

import logging
import math
from typing import List, Optional

import numpy as np
import pandas as pd
from fastapi import FastAPI, File, Form, Query, UploadFile
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError

from analytics.aggregate import aggregate
from analytics.charts import spectrum_chart, to_vega_spec
from analytics.errors import SourceUnreadable, UploadTooLarge
from analytics.filters import normalize_filters
from analytics.metrics_debug import compute_debug
from analytics.metrics_overview import compute_overview, department_frame, monthly_frame
from analytics.spectrum import compute_spectrum
from api.config import get_settings
from api.schemas import AggregationResponse, DashboardFiltersModel, SpectrumPointModel


settings = get_settings()
app = FastAPI(title="Request Analytics API", version="0.1.0")
logger = logging.getLogger(__name__)
logging.getLogger("analytics").setLevel(settings.log_level)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

EXPORT_TABLES = {"monthly": monthly_frame, "departments": department_frame}


def _json(data: object) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
                np.ndarray: lambda arr: arr.tolist(),
                pd.Timestamp: lambda ts: ts.isoformat(),
            },
        )
    )


def _error(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": str(exc), "type": type(exc).__name__})


def _read_upload(file: UploadFile) -> bytes:
    try:
        data = file.file.read(settings.max_upload_bytes + 1)
    finally:
        file.file.close()
    if len(data) > settings.max_upload_bytes:
        raise UploadTooLarge(f"upload exceeds {settings.max_upload_bytes} bytes")
    return data


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/aggregate", response_model=AggregationResponse)
def aggregate_workbook(file: UploadFile = File(...)):
    try:
        result = aggregate(_read_upload(file))
        return _json(result.to_dict())
    except UploadTooLarge as exc:
        return _error(413, exc)
    except SourceUnreadable as exc:
        logger.warning("aggregate rejected %s: %s", file.filename, exc)
        return _error(422, exc)
    except Exception as exc:
        logger.exception("aggregate failed")
        return _error(500, exc)


@app.post("/overview")
def overview(file: UploadFile = File(...), filters: str = Form(default="{}")):
    try:
        model = DashboardFiltersModel.model_validate_json(filters or "{}")
        result = aggregate(_read_upload(file))
        f = normalize_filters(model.model_dump(), available_months=result.months)
        return _json(compute_overview(f, result))
    except ValidationError as exc:
        return JSONResponse(status_code=422, content={"error": jsonable_encoder(exc.errors()), "type": "ValidationError"})
    except UploadTooLarge as exc:
        return _error(413, exc)
    except SourceUnreadable as exc:
        logger.warning("overview rejected %s: %s", file.filename, exc)
        return _error(422, exc)
    except Exception as exc:
        logger.exception("overview failed")
        return _error(500, exc)


@app.post("/debug")
def debug(file: UploadFile = File(...)):
    try:
        return _json(compute_debug(aggregate(_read_upload(file))))
    except UploadTooLarge as exc:
        return _error(413, exc)
    except SourceUnreadable as exc:
        return _error(422, exc)
    except Exception as exc:
        logger.exception("debug failed")
        return _error(500, exc)


@app.post("/export/{table}")
def export_table(table: str, file: UploadFile = File(...)):
    to_frame = EXPORT_TABLES.get(table)
    if to_frame is None:
        file.file.close()
        return JSONResponse(status_code=404, content={"error": f"unknown table '{table}'", "type": "NotFound"})
    try:
        result = aggregate(_read_upload(file))
    except UploadTooLarge as exc:
        return _error(413, exc)
    except SourceUnreadable as exc:
        return _error(422, exc)
    except Exception as exc:
        logger.exception("export %s failed", table)
        return _error(500, exc)

    csv_bytes = to_frame(result).to_csv(index=False).encode("utf-8")
    filename = f"{table}.csv"
    return Response(content=csv_bytes, media_type="text/csv", headers={"Content-Disposition": f"attachment; filename={filename}"})


def _spectrum_size(n: Optional[int]) -> int:
    size = settings.spectrum_default_size if n is None else n
    if size > settings.spectrum_max_size:
        raise ValueError(f"n must be <= {settings.spectrum_max_size}")
    return size


@app.get("/spectrum", response_model=List[SpectrumPointModel])
def spectrum(n: Optional[int] = Query(default=None, ge=0)):
    try:
        points = compute_spectrum(_spectrum_size(n))
    except ValueError as exc:
        return _error(422, exc)
    return _json([p.to_dict() for p in points])


@app.get("/spectrum/chart")
def spectrum_chart_spec(n: Optional[int] = Query(default=None, ge=0)):
    try:
        points = compute_spectrum(_spectrum_size(n))
    except ValueError as exc:
        return _error(422, exc)
    frame = pd.DataFrame([p.to_dict() for p in points], columns=["x", "y"])
    return _json(to_vega_spec(spectrum_chart(frame)))
