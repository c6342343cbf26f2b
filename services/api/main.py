from __future__ import annotations

import logging
import os
import uuid
from pathlib import Path
from typing import Literal

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field

from quote_calculator.csv_importer import ModuleCsvImporter
from quote_calculator.exporters import build_calculation_report, export_json, export_markdown, export_text
from quote_calculator.logging_config import set_trace_id, setup_logging
from quote_calculator.models.project import ProjectModule
from quote_calculator.models.rates import RateEntry
from quote_calculator.quote_assembler import QuoteAssembler
from quote_calculator.rate_repository import LocalRateRepository
from quote_calculator.time_to_market import calculate_time_to_market
from quote_calculator.validation import ValidationError, validate_rate_entries


class CalculateQuoteRequest(BaseModel):
    modules: list[ProjectModule]
    rates: list[RateEntry] | None = Field(default=None, description="Defaults to the stored rate card")
    discount_percentage: float = Field(default=0, ge=0, le=100, alias="discountPercentage")
    overlap_days: float | None = Field(default=None, ge=0, alias="overlapDays", description="null = fully parallel")

    class Config:
        populate_by_name = True


class ImportModulesRequest(BaseModel):
    csv: str
    strict: bool = False


class ExportRequest(CalculateQuoteRequest):
    format: Literal["text", "markdown", "json", "report"] = "markdown"
    currency: Literal["$", "€"] | None = None


# Environment configuration
ENVIRONMENT = os.getenv("ENVIRONMENT", "dev")
PROJECT_ID = os.getenv("PROJECT_ID")
RATES_STORAGE_PATH = os.getenv("RATES_STORAGE_PATH", "data/rates")
QUOTE_CURRENCY = os.getenv("QUOTE_CURRENCY", "$")

# Setup logging
setup_logging(environment=ENVIRONMENT, project_id=PROJECT_ID)
logger = logging.getLogger(__name__)

app = FastAPI(title="Project Quote Calculator API", version="0.1.0")

rate_repository = LocalRateRepository(base_path=Path(RATES_STORAGE_PATH).resolve())
quote_assembler = QuoteAssembler()


@app.middleware("http")
async def assign_trace_id(request: Request, call_next):
    set_trace_id(request.headers.get("X-Cloud-Trace-Context") or str(uuid.uuid4()))
    return await call_next(request)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    logger.warning("Rejected request", extra={"path": request.url.path, "error": str(exc)})
    return JSONResponse(status_code=422, content={"detail": str(exc)})


def _assemble(request: CalculateQuoteRequest):
    rates = request.rates if request.rates is not None else rate_repository.load()
    return quote_assembler.assemble(
        request.modules,
        rates=rates,
        discount_percentage=request.discount_percentage,
        overlap_days=request.overlap_days,
    )


@app.post("/v1/quotes:calculate")
async def calculate(request: CalculateQuoteRequest) -> JSONResponse:
    bundle = _assemble(request)
    payload = bundle.model_dump()
    time_to_market = calculate_time_to_market(bundle.quote.total_days)
    payload["timeToMarket"] = {
        "descriptiveDate": time_to_market.descriptive_date,
        "months": time_to_market.months,
        "startNextWeek": time_to_market.start_next_week,
    }
    return JSONResponse(payload)


@app.post("/v1/quotes:export")
async def export(request: ExportRequest):
    bundle = _assemble(request)
    currency = request.currency or QUOTE_CURRENCY
    if request.format == "text":
        return PlainTextResponse(export_text(bundle, currency=currency))
    if request.format == "markdown":
        return PlainTextResponse(export_markdown(bundle, currency=currency), media_type="text/markdown")
    if request.format == "json":
        return PlainTextResponse(export_json(bundle, currency=currency), media_type="application/json")
    report = build_calculation_report(bundle, currency=currency)
    return JSONResponse(report.model_dump(mode="json", by_alias=True))


@app.post("/v1/modules:import")
async def import_modules(request: ImportModulesRequest) -> JSONResponse:
    importer = ModuleCsvImporter(strict=request.strict)
    result = importer.parse_text(request.csv, rates=rate_repository.load())
    return JSONResponse(
        {
            "modules": [module.model_dump(by_alias=True) for module in result.modules],
            "newRates": [rate.model_dump(by_alias=True, exclude={"discount"}) for rate in result.new_rates],
            "warnings": [str(warning) for warning in result.warnings],
        }
    )


@app.get("/v1/rates")
async def get_rates() -> JSONResponse:
    rates = rate_repository.load()
    return JSONResponse([rate.model_dump(by_alias=True, exclude={"discount"}) for rate in rates])


@app.put("/v1/rates")
async def put_rates(request: Request) -> JSONResponse:
    body = await request.json()
    rates = validate_rate_entries(body)
    roles = [rate.role for rate in rates]
    if len(set(roles)) != len(roles):
        raise HTTPException(status_code=422, detail="Rate card roles must be unique")
    rate_repository.save(rates)
    return JSONResponse([rate.model_dump(by_alias=True, exclude={"discount"}) for rate in rates])


@app.get("/health")
async def healthcheck() -> JSONResponse:
    return JSONResponse({"status": "ok"})
