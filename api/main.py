"""
RFM Segmentation API
====================

FastAPI endpoints for the RFM customer segmentation.

Usage:
    uvicorn api.main:app --reload

Endpoints:
    POST /segment - Segment customers from an uploaded transaction CSV
    POST /segment/sample - Segment generated sample transactions
    GET /health - Health check
"""

import os
from typing import Optional

import pandas as pd
from fastapi import FastAPI, File, HTTPException, Query, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from pydantic import BaseModel

from rfm_analytics import __version__
from rfm_analytics.common import DataLoader, generate_customer_data
from rfm_analytics.customer_segmentation import RFMSegmenter, SegmentationResult
from rfm_analytics.customer_segmentation.segmenter import dataframe_to_records
from rfm_analytics.customer_segmentation.segment_analysis import ALL_SEGMENTS
from rfm_analytics.customer_segmentation.segment_rules import SEGMENTS

SAMPLE_FILE_NAME = 'sample-customer-data.csv'

# Initialize FastAPI
app = FastAPI(
    title="RFM Segmentation API",
    description="Rule-based RFM customer segmentation",
    version=__version__
)

# Add CORS middleware with environment-based configuration
cors_origins = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:8080").split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class HealthResponse(BaseModel):
    status: str
    version: str


def _parse_reference_date(reference_date: Optional[str]) -> Optional[pd.Timestamp]:
    if reference_date is None:
        return None
    try:
        reference = pd.Timestamp(reference_date)
    except ValueError:
        reference = pd.NaT
    if pd.isna(reference):
        raise HTTPException(
            status_code=400,
            detail=f"Invalid reference_date: {reference_date}"
        )
    return reference


def _check_segment(segment: str) -> None:
    if segment != ALL_SEGMENTS and segment not in SEGMENTS:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown segment '{segment}', expected 'all' or one of {SEGMENTS}"
        )


def _response(result: SegmentationResult, segmenter: RFMSegmenter, segment: str, file_name: str):
    payload = result.to_dict()
    if segment != ALL_SEGMENTS:
        filtered = segmenter.analyzer.filter_customers(result.customers, segment)
        payload["customers"] = dataframe_to_records(filtered)

    return {
        "status": "success",
        "file_name": file_name,
        "selected_segment": segment,
        **payload
    }


# Health check
@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=__version__)


@app.post("/segment")
async def segment_customers(
    file: UploadFile = File(...),
    reference_date: Optional[str] = Query(None),
    segment: str = Query(ALL_SEGMENTS)
):
    """
    Segment customers from uploaded transaction CSV.

    Expected CSV columns (first present name wins):
    - CustomerID / Customer / customer_id: Customer identifier
    - Date / PurchaseDate / date: Transaction date
    - Revenue / Amount / amount: Transaction amount
    """
    reference = _parse_reference_date(reference_date)
    _check_segment(segment)

    loader = DataLoader()
    try:
        contents = await file.read()
        df = loader.load_csv_bytes(contents)
    except (UnicodeDecodeError, pd.errors.ParserError) as e:
        logger.error(f"Could not read upload {file.filename}: {e}")
        raise HTTPException(status_code=400, detail=f"Error parsing CSV file: {e}")

    is_valid, report = loader.validate_data(df)
    if not is_valid and not df.empty:
        raise HTTPException(status_code=400, detail="; ".join(report['errors']))

    try:
        segmenter = RFMSegmenter()
        result = segmenter.analyze(loader.to_records(df), reference_time=reference)
        return _response(result, segmenter, segment, file.filename)

    except Exception as e:
        logger.error(f"Segmentation error: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/segment/sample")
async def segment_sample(
    seed: Optional[int] = Query(None),
    reference_date: Optional[str] = Query(None),
    segment: str = Query(ALL_SEGMENTS)
):
    """Segment generated sample transactions (8 customers, up to 8 purchases each)."""
    reference = _parse_reference_date(reference_date)
    _check_segment(segment)

    try:
        df = generate_customer_data(reference_date=reference, seed=seed)

        segmenter = RFMSegmenter()
        result = segmenter.analyze(df.to_dict('records'), reference_time=reference)
        return _response(result, segmenter, segment, SAMPLE_FILE_NAME)

    except Exception as e:
        logger.error(f"Sample segmentation error: {e}")
        raise HTTPException(status_code=500, detail=str(e))


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
