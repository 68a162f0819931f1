"""FastAPI application entry point."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from property_prices.api.routes import postcodes, properties
from property_prices.config import settings
from property_prices.errors import ReferenceDataError

logging.basicConfig(
    level=settings.log_level,
    format="%(levelname)s - %(name)s - %(asctime)s - %(message)s",
)

app = FastAPI(
    title="Property Prices",
    description="UK price paid search and postcode proximity lookup",
    version="0.1.0",
)

app.include_router(properties.router)
app.include_router(postcodes.router)


@app.exception_handler(ReferenceDataError)
async def reference_data_unavailable(request: Request, exc: ReferenceDataError):
    return JSONResponse(status_code=503, content={"detail": str(exc)})


@app.get("/health")
async def health():
    return {"status": "ok"}
