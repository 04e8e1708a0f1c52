import datetime
from pathlib import Path

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from app.api.endpoints import payments as payments_api
from app.client.orchestrator import PRESET_AMOUNTS
from app.core.config import Settings, get_settings
from app.core.logging_config import configure_logging

configure_logging(get_settings().log_level)

app = FastAPI(title="Premium Payments API", version="0.1.0")

# Setup templates
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "frontend" / "templates"))

# Include API routers
app.include_router(payments_api.router, prefix="/api", tags=["Payments"])


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    # Malformed JSON or a non-object body; field-level problems are handled by the endpoints
    return JSONResponse(status_code=400, content={"success": False, "error": "Invalid request body"})


@app.get("/ping", tags=["Health Check"])
async def ping():
    return {"message": "pong"}


@app.get("/", response_class=HTMLResponse, tags=["Frontend"])
async def read_root(request: Request, settings: Settings = Depends(get_settings)):
    return templates.TemplateResponse(request, "index.html", {
        "merchant_name": settings.merchant_name,
        "checkout_script_url": settings.checkout_script_url,
        "preset_amounts": PRESET_AMOUNTS,
        "current_year": datetime.datetime.utcnow().year,
    })
