from fastapi import FastAPI, Request
from dotenv import load_dotenv

load_dotenv()
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.openapi.utils import get_openapi
from database import Base, engine
from datetime import datetime
from calculator import CalculationInputError
import models  # noqa: F401  registers the tables on Base.metadata
import routers.batch as batch
import routers.daily_entries as daily_entries
import routers.transactions as transactions
import routers.calculator as calculator
import routers.reports as reports
import os
import logging


LOG_DIR = os.getenv("LOG_DIR", "logs")
os.makedirs(LOG_DIR, exist_ok=True)

# One log file per process start
current_time_str = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
LOG_FILE = os.path.join(LOG_DIR, f"app_{current_time_str}.log")

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    filename=LOG_FILE,
    filemode='a'
)

# Mirror the file log on the console
console_handler = logging.StreamHandler()
console_handler.setLevel(logging.INFO)
console_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
logging.getLogger().addHandler(console_handler)

logger = logging.getLogger(__name__)
logger.info("Application starting up...")
# --- End Logging Configuration ---


# Create database tables
Base.metadata.create_all(bind=engine)


app = FastAPI()

allowed_origins_str = os.getenv(
    "CORS_ALLOWED_ORIGINS",
    "http://localhost:3000,http://127.0.0.1:3000,https://poultrymitra.com"
)

# Split the string into a list, stripping any whitespace
allowed_origins = [origin.strip() for origin in allowed_origins_str.split(',')]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title="Poultry Mitra API",
        version="1.0.0",
        description="Batch tracking, ledger and feed economics API for Poultry Mitra",
        routes=app.routes,
    )
    openapi_schema.setdefault("components", {})["securitySchemes"] = {
        "BearerAuth": {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
        }
    }
    openapi_schema["security"] = [{"BearerAuth": []}]
    app.openapi_schema = openapi_schema
    return app.openapi_schema

app.openapi = custom_openapi


@app.exception_handler(CalculationInputError)
async def calculation_input_error_handler(request: Request, exc: CalculationInputError):
    logger.info("Rejected calculator input on %s (fields: %s)", request.url.path, exc.fields)
    return JSONResponse(status_code=422, content={"detail": exc.message, "fields": exc.fields})


app.include_router(batch.router)
app.include_router(daily_entries.router)
app.include_router(transactions.router)
app.include_router(calculator.router)
app.include_router(reports.router)


@app.get("/")
async def test_route():
    return {"message": "Welcome to the Poultry Mitra API!"}
