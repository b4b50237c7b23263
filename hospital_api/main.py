from fastapi import FastAPI, Request, APIRouter
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from hospital_api.config.database import engine, Base, settings
from hospital_api.config.redis_config import redis_config
from hospital_api.routes import branch, doctor, patient, doctor_schedule, appointment, report
from hospital_api.utils.response import APIResponse
import hospital_api.models  # noqa: F401  registers every table on Base.metadata
import logging
import time

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger("hospital_api")

Base.metadata.create_all(bind=engine)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"{settings.api_title} v{settings.api_version} starting")
    yield
    redis_config.close()


app = FastAPI(
    title=settings.api_title,
    description="""
    Hospital Appointment Management API

    Manage branches, doctors, patients, doctor schedules, appointments and reports.

    ### Features:
    * **Branches & Doctors**: Organise doctors by medical branch
    * **Patients**: Register patients; identity numbers are encrypted at rest
    * **Doctor Schedules**: Daily working hours, one active record per doctor and day
    * **Appointments**: One booking per patient, doctor and day, with email confirmation
    * **Reports**: Examination reports attached to appointments

    ### Business Rules:
    * Cancelled appointments and deleted schedules are kept and reused when the same slot is booked again
    * A schedule day that has bookings cannot be moved or deleted
    * Appointments must fall inside the doctor's working hours for that day
    """,
    version=settings.api_version,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in settings.allowed_origins.split(",") if origin.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f}ms)")
    return response


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return APIResponse.error(
        message=exc.detail,
        error_type=getattr(exc, "error_type", "HTTPException"),
        status_code=exc.status_code,
        details=getattr(exc, "details", None),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        errors.append({
            "field": " -> ".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"]
        })

    return APIResponse.error(
        message="Validation Error",
        error_type="ValidationError",
        status_code=422,
        details=errors,
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return APIResponse.error(
        message="Internal server error",
        error_type="InternalError",
        status_code=500,
    )


system_router = APIRouter(prefix="/api", tags=["System"])

@system_router.get("/")
def api_root():
    """Root API endpoint with information"""
    return {
        "success": True,
        "data": {
            "message": "Hospital Appointment Booking System API",
            "version": settings.api_version,
            "documentation": {
                "swagger_ui": "/api/docs",
                "redoc": "/api/redoc",
                "openapi_schema": "/api/openapi.json"
            },
            "endpoints": {
                "branches": "/api/v1/branches",
                "doctors": "/api/v1/doctors",
                "patients": "/api/v1/patients",
                "doctor_schedules": "/api/v1/doctor-schedules",
                "appointments": "/api/v1/appointments",
                "reports": "/api/v1/reports"
            }
        }
    }

@system_router.get("/health")
def health_check():
    """Health check endpoint for monitoring"""
    return {
        "success": True,
        "data": {
            "status": "healthy",
            "service": "hospital-api",
            "version": settings.api_version,
            "cache": "up" if redis_config.test_connection() else "down"
        }
    }

app.include_router(system_router)

app.include_router(branch.router, prefix="/api/v1")
app.include_router(doctor.router, prefix="/api/v1")
app.include_router(patient.router, prefix="/api/v1")
app.include_router(doctor_schedule.router, prefix="/api/v1")
app.include_router(appointment.router, prefix="/api/v1")
app.include_router(report.router, prefix="/api/v1")

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "hospital_api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level=settings.log_level
    )
