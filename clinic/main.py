from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from . import config
from .database import engine, Base, SessionLocal
from .exceptions import ClinicError
from .models import User
from .auth import get_password_hash
from .routes import api_router

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Clinic Desk API")

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=config.CORS_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# DOMAIN ERRORS: ValidationError 400, NotFound 404, PersistenceError 503
@app.exception_handler(ClinicError)
async def clinic_error_handler(request: Request, exc: ClinicError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

# GLOBAL EXCEPTION HANDLER
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": f"INTERNAL SERVER ERROR: {str(exc)}"},
    )

@app.get("/")
def read_root():
    return {"status": "ok", "message": "Backend is running"}

@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.debug("Request %s %s", request.method, request.url.path)
    response = await call_next(request)
    return response

# Include all routes
app.include_router(api_router)

# --- STARTUP ---
@app.on_event("startup")
def startup():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        admin = db.query(User).filter(User.username == config.ADMIN_USERNAME).first()
        if not admin:
            db.add(User(username=config.ADMIN_USERNAME, hashed_password=get_password_hash(config.ADMIN_PASSWORD)))
            db.commit()
            logger.info("Seeded login user '%s'", config.ADMIN_USERNAME)
    finally:
        db.close()
