# app/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from app.api.middleware import (
    AuditTriggerMiddleware,
    CorrelationIdMiddleware,
    IdentityContextMiddleware,
)
from app.api.routers import admin, health, partitions, records
from app.application.exceptions import (
    ApplicationError,
    IdentityNotFoundError,
    TenantAlreadyExistsError,
    TenantNotFoundError,
)
from app.config.logging import configure_logging
from app.config.settings import get_settings
from app.domain.exceptions import DomainError, DomainValidationError
from app.infrastructure.database.session import Base, engine
from app.partitions.exceptions import (
    AmbiguousSelectionError,
    InvalidPartitionNameError,
    InvalidSourceError,
    PartitionError,
    PartitionForbiddenError,
    PartitionUnavailableError,
    ProvisioningInProgressError,
    SelectionRequiredError,
)
from app.security.exceptions import AuthorizationError

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

# Partition errors -> client-visible status codes.
PARTITION_ERROR_STATUS = {
    InvalidSourceError: 404,
    AmbiguousSelectionError: 400,
    SelectionRequiredError: 400,
    InvalidPartitionNameError: 400,
    PartitionForbiddenError: 403,
    ProvisioningInProgressError: 409,
    PartitionUnavailableError: 503,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Identity table only; partitions are created by the provisioner.
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    debug=settings.debug,
    lifespan=lifespan,
)

# Middleware order: last added runs first (outermost). Request flow: CorrelationId -> IdentityContext -> AuditTrigger.
app.add_middleware(AuditTriggerMiddleware)
app.add_middleware(IdentityContextMiddleware)
app.add_middleware(CorrelationIdMiddleware)


@app.exception_handler(PartitionError)
async def partition_error_handler(request, exc: PartitionError):
    status_code = PARTITION_ERROR_STATUS.get(type(exc), 400)
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


@app.exception_handler(DomainValidationError)
async def domain_validation_error_handler(request, exc: DomainValidationError):
    return JSONResponse(status_code=422, content={"detail": exc.message})


@app.exception_handler(DomainError)
async def domain_error_handler(request, exc: DomainError):
    return JSONResponse(status_code=400, content={"detail": exc.message})


@app.exception_handler(AuthorizationError)
async def authorization_error_handler(request, exc: AuthorizationError):
    return JSONResponse(status_code=403, content={"detail": exc.message})


@app.exception_handler(IdentityNotFoundError)
async def identity_not_found_handler(request, exc: IdentityNotFoundError):
    return JSONResponse(status_code=401, content={"detail": exc.message})


@app.exception_handler(TenantAlreadyExistsError)
async def tenant_exists_handler(request, exc: TenantAlreadyExistsError):
    return JSONResponse(status_code=409, content={"detail": exc.message})


@app.exception_handler(TenantNotFoundError)
async def tenant_not_found_handler(request, exc: TenantNotFoundError):
    return JSONResponse(status_code=404, content={"detail": exc.message})


@app.exception_handler(ApplicationError)
async def application_error_handler(request, exc: ApplicationError):
    return JSONResponse(status_code=500, content={"detail": exc.message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request, exc: Exception):
    logger.error("unhandled_error", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


# Routers: /health, /partitions, /records, /admin
app.include_router(health.router)
app.include_router(partitions.router, prefix="/partitions")
app.include_router(records.router, prefix="/records")
app.include_router(admin.router, prefix="/admin")
