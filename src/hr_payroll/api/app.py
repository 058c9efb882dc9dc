"""FastAPI application factory."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hr_payroll import __version__
from hr_payroll.api.routes import (
    calculator_router,
    health_router,
    overtime_router,
    payslips_router,
    salaries_router,
)
from hr_payroll.calculators.validation import InvalidInputError
from hr_payroll.config import get_settings
from hr_payroll.database import create_tables, dispose_db, init_db
from hr_payroll.services import (
    InvalidTransitionError,
    OvertimeRequestNotFoundError,
    PayslipImmutableError,
    PayslipNotFoundError,
    SalaryNotFoundError,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Startup
    init_db()
    if get_settings().create_tables:
        await create_tables()
    yield
    # Shutdown
    await dispose_db()


def _error(status_code: int, exc: Exception, code: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"detail": str(exc), "code": code})


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="HR Payroll API",
        description="Payslip calculation, salary records and pay disbursement",
        version=__version__,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(InvalidInputError)
    async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
        return _error(status.HTTP_422_UNPROCESSABLE_ENTITY, exc, "INVALID_INPUT")

    @app.exception_handler(SalaryNotFoundError)
    async def salary_not_found_handler(request: Request, exc: SalaryNotFoundError) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, exc, "SALARY_NOT_FOUND")

    @app.exception_handler(PayslipNotFoundError)
    async def payslip_not_found_handler(
        request: Request, exc: PayslipNotFoundError
    ) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, exc, "PAYSLIP_NOT_FOUND")

    @app.exception_handler(OvertimeRequestNotFoundError)
    async def overtime_not_found_handler(
        request: Request, exc: OvertimeRequestNotFoundError
    ) -> JSONResponse:
        return _error(status.HTTP_404_NOT_FOUND, exc, "OVERTIME_REQUEST_NOT_FOUND")

    @app.exception_handler(InvalidTransitionError)
    async def transition_handler(request: Request, exc: InvalidTransitionError) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, exc, "INVALID_TRANSITION")

    @app.exception_handler(PayslipImmutableError)
    async def immutable_handler(request: Request, exc: PayslipImmutableError) -> JSONResponse:
        return _error(status.HTTP_409_CONFLICT, exc, "PAYSLIP_IMMUTABLE")

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            },
        )

    # Include routers
    app.include_router(health_router)
    app.include_router(calculator_router, prefix="/api/v1")
    app.include_router(salaries_router, prefix="/api/v1")
    app.include_router(overtime_router, prefix="/api/v1")
    app.include_router(payslips_router, prefix="/api/v1")

    return app


# Default app instance for uvicorn
app = create_app()
