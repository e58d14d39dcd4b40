import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import get_settings
from .database import engine
from .logging_config import setup_logging
from .models import Base
from .routers import catalog_router, customer_router, order_router, stock_router

settings = get_settings()
logger = setup_logging(settings)

app = FastAPI(
    title="Storefront API",
    description="Catalog, customers, orders and stock reporting for the web shop",
    version="1.0.0"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(catalog_router.router)
app.include_router(customer_router.router)
app.include_router(order_router.router)
app.include_router(stock_router.router)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc: StarletteHTTPException):
    # Every failure goes out as {"error": <message>}
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc: RequestValidationError):
    message = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    return JSONResponse(
        status_code=422,
        content={"error": message},
    )


@app.on_event("startup")
def _startup() -> None:
    # Create database tables
    Base.metadata.create_all(bind=engine)
    logger.info("Storefront API started")


@app.get("/health")
def health_check():

    return {
        "status": "healthy",
        "service": "storefront-api"
    }


def run() -> None:
    uvicorn.run("storefront.main:app", host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
