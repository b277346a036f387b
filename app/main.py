from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import logging
from contextlib import asynccontextmanager
from core.config import settings
from core.database import reset_engine
from core.exceptions import CatalogError
from core.storage import storage_service

# Rutas de endpoints importadas
from routes.products import router as products_router
from routes.categories import router as categories_router
from routes.uploads import router as uploads_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger(__name__)

docs_url = "/docs" if settings.ENV == "development" else None
redoc_url = "/redoc" if settings.ENV == "development" else None
openapi_url = "/openapi.json" if settings.ENV == "development" else None

# ==================== LIFESPAN EVENTS ====================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Gestiona el startup y shutdown de la aplicación.
    La conexión a la base se abre en el primer uso (ver core.database).
    """
    yield
    # Shutdown
    await storage_service.aclose()
    reset_engine()

app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    description=settings.API_DESCRIPTION,
    docs_url=docs_url,
    redoc_url=redoc_url,
    openapi_url=openapi_url,
    redirect_slashes=False,  # Evita redirects 307
    lifespan=lifespan
)

allow_origins = [origin.strip() for origin in settings.CORS_ALLOW_ORIGINS.split(",") if origin.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ==================== EXCEPTION HANDLERS ====================

@app.exception_handler(CatalogError)
async def catalog_exception_handler(request: Request, exc: CatalogError):
    """
    Convierte los errores del catálogo al formato estándar.
    """
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Maneja errores de validación de Pydantic y los convierte al formato estándar.
    """
    error_messages = []

    for error in exc.errors():
        field = " -> ".join(str(loc) for loc in error["loc"][1:])  # Omitir 'body'
        error_type = error["type"]

        if error_type == "missing":
            error_messages.append(f"El campo '{field or 'body'}' es requerido")
        elif error_type in ("dict_type", "model_attributes_type", "json_invalid"):
            error_messages.append("El body debe ser un objeto JSON")
        elif error_type.startswith("greater_than"):
            limit = error.get("ctx", {}).get("ge", error.get("ctx", {}).get("gt", ""))
            error_messages.append(f"El campo '{field}' debe ser mayor o igual que {limit}")
        else:
            error_messages.append(f"El campo '{field}': {error['msg']}")

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "status_code": 400,
            "message": "Error de validación: " + "; ".join(error_messages),
            "error": "VALIDATION_ERROR",
            "details": error_messages
        }
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Error no controlado en {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "status_code": 500,
            "message": "Error interno del servidor",
            "error": "INTERNAL_ERROR"
        }
    )

# Registrar routers
app.include_router(products_router)
app.include_router(categories_router)
app.include_router(uploads_router)

@app.get("/")
async def root():
    return {
        "message": "Welcome to the La Explosión API",
        "version": settings.API_VERSION,
        "docs": "/docs"
    }

@app.get("/health")
async def health_check():
    return {"status": "healthy"}
