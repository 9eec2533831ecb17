from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import uvicorn
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from core.logging_config import get_logger, setup_logging
from core.errors import InventoryHistoryError
from db.database import create_db_and_tables, engine
from routers.inventory import router as inventory_router
from core.auth import fastapi_users, auth_backend
from schemas.users import UserRead, UserCreate, UserUpdate

# Configure logging before creating the app
setup_logging()
logger = get_logger("inventory_history")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Inventory history service starting up")
    await create_db_and_tables()
    yield
    await engine.dispose()
    logger.info("Inventory history service shutting down")


app = FastAPI(
    title="Inventory Transaction History API",
    description="Read-only inventory transaction history scoped by organization",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info(
        "HTTP %s %s query=%s from %s",
        request.method,
        request.url.path,
        request.url.query,
        request.client.host if request.client else "?",
    )
    return await call_next(request)


@app.exception_handler(InventoryHistoryError)
async def inventory_history_error_handler(request: Request, exc: InventoryHistoryError):
    logger.warning("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=exc.headers)


@app.get("/health")
async def health():
    return {"status": "healthy"}


# Authentication routes (fastapi-users)
app.include_router(fastapi_users.get_auth_router(auth_backend), prefix="/auth/jwt", tags=["auth"],)
app.include_router(fastapi_users.get_register_router(UserRead, UserCreate), prefix="/auth", tags=["auth"])
app.include_router(fastapi_users.get_users_router(UserRead, UserUpdate), prefix="/users", tags=["users"])

# Inventory transaction history
app.include_router(inventory_router, prefix="/inventory-transactions", tags=["inventory-transactions"])

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
