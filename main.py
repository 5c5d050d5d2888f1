import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from shared.config.database import create_tables
from shared.config.settings import get_settings
from shared.errors import register_exception_handlers
from shared.observability import setup_observability
from shared.security import limiter

# IMPORTANT: import models so they register with Base
from services.catalog_service import models as catalog_models
from services.order_service import models as order_models

from services.catalog_service.router import admin_router, router as catalog_router
from services.order_service.router import router as order_router

settings = get_settings()

app = FastAPI(title="CBC Bookstore API", version="1.0.0")

# --- OBSERVABILITY BOOTSTRAP ---
setup_observability(app, "bookstore_api")

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.allowed_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(catalog_router)
app.include_router(admin_router)
app.include_router(order_router)


@app.get("/health")
async def health_check():
    return {"status": "ok", "message": "CBC Bookstore API is running"}


@app.on_event("startup")
async def startup_event():
    await create_tables()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=settings.port)
