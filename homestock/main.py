"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from homestock.api import conversions, meal_plans, pantry, recipes, shopping, staples
from homestock.config import get_settings
from homestock.database import init_db

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    init_db()
    yield


app = FastAPI(
    title="Homestock API",
    description="Household pantry, recipes and meal planning across Jackson and the Shore",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware for development
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Register routers
app.include_router(pantry.router)
app.include_router(recipes.router)
app.include_router(conversions.router)
app.include_router(shopping.router)
app.include_router(staples.router)
app.include_router(meal_plans.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
