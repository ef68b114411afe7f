"""
FastAPI Backend dla Cavern Combat Simulator.

Endpoints:
    GET  /api/health        - health check
    GET  /api/config        - aktywne reguły walki i limity
    POST /api/simulate      - uruchom walkę na podanej mapie
    POST /api/bonus-search  - znajdź minimalny bonus Elfów
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from api.routers import simulation


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown events."""
    print("🚀 Cavern Combat API starting...")
    print(f"📁 Config from: {simulation.DATA_PATH}")
    yield
    print("👋 Cavern Combat API shutting down...")


app = FastAPI(
    title="Cavern Combat API",
    description="Backend API for the Goblins vs Elves cavern combat simulator",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(simulation.router, prefix="/api", tags=["Simulation"])


@app.get("/api/health")
async def health():
    """API health check."""
    return {"status": "healthy"}
