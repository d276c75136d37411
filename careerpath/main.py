# careerpath/main.py
import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from careerpath import __version__
from careerpath.core.config import get_cors_origins, get_log_level
from careerpath.routers import coach, pathway

logging.basicConfig(level=get_log_level(), format="%(asctime)s %(levelname)s %(name)s %(message)s")
logger = logging.getLogger("careerpath.api")

# =========================
# FastAPI Application Setup
# =========================
app = FastAPI(
    title="Career Pathway API",
    description="Personalized learning pathways, skill-gap analysis and an AI career coach backed by Gemini.",
    version=__version__
)

# --- CORS Configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(), allow_credentials=True,
    allow_methods=["*"], allow_headers=["*"],
)

# --- Include API Routers ---
app.include_router(pathway.router, prefix="/api/pathway", tags=["Career Pathway"])
app.include_router(coach.router, prefix="/api/coach", tags=["AI Coach"])

@app.get("/")
async def root():
    return {"message": "Career Pathway backend is running!"}

# =========================
# Main Execution Block
# =========================
def run():
    logger.info("Starting Career Pathway API server...")
    uvicorn.run("careerpath.main:app", host="127.0.0.1", port=8000, reload=True)


if __name__ == "__main__":
    run()
