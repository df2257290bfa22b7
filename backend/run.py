#!/usr/bin/env python3
# backend/run.py
"""
Server runner for the consultation portal API.

Listens on HOST/PORT from settings (default 0.0.0.0:5000).
"""
import os
from pathlib import Path
import sys

# Add backend to path
backend_dir = Path(__file__).parent
sys.path.insert(0, str(backend_dir))
os.chdir(backend_dir)

import uvicorn

from consultation_portal.core.config import settings

if __name__ == "__main__":
    print(f"🌐 Access at: http://localhost:{settings.port}")
    print(f"📚 API Docs: http://localhost:{settings.port}/docs")

    uvicorn.run(
        "consultation_portal.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "development",
        log_level=settings.log_level.lower(),
    )
