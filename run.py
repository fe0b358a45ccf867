#!/usr/bin/env python3
"""
Simple launcher script for the Study Scheduler API.
Run this from the root directory to start the application.
"""

import uvicorn

from study_scheduler.config import API_HOST, API_PORT, LOG_LEVEL

if __name__ == "__main__":
    print("🚀 Starting Study Scheduler API with auto-reload...")
    print(f"📖 API Documentation: http://localhost:{API_PORT}/docs")
    print(f"🔍 Health Check: http://localhost:{API_PORT}/health")
    print("🛑 Press Ctrl+C to stop the server")
    print("-" * 50)

    uvicorn.run(
        "study_scheduler.main:app",
        host=API_HOST,
        port=API_PORT,
        reload=True,
        reload_dirs=["study_scheduler"],
        log_level=LOG_LEVEL.lower()
    )
