import logging

from fastapi import FastAPI

from .config import LOG_LEVEL
from .database import engine, Base
from .routes import availability, class_schedule, scheduler, tasks, user_preferences

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

# Create database tables
Base.metadata.create_all(bind=engine)

# Create FastAPI app
app = FastAPI(
    title="Study Scheduler API",
    description="Availability resolution, schedule validation and study slot planning",
    version="1.0.0"
)

# Include routers
app.include_router(availability.router, prefix="/availability", tags=["availability"])
app.include_router(class_schedule.router, prefix="/class-schedule", tags=["class-schedule"])
app.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
app.include_router(user_preferences.router, prefix="/user-preferences", tags=["user-preferences"])
app.include_router(scheduler.router, prefix="/scheduler", tags=["scheduler"])

@app.get("/")
def read_root():
    """Root endpoint with API information"""
    return {
        "message": "Welcome to the Study Scheduler API",
        "version": "1.0.0",
        "endpoints": {
            "availability": "CRUD /availability/blocks, /availability/exceptions",
            "class_schedule": "CRUD /class-schedule - classes are mirrored as unavailable blocks",
            "tasks": "CRUD /tasks",
            "preferences": "GET/PUT /user-preferences",
            "validate": "POST /scheduler/validate - check a candidate schedule",
            "time_slots": "POST /scheduler/time-slots - 7-day study/break slots",
            "optimal_schedule": "POST /scheduler/optimal-schedule - assign tasks to slots",
            "resolve": "GET /scheduler/resolve/{date} - constraints that apply on a date"
        },
        "identity": "X-User-Id header (defaults to 1)",
        "swagger_ui": "/docs - Interactive API documentation"
    }

@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "message": "API is running"}

# This allows running the app directly with: python -m study_scheduler.main
if __name__ == "__main__":
    import uvicorn
    from .config import API_HOST, API_PORT
    uvicorn.run("study_scheduler.main:app", host=API_HOST, port=API_PORT, reload=True)
