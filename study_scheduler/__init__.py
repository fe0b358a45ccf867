"""Study Scheduler: availability and study-planning API."""
