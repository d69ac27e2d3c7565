"""Self-service report builder: in-memory query pipeline with a FastAPI surface."""

__version__ = "0.1.0"
