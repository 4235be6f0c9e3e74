"""Campus portal backend: FastAPI app, content services and realtime broadcast"""

__version__ = "1.0.0"
