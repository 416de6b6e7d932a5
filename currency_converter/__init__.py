"""Currency converter: USD-based rate snapshots, 2-decimal conversion and a
bounded conversion history, served over a small FastAPI surface."""

__version__ = "1.0.0"
