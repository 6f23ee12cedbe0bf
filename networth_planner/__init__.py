"""Net-worth target planner: monthly projection engine and Flask API."""

__version__ = "0.1.0"
