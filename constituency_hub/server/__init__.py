"""FastAPI server for the constituency hub."""
