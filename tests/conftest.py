"""tests/conftest.py"""
import os

# Console logging only while testing
os.environ.setdefault("LOG_TO_FILE", "0")
