"""Configuration: .env loading, paths, constants."""

import os
from pathlib import Path
from dotenv import load_dotenv

# Project root = parent of trip_builder/
PROJECT_ROOT = Path(__file__).resolve().parent.parent
load_dotenv(PROJECT_ROOT / ".env")

# --- Traveler ---
HOME_LOCATION = os.getenv("BASED", "")

# --- Paths ---
INPUT_PATH = os.getenv("TRIPS_INPUT_PATH", "input.txt")
OUTPUT_DIR = Path(os.getenv("OUTPUT_DIR", str(PROJECT_ROOT / "output")))

# --- Parsing ---
SEGMENT_MARKER = "SEGMENT:"
ARROW = "->"

# --- Linking ---
LINK_WINDOW_HOURS = 24  # next segment must start within this many hours (inclusive)

# --- Output ---
TRIP_SEPARATOR = "\n\n"
