from pathlib import Path


# Project root, the directory holding pyproject.toml
BASE_DIR = Path(__file__).resolve().parents[3]

# Settings sources, .env wins over the checked-in example
ENV_FILE = BASE_DIR / '.env'
ENV_EXAMPLE_FILE = BASE_DIR / '.env.example'

# Rotated log files (DEBUG runs only)
LOG_DIR = BASE_DIR / 'logs'
