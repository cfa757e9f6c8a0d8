import os
from pathlib import Path


# Project root (the directory holding pyproject.toml)
BASE_DIR = Path(__file__).resolve().parents[3]

# Settings files, .env wins over the committed example
ENV_FILE = BASE_DIR / '.env'
ENV_EXAMPLE_FILE = BASE_DIR / '.env.example'

# Log files; the test suite redirects them through TEST_LOG_DIR
LOG_DIR = Path(os.environ.get('TEST_LOG_DIR') or BASE_DIR / 'logs')
