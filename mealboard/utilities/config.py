"""Configuration management for the Mealboard export service."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

from mealboard.utilities import constants

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO').upper()

# Heading fallbacks
DEFAULT_CLIENT_NAME: Final[str] = os.getenv('DEFAULT_CLIENT_NAME', constants.DEFAULT_CLIENT_NAME)
DEFAULT_WEEK_LABEL: Final[str] = os.getenv('DEFAULT_WEEK_LABEL', constants.DEFAULT_WEEK_LABEL)

# Layout validation: how many points of column overflow are still accepted
LAYOUT_TOLERANCE_PT: Final[float] = float(os.getenv('LAYOUT_TOLERANCE_PT', '1.0'))

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = BASE_DIR / 'data'
SAMPLE_DASHBOARD_FILE: Final[Path] = DATA_DIR / 'dashboard-sample.json'
EXPORT_DIR: Final[Path] = Path(os.getenv('EXPORT_DIR', str(BASE_DIR.parent / 'dist')))
