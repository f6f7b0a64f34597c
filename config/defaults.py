"""
Application default settings and constants
"""
from pathlib import Path
import sys

# =============================================================================
# Application Information
# =============================================================================
APP_NAME = "PDF Slide Deck Converter"
APP_VERSION = "1.0.0"

# =============================================================================
# Rendering Settings
# =============================================================================
RENDER_SCALE = 2.0             # Oversampling factor applied to page size
POINTS_PER_INCH = 72           # PDF user-space units per inch
RASTER_FORMAT = "PNG"          # Lossless encoding for embedded page images
POPPLER_TIMEOUT_SECONDS = 600  # Upper bound for a single pdftoppm call

# =============================================================================
# Output Settings
# =============================================================================
SOURCE_EXTENSION = ".pdf"
DECK_EXTENSION = ".pptx"

# =============================================================================
# Windows Default Paths
# =============================================================================
if sys.platform == 'win32':
    # Note: Poppler for Windows may have bin or Library\bin depending on distribution
    DEFAULT_POPPLER_PATHS = [
        Path(r"C:\Program Files\poppler-24.02.0\Library\bin"),
        Path(r"C:\Program Files\poppler-24.02.0\bin"),
        Path(r"C:\Program Files\poppler\Library\bin"),
        Path(r"C:\Program Files\poppler\bin"),
        Path(r"C:\poppler\Library\bin"),
        Path(r"C:\poppler\bin"),
    ]
else:
    # macOS/Linux: pdftoppm is expected on PATH
    DEFAULT_POPPLER_PATHS = []

# =============================================================================
# UI Theme Colors
# =============================================================================
THEME_PRIMARY = "#1E40AF"      # Accent Blue
THEME_BACKGROUND = "#F9F9F7"   # Ivory
THEME_ERROR = "#D32F2F"        # Red

# =============================================================================
# Settings File
# =============================================================================
SETTINGS_FILENAME = "settings.json"
