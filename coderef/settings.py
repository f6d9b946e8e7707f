"""
Tunables for the search engine.

Every value can be overridden through a CODEREF_* environment variable,
read once at import time.
"""

import logging
import os

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, raw)
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not a number", name, raw)
        return default


def _env_list(name: str) -> list[str]:
    raw = os.environ.get(name, "")
    return [item.strip() for item in raw.split(",") if item.strip()]


# File size caps (bytes)
MAX_SYMBOL_FILE_SIZE = _env_int("CODEREF_MAX_SYMBOL_FILE_SIZE", 5 * 1024 * 1024)
MAX_TEXT_FILE_SIZE = _env_int("CODEREF_MAX_TEXT_FILE_SIZE", 2 * 1024 * 1024)

# Confidence tiers
EXACT_CONFIDENCE = 1.0
CASE_INSENSITIVE_CONFIDENCE = 0.95
SUBSTRING_BASE = 0.8
SUBSTRING_SPAN = 0.15
# approximate scores fall in (FUZZY_THRESHOLD, FUZZY_CEILING], below the substring tier
FUZZY_CEILING = 0.79
FUZZY_THRESHOLD = _env_float("CODEREF_FUZZY_THRESHOLD", 0.6)
if not 0.0 <= FUZZY_THRESHOLD < FUZZY_CEILING:
    logger.warning("Ignoring CODEREF_FUZZY_THRESHOLD=%s: must be in [0, %s)", FUZZY_THRESHOLD, FUZZY_CEILING)
    FUZZY_THRESHOLD = 0.6
WINKLER_PREFIX_LIMIT = 4
WINKLER_SCALING = 0.1

# Request limits
DEFAULT_MAX_RESULTS = 50
MAX_RESULTS_LIMIT = 200
DEFAULT_DEPTH = 2
MAX_DEPTH = 3

# How many distinct matched files get a dependency section in the report
REPORT_FILE_LIMIT = _env_int("CODEREF_REPORT_FILE_LIMIT", 5)

# Longest line content kept in a match
MAX_CONTENT_LENGTH = 200

EXCLUDED_DIRS = {
    # version control
    ".git", ".svn", ".hg",
    # dependency installs
    "node_modules", "bower_components", "vendor", ".venv", "venv",
    # build output
    "dist", "build", "out", "target", ".next", ".nuxt", "__pycache__",
    # coverage / caches
    "coverage", ".nyc_output", ".cache", ".pytest_cache", ".mypy_cache", ".tox",
    # editors
    ".idea", ".vscode",
}
EXCLUDED_DIRS.update(_env_list("CODEREF_EXTRA_EXCLUDED_DIRS"))

BINARY_EXTENSIONS = {
    ".png", ".jpg", ".jpeg", ".gif", ".webp", ".ico", ".bmp", ".svgz",
    ".zip", ".gz", ".tgz", ".tar", ".bz2", ".xz", ".7z", ".rar", ".jar",
    ".exe", ".dll", ".so", ".dylib", ".bin", ".dat", ".o", ".a", ".class", ".pyc",
    ".woff", ".woff2", ".ttf", ".otf", ".eot",
    ".pdf", ".mp3", ".mp4", ".mov", ".wav",
}

# Import resolution
RESOLVE_EXTENSIONS = [
    ".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs", ".vue", ".svelte",
    ".py", ".go", ".rs", ".java", ".kt", ".rb", ".php", ".json", ".d.ts",
]
INDEX_FILES = ["index" + ext for ext in RESOLVE_EXTENSIONS] + ["__init__.py", "mod.rs"]
MANIFEST_FILE = "package.json"
MANIFEST_ENTRY_FIELDS = ["module", "main", "types"]
DEPENDENCY_DIR = "node_modules"
PATH_MAPPING_FILES = ["tsconfig.json", "jsconfig.json"]
PROJECT_MARKERS = [
    "package.json", "package-lock.json", "yarn.lock", "pnpm-lock.yaml",
    "tsconfig.json", "pyproject.toml", "setup.py", "go.mod", "Cargo.toml", ".git",
]
CONVENTION_ALIASES = {
    "@/": "src/",
    "~/": "src/",
    "@src/": "src/",
    "@components/": "src/components/",
    "@utils/": "src/utils/",
    "@lib/": "src/lib/",
    "#/": "src/",
}
