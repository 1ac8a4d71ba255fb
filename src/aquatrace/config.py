from __future__ import annotations
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
DATA = ROOT / "data"
INTERIM = DATA / "interim"

# accepted spreadsheet extensions
EXCEL_SUFFIXES = (".xlsx", ".xlsm")
CSV_SUFFIXES = (".csv",)

# canonical columns of the samples table
STATION = "station_id"
EC = "conductivity"
NO3 = "nitrate"
PERIOD = "period"
TIMESTAMP = "timestamp"
CLUSTER = "cluster"

# header aliases found in the field spreadsheets, first non-empty wins per row
COLUMN_ALIASES = {
    STATION: ["Code", "ID", "نام ایستگاه", "نام نقطه"],
    EC: ["EC", "Conductivity", "هدایت الکتریکی"],
    NO3: ["NO3", "Nitrate", "نیترات"],
}
UNKNOWN_STATION = "نامشخص"

# clustering
DEFAULT_CLUSTER_COUNT = 5
MIN_CLUSTER_COUNT = 3
MAX_CLUSTER_COUNT = 8
KMEANS_ITERATIONS = 10
CLUSTER_ALGORITHMS = ("uniform", "kmeans")
DEFAULT_CLUSTER_LABELS = ["excellent", "good", "fair", "poor", "critical"]

# statistics
EWMA_LAMBDA = 0.3
PETTITT_MIN_LENGTH = 4
CONTROL_SIGMA = 3.0
VOLATILITY_JUMP_WEIGHT = 0.2

# colours handed to the renderer
PERIOD_COLORS = [
    "#2563eb", "#d97706", "#059669", "#7c3aed",
    "#db2777", "#0891b2", "#dc2626", "#475569",
]
CLUSTER_COLORS = {
    "excellent": "#059669",
    "good": "#10b981",
    "fair": "#f59e0b",
    "poor": "#ea580c",
    "critical": "#dc2626",
}

# summariser
GEMINI_MODEL = "gemini-3-pro-preview"
GEMINI_API_KEY_ENV = ("GEMINI_API_KEY", "API_KEY")
GEMINI_RETRIES = 3
GEMINI_RETRY_DELAY = 1.0
