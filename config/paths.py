import os
from pathlib import Path

# === Base project path ===
PROJECT_ROOT = Path(__file__).resolve().parents[1]

# === Configuration ===
CONFIG_DIR = PROJECT_ROOT / "config"
CONSTANTS_PATH = CONFIG_DIR / "constants.json"

# === Logs (LOG_DIR may point at a mounted volume) ===
LOG_DIR = Path(os.getenv("LOG_DIR", PROJECT_ROOT / "logs"))
LOG_PATH = LOG_DIR / "validation_run.log"
