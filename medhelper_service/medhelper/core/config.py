import os

from medhelper.core.env import load_env
load_env()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

MEDHELPER_CATALOG_URL = os.getenv(
    "MEDHELPER_CATALOG_URL",
    "https://mock.apidog.com/m2/962827-947413-default/18105535",
)
MEDHELPER_TIME_FORMAT = os.getenv("MEDHELPER_TIME_FORMAT", "12h")
CATALOG_IMPORT_TIMEOUT_S = int(os.getenv("CATALOG_IMPORT_TIMEOUT_S", "20"))

# seconds between background reconcile passes; 0 turns the loop off
AUTO_SKIP_INTERVAL_S = int(os.getenv("AUTO_SKIP_INTERVAL_S", "60"))
AUTO_SKIP_REASON = os.getenv(
    "AUTO_SKIP_REASON",
    "Automatically skipped: a later dose is already due",
)

SEED_DEFAULT_CATALOG = os.getenv("SEED_DEFAULT_CATALOG", "true").lower() == "true"

HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))
