import os
from dotenv import load_dotenv

load_dotenv()

user = os.getenv("DB_USER")
password = os.getenv("DB_PASSWORD")
host = os.getenv("DB_HOST")
port = os.getenv("DB_PORT")
db_name = os.getenv("DB_NAME")
database_url = os.getenv("DATABASE_URL")
pepper_data = os.getenv("PEPPER_DATA", "")

# Canonical slot of the global completion counter
aggregate_slot = os.getenv("AGGREGATE_SLOT", "__module__")
aggregate_legacy_fallback = os.getenv("AGGREGATE_LEGACY_FALLBACK", "false").lower() in ("1", "true", "yes")

dice_seed = int(os.getenv("DICE_SEED")) if os.getenv("DICE_SEED") else None
enable_test_routes = os.getenv("ENABLE_TEST_ROUTES", "false").lower() in ("1", "true", "yes")
log_level = os.getenv("LOG_LEVEL", "INFO").upper()

if __name__ == "__main__":
    print(user, host, port, db_name, database_url, aggregate_slot, aggregate_legacy_fallback)
