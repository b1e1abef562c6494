import os
from pathlib import Path

# Load environment variables from .env file
from dotenv import load_dotenv

_project_root = Path(__file__).parent.parent.parent
load_dotenv(_project_root / ".env")

APP_NAME = "bind-manager"

# Backing files
ZONES_FILE_PATH = os.getenv("BIND_MANAGER_ZONES_FILE", "/etc/bind/blacklisted.zones")
REASON_LOG_PATH = os.getenv("BIND_MANAGER_REASON_LOG", "/etc/bind/reason_log.json")
BLOCKED_DB_PATH = os.getenv("BIND_MANAGER_BLOCKED_DB", "/etc/bind/zones/master/blockeddomains.db")

# Optional config file (YAML or JSON)
CONFIG_PATH = os.getenv("BIND_MANAGER_CONFIG")

# Resolver reload
RELOAD_COMMAND = os.getenv("BIND_MANAGER_RELOAD_COMMAND", "rndc reload")
RELOAD_TIMEOUT = float(os.getenv("BIND_MANAGER_RELOAD_TIMEOUT", "30"))

# Exclusive lock around read-modify-write cycles
LOCK_FILE_NAME = "bind-manager.lock"
LOCK_FILE_PATH = os.getenv("BIND_MANAGER_LOCK_FILE")
LOCK_TIMEOUT = float(os.getenv("BIND_MANAGER_LOCK_TIMEOUT", "5"))
LOCK_POLL_INTERVAL = 0.1

# Logging
LOG_LEVEL = os.getenv("BIND_MANAGER_LOG_LEVEL", "WARNING")
LOG_FILE = os.getenv("BIND_MANAGER_LOG_FILE")

# Display
DEFAULT_REASON = "No reason provided."

# Suffixes for sibling files
SHADOW_SUFFIX = ".tmp"
INCONSISTENT_SUFFIX = ".inconsistent"
CORRUPT_SUFFIX = ".corrupt"
