import os
import logging
from pathlib import Path

try:
	from dotenv import load_dotenv
except ImportError:
	logging.warning("python-dotenv not available; using environment variables only")
else:
	loaded = load_dotenv()
	if not loaded and Path(".env").exists():
		raise RuntimeError(".env file present but failed to load")


def get_str_env(name: str, default: str) -> str:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	return raw


def get_int_env(name: str, default: int) -> int:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	try:
		return int(raw)
	except Exception:
		logging.exception("Invalid %s: %r", name, raw)
		return default


def get_float_env(name: str, default: float) -> float:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	try:
		return float(raw)
	except Exception:
		logging.exception("Invalid %s: %r", name, raw)
		return default


def get_bool_env(name: str, default: bool) -> bool:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	value = raw.strip().lower()
	if value in ("1", "true", "yes", "on"):
		return True
	if value in ("0", "false", "no", "off"):
		return False
	logging.warning("Invalid %s: %r", name, raw)
	return default


USER_AGENT = get_str_env("USER_AGENT", "SiteCrawl/1.0")
HTTP_TIMEOUT = get_int_env("HTTP_TIMEOUT", 10)
CRAWL_DELAY = get_float_env("CRAWL_DELAY", 1.0)
MAX_CONTENT_BYTES = get_int_env("SITECRAWL_MAX_CONTENT_BYTES", 10 * 1024 * 1024)
CACHE_MAX_SIZE = get_int_env("SITECRAWL_CACHE_MAX_SIZE", 1000)
CACHE_TTL_SECONDS = get_int_env("SITECRAWL_CACHE_TTL_SECONDS", 24 * 60 * 60)
HISTORY_MAX_SIZE = get_int_env("SITECRAWL_HISTORY_MAX_SIZE", 100)
HONOR_CRAWL_DELAY = get_bool_env("SITECRAWL_HONOR_CRAWL_DELAY", True)


def log_level() -> str:
	return (os.getenv("LOG_LEVEL", "INFO") or "INFO").strip().upper()
