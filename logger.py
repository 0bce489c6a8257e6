import logging
import os
import glob
import sys
from datetime import datetime
from app_settings import load_settings

LOGGER_NAME = "flattener"


def get_logging_level(level_name):
	return {
		"CRITICAL": logging.CRITICAL,
		"ERROR":	logging.ERROR,
		"WARNING":	logging.WARNING,
		"INFO":		logging.INFO,
		"DEBUG":	logging.DEBUG
	}.get(str(level_name).upper(), logging.INFO)

# Keeps only the newest max_logs log files in log_dir
def enforce_log_retention(log_dir, max_logs):
	log_files = sorted(
		glob.glob(os.path.join(log_dir, "flatten_*.log")),
		key = os.path.getmtime,
		reverse = True
	)

	for old_log in log_files[max_logs:]:
		try:
			os.remove(old_log)
		except OSError as e:
			print(f"[Warning] Failed to delete old log file: {old_log} - {e}", file=sys.stderr)


# Handlers are attached on the first call only, later calls return the configured logger
def setup_logger(settings=None):
	logger = logging.getLogger(LOGGER_NAME)
	if logger.handlers:
		return logger

	if settings is None:
		settings = load_settings()
	level_name = settings.get("loggingLevel", "INFO")
	log_dir = settings.get("logFileDirectory")
	max_logs = int(settings.get("logRetention", 10))
	console_output = settings.get("consoleOutput", "Both")

	logger.setLevel(get_logging_level(level_name))
	formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')

	if log_dir:
		os.makedirs(log_dir, exist_ok=True)
		timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
		log_file = os.path.join(log_dir, f"flatten_{timestamp}.log")

		handler = logging.FileHandler(log_file, mode = 'a', encoding = 'utf-8')
		handler.setFormatter(formatter)
		logger.addHandler(handler)

		# Enforce log retention policy
		enforce_log_retention(log_dir, max_logs)

	# Console output goes to stderr, skipped only when logging to file alone
	if not log_dir or console_output != "File":
		console = logging.StreamHandler()
		console.setFormatter(formatter)
		logger.addHandler(console)

	return logger


def reset_logger():
	"""Detaches and closes every handler so the next setup_logger() call reconfigures."""
	logger = logging.getLogger(LOGGER_NAME)
	for handler in list(logger.handlers):
		logger.removeHandler(handler)
		handler.close()
	logger.setLevel(logging.NOTSET)
