# app_settings.py
import sys

#######################################
# WARNING: NO LOGGING IN THIS FILE    #
# LOGGER CANNOT BE CALLED HERE DUE TO #
# CIRCULAR DEPENDENCIES! WARNINGS IN  #
# THIS FILE ARE WRITTEN TO STDERR     #
# ONLY!                               #
#######################################

# Default run settings
# Command line flags are defined in flatten_cli.py
default_settings = {
    "target": None, # Directory to flatten, None means the current directory
    "delete": False, # Move files and remove emptied folders instead of copying
    "rename": False, # Rename colliding files instead of skipping them
    "dryRun": False, # Report what would happen without touching the disk
    "loggingLevel": "INFO", # Minimum severity of messages to log
    "logFileDirectory": None, # No log file unless a directory is given
    "logRetention": 10, # Maximum number of log files to keep
    "consoleOutput": "Both" # "File", "Console" or "Both", only matters with a log directory
}

def load_settings(overrides=None):
    """Merge run overrides into the defaults. None values keep the default."""
    merged = default_settings.copy()
    if not overrides:
        return merged

    unexpected_keys = set(overrides) - set(default_settings)
    if unexpected_keys:
        print(f"[Warning] Ignored unknown setting(s): {sorted(unexpected_keys)}", file=sys.stderr)

    merged.update({
        key: value for key, value in overrides.items()
        if key in default_settings and value is not None
    })

    try:
        merged["logRetention"] = int(merged["logRetention"])
    except (TypeError, ValueError):
        print(f"[Warning] Invalid logRetention {merged['logRetention']!r}, using {default_settings['logRetention']}", file=sys.stderr)
        merged["logRetention"] = default_settings["logRetention"]

    return merged
