# panda/logging/tags.py
"""Short prefixes identifying the subsystem a log line came from."""

CLI = "[CLI]"
CONFIG = "[CONFIG]"
SCAN = "[SCAN]"
LEDGER = "[LEDGER]"
VERIFY = "[VERIFY]"
RENDER = "[RENDER]"
