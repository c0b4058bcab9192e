"""
smppcheck Default Configuration Values

Defaults match what the SMSC sessions this tool was written against expect:
TLS on port 2775, a 20 second enquire_link and a read timeout just above it.
"""

DEFAULT_PORT = 2775
DEFAULT_ENQUIRE_LINK_INTERVAL = 20.0
DEFAULT_READ_TIMEOUT = 22.0

# Pause between test-case submissions
DEFAULT_SUBMIT_DELAY = 1.0

# Incomplete concatenated messages older than this are dropped
DEFAULT_PART_TIMEOUT = 300.0

DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
