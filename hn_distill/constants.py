"""
Constants and configuration values for HN thread distillation.
"""

# Remote API
HN_API_BASE = "https://hacker-news.firebaseio.com/v0"
HN_ITEM_URL = "https://news.ycombinator.com/item?id={id}"
USER_AGENT = "hn-distill/1.0"

# Transport (owned by the retrying transport, not by the fetchers)
ITEM_FETCH_RETRIES = 3  # Retries after the first attempt
ITEM_RETRY_DELAY = 1.0  # Seconds between attempts
ITEM_FETCH_TIMEOUT = 10.0
ITEM_CONNECT_TIMEOUT = 5.0

# Concurrency
CONCURRENT_FETCHES = 20  # Fan-out per batch chunk

# Traversal Limits
DEFAULT_MAX_COMMENTS = 200
MAX_DEPTH = 10  # Direct replies to the story are depth 0

# Rendering
INDENT = "  "
SEPARATOR_WIDTH = 60
DELETED_AUTHOR = "[deleted]"
UNKNOWN_AUTHOR = "unknown"
NO_TITLE = "(no title)"
