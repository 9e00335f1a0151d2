"""URL lookup patterns shared by the API routers."""

# Router lookup for UUID primary keys
UUID_PATTERN = "[0-9a-fA-F-]{36}"
