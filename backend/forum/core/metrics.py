"""Prometheus metrics for thread read tracking.

Exposed through the default prometheus_client registry; the host application
decides how to serve it.
"""

from prometheus_client import Counter

# Counter: forum_thread_read_status_total
# Counts computed read statuses.
# Labels: status (unread, updated, none).
# Example: forum_thread_read_status_total{status="unread"} 42
thread_read_status_total = Counter(
    "forum_thread_read_status_total", "Computed thread read statuses", ["status"]
)

# Counter: forum_read_markers_written_total
# Counts read-marker writes.
# Labels: action (created for a first read, touched for a re-read after activity).
read_markers_written_total = Counter(
    "forum_read_markers_written_total", "Read marker inserts and touches", ["action"]
)

# Counter: forum_read_marker_store_errors_total
# Counts failed read-marker store operations.
# Labels: operation (find, upsert).
read_marker_store_errors_total = Counter(
    "forum_read_marker_store_errors_total", "Failed read marker store operations", ["operation"]
)
