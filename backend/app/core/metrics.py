"""
Prometheus metrics configuration
"""
from prometheus_client import (CONTENT_TYPE_LATEST, Counter, Histogram,
                               generate_latest)
from prometheus_client.registry import REGISTRY

# ============================================================================
# HTTP Request Metrics
# ============================================================================

http_requests_total = Counter(
    'http_requests_total',
    'Total number of HTTP requests',
    ['method', 'endpoint', 'status_code']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint', 'status_code'],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)
)

http_errors_total = Counter(
    'http_errors_total',
    'Total number of HTTP errors',
    ['method', 'endpoint', 'status_code', 'error_type']
)

# ============================================================================
# Record Store Metrics
# ============================================================================

records_saved_total = Counter(
    'records_saved_total',
    'Total number of records written to the store',
    ['kind']  # table name: 'contacts', 'checkouts'
)

record_store_errors_total = Counter(
    'record_store_errors_total',
    'Total number of failed record store writes',
    ['kind', 'error_type']
)

db_queries_total = Counter(
    'db_queries_total',
    'Total number of database queries',
    ['operation']
)

db_query_duration_seconds = Histogram(
    'db_query_duration_seconds',
    'Database query duration in seconds',
    ['operation'],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5)
)

# ============================================================================
# Notification Metrics
# ============================================================================

notifications_total = Counter(
    'notifications_total',
    'Total number of email notifications attempted',
    ['template', 'status']  # status: 'sent', 'failed'
)


def get_metrics():
    """
    Get Prometheus metrics in text format

    Returns:
        bytes: Metrics in Prometheus text format
    """
    return generate_latest(REGISTRY)


def get_metrics_content_type():
    """Get content type for Prometheus metrics"""
    return CONTENT_TYPE_LATEST
