from prometheus_client import Counter, Histogram


# === Booking Engine Metrics ===

booking_operation_count = Counter(
    "booking_operations_total", "Booking ledger operations by outcome",
    ["operation", "outcome"]
)

booking_operation_duration = Histogram(
    "booking_operation_duration_seconds", "Duration of booking ledger operations in seconds",
    ["operation"]
)

# === API Metrics ===

api_exception_counter = Counter(
    "api_exception_count", "Total API exceptions by type",
    ["type"]
)
