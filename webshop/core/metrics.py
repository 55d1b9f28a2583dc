from prometheus_client import Counter, Histogram


KAFKA_PRODUCER_START_TOTAL = Counter(
    "webshop_kafka_producer_start_total",
    "Kafka producer start events",
    ["service", "result"],
)

KAFKA_PRODUCER_STOP_TOTAL = Counter(
    "webshop_kafka_producer_stop_total",
    "Kafka producer stop events",
    ["service", "result"],
)

KAFKA_PRODUCER_MESSAGES_TOTAL = Counter(
    "webshop_kafka_producer_messages_total",
    "Kafka producer send events",
    ["service", "result"],
)

CART_DB_OPERATIONS_TOTAL = Counter(
    "webshop_cart_db_operations_total",
    "Cart items DB operations",
    ["service", "operation", "status"],
)

ORDERS_DB_OPERATIONS_TOTAL = Counter(
    "webshop_orders_db_operations_total",
    "Orders DB operations",
    ["service", "operation", "status"],
)

CART_SERVICE_OPERATIONS_TOTAL = Counter(
    "webshop_cart_service_operations_total",
    "Cart use case operations",
    ["service", "operation", "status"],
)

ORDERS_SERVICE_OPERATIONS_TOTAL = Counter(
    "webshop_orders_service_operations_total",
    "Order use case operations",
    ["service", "operation", "status"],
)

HTTP_REQUESTS_TOTAL = Counter(
    "webshop_http_requests_total",
    "Total HTTP requests",
    ["service", "method", "path", "status_code"],
)

HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "webshop_http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["service", "method", "path"],
)
