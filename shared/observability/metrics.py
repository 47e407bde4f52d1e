from prometheus_client import Counter, Histogram

# Business Metrics
oms_orders_created_total = Counter(
    "oms_orders_created_total",
    "Total orders created",
    ["status"] # Labels: initial order status, e.g. 'PENDING'
)

oms_order_amount = Histogram(
    "oms_order_amount",
    "Order total amount at creation",
    buckets=(10, 50, 100, 250, 500, 1000, 2500, 5000, 10000)
)

oms_login_attempts_total = Counter(
    "oms_login_attempts_total",
    "Login attempts",
    ["outcome"] # Labels: 'success', 'failed'
)

oms_customers_deleted_total = Counter(
    "oms_customers_deleted_total",
    "Total customers deleted"
)

oms_cascaded_orders_deleted_total = Counter(
    "oms_cascaded_orders_deleted_total",
    "Orders removed as a side effect of deleting their customer"
)
