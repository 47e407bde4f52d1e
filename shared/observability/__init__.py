from .setup import setup_observability
from .metrics import (
    oms_orders_created_total,
    oms_order_amount,
    oms_login_attempts_total,
    oms_customers_deleted_total,
    oms_cascaded_orders_deleted_total
)
