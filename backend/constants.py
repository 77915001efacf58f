PREORDER_MARKER = "PREORDER"
FREE_AND_EASY_PREFIX = "Free and Easy Returns or Exchanges"
COMBINED_ORDER_SUFFIX = "-C"

OPEN_UNFULFILLED_QUERY = "status:open AND fulfillment_status:unfulfilled"
TAGGED_ORDERS_PAGE_SIZE = 250

CANCEL_REASON_COMBINED = "OTHER"
CANCEL_REASON_SPLIT = "OTHER"
CANCEL_REASON_SPLIT_BY_ITEMS = "CUSTOMER"
COMBINED_STAFF_NOTE = "Order combined with other orders"
SPLIT_STAFF_NOTE = "Order split into two orders"

SPLIT_FIRST_TAG = "split-order-1"
SPLIT_SECOND_TAG = "split-order-2"

INVENTORY_BEHAVIOUR = "DECREMENT_IGNORING_POLICY"
SHIPPING_LINE_TITLE = "Standard Shipping"
SHIPPING_LINE_CODE = "standard"
SHIPPING_LINE_SOURCE = "Custom"
ZERO_AMOUNT = "0.00"
