# Admin GraphQL documents. Shared selections are plain string fragments spliced
# into the operations that need them.

MAILING_ADDRESS_FIELDS = """
        address1
        address2
        city
        country
        zip
        province
"""

LINE_ITEM_FIELDS = """
            id
            name
            quantity
            unfulfilledQuantity
            variant {
              id
              sku
            }
"""

TAGGED_ORDERS = """
query getOrdersWithTag($query: String!, $first: Int!, $cursor: String) {
  orders(first: $first, query: $query, after: $cursor) {
    edges {
      cursor
      node {
        id
        name
        tags
        createdAt
        totalPriceSet { shopMoney { amount currencyCode } }
        lineItems(first: 250) {
          edges {
            node {""" + LINE_ITEM_FIELDS + """            }
          }
        }
        customer {
          id
          firstName
          lastName
          email
        }
      }
    }
    pageInfo {
      hasNextPage
      endCursor
    }
  }
}
"""

ORDER_BY_NAME = """
query getOrder($query: String!) {
  orders(first: 1, query: $query) {
    edges {
      node {
        id
        name
        createdAt
        totalPriceSet { shopMoney { amount currencyCode } }
        lineItems(first: 250) {
          edges {
            node {""" + LINE_ITEM_FIELDS + """            }
          }
        }
        customer {
          id
          email
          firstName
          lastName
        }
        shippingAddress {""" + MAILING_ADDRESS_FIELDS + """        }
      }
    }
  }
}
"""

CUSTOMER_OPEN_ORDERS = """
query getCustomerOrders($query: String!, $first: Int!) {
  orders(first: $first, sortKey: CREATED_AT, reverse: true, query: $query) {
    edges {
      node {
        id
        name
        createdAt
        totalPriceSet { shopMoney { amount currencyCode } }
        lineItems(first: 250) {
          edges {
            node {""" + LINE_ITEM_FIELDS + """            }
          }
        }
        shippingAddress {""" + MAILING_ADDRESS_FIELDS + """        }
      }
    }
  }
}
"""

ORDER_CREATE = """
mutation OrderCreate($order: OrderCreateOrderInput!, $options: OrderCreateOptionsInput) {
  orderCreate(order: $order, options: $options) {
    order {
      id
      name
    }
    userErrors {
      field
      message
    }
  }
}
"""

ORDER_CANCEL = """
mutation orderCancel($orderId: ID!, $reason: OrderCancelReason!, $refund: Boolean!, $restock: Boolean!, $staffNote: String) {
  orderCancel(orderId: $orderId, reason: $reason, refund: $refund, restock: $restock, staffNote: $staffNote) {
    job {
      id
    }
    userErrors {
      field
      message
    }
  }
}
"""

DRAFT_ORDER_CREATE = """
mutation draftOrderCreate($input: DraftOrderInput!) {
  draftOrderCreate(input: $input) {
    draftOrder {
      id
      name
    }
    userErrors {
      field
      message
    }
  }
}
"""

DRAFT_ORDER_COMPLETE = """
mutation draftOrderComplete($id: ID!) {
  draftOrderComplete(id: $id) {
    draftOrder {
      id
      order {
        id
        name
      }
    }
    userErrors {
      field
      message
    }
  }
}
"""
