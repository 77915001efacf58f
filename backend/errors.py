from fastapi import status


class OrderToolsError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST


class OrderNotFoundError(OrderToolsError):
    status_code = status.HTTP_404_NOT_FOUND


class OrderValidationError(OrderToolsError):
    status_code = status.HTTP_400_BAD_REQUEST


class ShopifyAPIError(OrderToolsError):
    status_code = status.HTTP_502_BAD_GATEWAY


class ShopifyUserError(ShopifyAPIError):
    """A mutation answered with ``userErrors``."""

    status_code = 422

    def __init__(self, operation: str, messages: list[str]):
        self.operation = operation
        self.messages = messages
        super().__init__(", ".join(messages))
