from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class MailingAddress(BaseModel):
    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    province: Optional[str] = None
    zip: Optional[str] = None


class Customer(BaseModel):
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None


class LineItem(BaseModel):
    id: str
    name: str
    quantity: int
    unfulfilled_quantity: Optional[int] = None
    variant_id: Optional[str] = None
    sku: Optional[str] = None


class Order(BaseModel):
    id: str
    name: str
    created_at: Optional[datetime] = None
    total_price: Optional[str] = None
    currency_code: Optional[str] = None
    tags: List[str] = []
    line_items: List[LineItem] = []
    customer: Optional[Customer] = None
    shipping_address: Optional[MailingAddress] = None


class TaggedOrdersResponse(BaseModel):
    tag: str
    orders: List[Order]


class UnfulfilledOrder(BaseModel):
    order_number: str
    total_price: Optional[str]
    unfulfilled_items: List[LineItem]


class CustomerOrder(BaseModel):
    id: str
    order_number: str
    total_price: Optional[str]
    created_at: Optional[datetime]
    line_items: List[LineItem]
    shipping_address: Optional[MailingAddress]
    address_matches: bool


class OrderLookupResponse(BaseModel):
    unfulfilled_order: UnfulfilledOrder
    customer_orders: List[CustomerOrder]


class CreatedOrder(BaseModel):
    id: str
    name: Optional[str] = None
    admin_url: Optional[str] = None


class CombineRequest(BaseModel):
    order_number: str = Field(..., description="Name of the order the customer is looked up from")
    selected_order_ids: List[str] = Field(
        default_factory=list,
        description="Order GIDs to combine; empty means every open order of the customer",
    )
    disable_address_check: bool = False
    ignore_preorder_separation: bool = False
    send_receipt: bool = True


class CombineResponse(BaseModel):
    success: bool
    message: str
    completed_order: Optional[CreatedOrder] = None
    preorder_completed_order: Optional[CreatedOrder] = None
    cancelled_order_ids: List[str] = []


class SplitQuantitiesRequest(BaseModel):
    order_number: str
    split_quantities: Dict[str, int] = Field(
        ..., description="Variant GID -> quantity moved to the first new order"
    )


class SplitItemsRequest(BaseModel):
    order_number: str
    selected_item_ids: List[str] = Field(
        ..., description="Line item GIDs moved whole to the first new order"
    )


class SplitResponse(BaseModel):
    success: bool
    message: str
    new_order_1: Optional[CreatedOrder]
    new_order_2: Optional[CreatedOrder]
    cancelled_order_id: str


class ScanLine(BaseModel):
    line_item_id: str
    name: str
    sku: Optional[str]
    quantity: int
    scanned: int
    completed: bool


class ScanOrderResponse(BaseModel):
    order_id: str
    order_number: str
    lines: List[ScanLine]
    entered_skus: List[str] = []
    unscannable_items: List[str] = []
    complete: bool = False
    admin_url: Optional[str] = None


class ScanRequest(BaseModel):
    order_number: str
    sku: str
    entered_skus: List[str] = []


class ScanResponse(ScanOrderResponse):
    accepted: bool


class DraftLineItem(BaseModel):
    variant_id: str
    quantity: int = Field(..., gt=0)


class CombinedDraftRequest(BaseModel):
    customer_id: str
    line_items: List[DraftLineItem]


class CombinedDraftResponse(BaseModel):
    success: bool
    draft_order_id: str
    draft_order_name: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    shop: str
    api_version: str
