from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from constants import COMBINED_ORDER_SUFFIX, FREE_AND_EASY_PREFIX, PREORDER_MARKER
from errors import OrderValidationError
from schemas import DraftLineItem, LineItem

NO_ITEMS_LEFT_MESSAGE = "There are no items left to create the second order."
NOTHING_SELECTED_MESSAGE = "At least one item must be selected to split the order."


def is_preorder(item: LineItem) -> bool:
    return PREORDER_MARKER in (item.name or "")


def is_free_and_easy(item: LineItem) -> bool:
    return (item.name or "").startswith(FREE_AND_EASY_PREFIX)


@dataclass
class CombinedGroup:
    """Line items headed for one new combined order."""

    name: Optional[str] = None
    quantities: Dict[str, int] = field(default_factory=dict)
    free_and_easy_variant_ids: List[str] = field(default_factory=list)

    def claim(self, order_name: str) -> None:
        if self.name is None:
            self.name = f"{order_name}{COMBINED_ORDER_SUFFIX}"

    def add(self, variant_id: str, quantity: int) -> None:
        self.quantities[variant_id] = self.quantities.get(variant_id, 0) + quantity

    def add_free_and_easy(self, variant_id: str) -> None:
        if variant_id not in self.free_and_easy_variant_ids:
            self.free_and_easy_variant_ids.append(variant_id)

    @property
    def line_items(self) -> List[DraftLineItem]:
        items = [
            DraftLineItem(variant_id=variant_id, quantity=quantity)
            for variant_id, quantity in self.quantities.items()
            if quantity > 0
        ]
        # The returns-protection item only rides along with real goods.
        if items:
            items.extend(
                DraftLineItem(variant_id=variant_id, quantity=1)
                for variant_id in self.free_and_easy_variant_ids
            )
        return items


def aggregate_line_items(
    orders: Iterable[Tuple[str, Sequence[LineItem]]],
    separate_preorders: bool = True,
) -> Tuple[CombinedGroup, CombinedGroup]:
    """Sum variant quantities across ``(order name, line items)`` pairs.

    Returns the regular group and the preorder group; the preorder group stays empty
    when ``separate_preorders`` is false.
    """
    regular = CombinedGroup()
    preorder = CombinedGroup()
    for order_name, line_items in orders:
        for item in line_items:
            if not item.variant_id:
                continue
            group = preorder if separate_preorders and is_preorder(item) else regular
            if is_free_and_easy(item):
                group.add_free_and_easy(item.variant_id)
            else:
                group.add(item.variant_id, item.quantity)
            group.claim(order_name)
    return regular, preorder


def _require_variant(item: LineItem) -> str:
    if not item.variant_id:
        raise OrderValidationError(
            f"Line item {item.name} has no product variant and cannot be moved to a new order."
        )
    return item.variant_id


def _check_halves(
    selected: List[DraftLineItem], remaining: List[DraftLineItem]
) -> Tuple[List[DraftLineItem], List[DraftLineItem]]:
    if not selected:
        raise OrderValidationError(NOTHING_SELECTED_MESSAGE)
    if not remaining:
        raise OrderValidationError(NO_ITEMS_LEFT_MESSAGE)
    return selected, remaining


def partition_by_quantity(
    line_items: Sequence[LineItem],
    split_quantities: Mapping[str, int],
) -> Tuple[List[DraftLineItem], List[DraftLineItem]]:
    selected: List[DraftLineItem] = []
    remaining: List[DraftLineItem] = []
    for item in line_items:
        if item.quantity <= 0:
            continue
        variant_id = _require_variant(item)
        split = int(split_quantities.get(variant_id, 0) or 0)
        if split < 0:
            raise OrderValidationError(
                f"Split quantity for {item.name} cannot be negative."
            )
        if split > item.quantity:
            raise OrderValidationError(
                f"Split quantity for {item.name} is {split} but the order only has {item.quantity}."
            )
        if split > 0:
            selected.append(DraftLineItem(variant_id=variant_id, quantity=split))
        left = item.quantity - split
        if left > 0:
            remaining.append(DraftLineItem(variant_id=variant_id, quantity=left))
    return _check_halves(selected, remaining)


def partition_by_selection(
    line_items: Sequence[LineItem],
    selected_ids: Iterable[str],
) -> Tuple[List[DraftLineItem], List[DraftLineItem]]:
    wanted = set(selected_ids)
    selected: List[DraftLineItem] = []
    remaining: List[DraftLineItem] = []
    for item in line_items:
        if item.quantity <= 0:
            continue
        target = selected if item.id in wanted else remaining
        target.append(
            DraftLineItem(variant_id=_require_variant(item), quantity=item.quantity)
        )
    return _check_halves(selected, remaining)
