"""
Order Models
============

Read-side view of order documents held in the content store.
Documents use camelCase keys; the model exposes snake_case attributes.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Optional, Tuple

ORDER_STATUSES = ('pending', 'processing', 'delivered', 'cancelled')
FILTER_ALL = 'All'
FILTER_OPTIONS = (FILTER_ALL,) + ORDER_STATUSES


def status_label(status: str) -> str:
    """'pending' -> 'Pending'"""
    if not status:
        return ''
    return status[0].upper() + status[1:]


@dataclass(frozen=True)
class CartItem:
    product_name: str
    image: Any = None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "CartItem":
        return cls(product_name=doc.get('productName') or '', image=doc.get('image'))

    def to_dict(self) -> Dict[str, Any]:
        return {'productName': self.product_name, 'image': self.image}


@dataclass(frozen=True)
class Order:
    id: str
    full_name: str = ''
    email: str = ''
    phone: Any = None
    address: str = ''
    city: str = ''
    zip_code: Any = None
    total_price: Optional[float] = None
    discounted_price: Optional[float] = None
    order_date: Optional[str] = None
    order_status: str = ''
    cart_items: Tuple[CartItem, ...] = field(default_factory=tuple)

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Order":
        # Dereferenced products that no longer exist come back as null
        items = tuple(
            CartItem.from_document(item)
            for item in (doc.get('cartItems') or [])
            if item
        )
        return cls(
            id=doc['_id'],
            full_name=doc.get('fullName') or '',
            email=doc.get('email') or '',
            phone=doc.get('phone'),
            address=doc.get('address') or '',
            city=doc.get('city') or '',
            zip_code=doc.get('zipCode'),
            total_price=doc.get('totalPrice'),
            discounted_price=doc.get('discountedPrice'),
            order_date=doc.get('orderDate'),
            order_status=doc.get('orderStatus') or '',
            cart_items=items,
        )

    def with_status(self, status: str) -> "Order":
        return replace(self, order_status=status)

    def to_dict(self) -> Dict[str, Any]:
        return {
            '_id': self.id,
            'fullName': self.full_name,
            'email': self.email,
            'phone': self.phone,
            'address': self.address,
            'city': self.city,
            'zipCode': self.zip_code,
            'totalPrice': self.total_price,
            'discountedPrice': self.discounted_price,
            'orderDate': self.order_date,
            'orderStatus': self.order_status,
            'cartItems': [item.to_dict() for item in self.cart_items],
        }


def parse_order_date(value) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp, including the trailing 'Z' form."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def format_order_date(value, fmt: str = '%m/%d/%Y') -> str:
    """Render an order date as a short date; unparseable values pass through."""
    parsed = parse_order_date(value)
    if parsed is None:
        return '' if value is None else str(value)
    return parsed.strftime(fmt)
