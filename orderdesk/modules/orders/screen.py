"""
Order Management Screen
=======================

View state for the admin orders table: the fetched orders, the status
filter and the expanded detail row. Remote calls go through an injected
content store client; local state only changes after the store confirms.
"""

import logging
import threading
import time
import uuid

from ...core.logging_service import LoggingService
from .models import Order, ORDER_STATUSES, FILTER_ALL, FILTER_OPTIONS

logger = logging.getLogger(__name__)

ORDERS_QUERY = """*[_type == "order"]{
  _id, fullName, phone, email, address, city, zipCode, totalPrice,
  discountedPrice, orderDate, orderStatus, cartItems[]->{ productName, image }
}"""

DELETE_PROMPT = {
    'title': 'Are you sure?',
    'text': "You won't be able to revert this!",
    'icon': 'warning',
    'show_cancel_button': True,
    'confirm_button_text': 'Yes, delete it!',
    'cancel_button_text': 'Cancel',
}


def notification(title, text, icon):
    """Dismiss-only dialog payload"""
    return {'title': title, 'text': text, 'icon': icon}


class OrderScreen:
    """State and handlers behind the order management table"""

    def __init__(self, store=None, confirm=None, store_factory=None):
        """
        Args:
            store: Content store client (fetch / patch / delete)
            confirm: Callable taking a prompt dict and returning True to proceed.
                Without one, delete_order() must be called with `confirmed`.
            store_factory: Builds the client on first remote call when no
                store is given; a failure there is reported like a failed call.
        """
        self.store = store
        self.store_factory = store_factory
        self.confirm = confirm
        self.orders = []
        self.filter = FILTER_ALL
        self.selected_order_id = None
        self.loaded = False
        # Guards local state only; never held across a remote call
        self._lock = threading.Lock()

    def _get_store(self):
        if self.store is None:
            if self.store_factory is None:
                raise RuntimeError("OrderScreen has no content store")
            self.store = self.store_factory()
        return self.store

    # ------------------------------------------------------------------
    # Fetch
    # ------------------------------------------------------------------

    def mount(self):
        """Initial fetch when the screen is first shown"""
        return self.load()

    def load(self):
        """Fetch all orders and replace the local list.

        Returns None on success, or an error notification. On failure the
        previous list is kept.
        """
        try:
            documents = self._get_store().fetch(ORDERS_QUERY)
            orders = [Order.from_document(doc) for doc in (documents or [])]
        except Exception as e:
            LoggingService.log_error_with_traceback('orders', e, {'action': 'fetch_orders'})
            return notification('Error', 'Could not load orders', 'error')

        with self._lock:
            self.orders = orders
            self.loaded = True
        logger.debug("Loaded %d orders", len(orders))
        return None

    def refresh(self):
        """Manual re-fetch, used to recover from drift against the store"""
        return self.load()

    # ------------------------------------------------------------------
    # Local view state
    # ------------------------------------------------------------------

    def set_filter(self, value):
        if value not in FILTER_OPTIONS:
            raise ValueError(f"Unknown status filter: {value!r}")
        self.filter = value

    def filtered_orders(self, status_filter=None):
        """Orders matching the current filter (or `status_filter` when given)"""
        status_filter = status_filter or self.filter
        orders = self.orders
        if status_filter == FILTER_ALL:
            return list(orders)
        return [order for order in orders if order.order_status == status_filter]

    def toggle_order_details(self, order_id):
        with self._lock:
            self.selected_order_id = None if self.selected_order_id == order_id else order_id
            return self.selected_order_id

    def selected_order(self):
        selected = self.selected_order_id
        if selected is None:
            return None
        return self.get_order(selected)

    def get_order(self, order_id):
        for order in self.orders:
            if order.id == order_id:
                return order
        return None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def change_status(self, order_id, new_status):
        """Set an order's status in the store, then patch the local entry."""
        if new_status not in ORDER_STATUSES:
            raise ValueError(f"Unknown order status: {new_status!r}")

        try:
            self._get_store().patch(order_id).set({'orderStatus': new_status}).commit()
        except Exception as e:
            LoggingService.log_error_with_traceback('orders', e, {
                'action': 'update_status',
                'order_id': order_id,
                'status': new_status,
            })
            return notification('Error', 'Something went wrong while updating the status', 'error')

        with self._lock:
            self.orders = [
                order.with_status(new_status) if order.id == order_id else order
                for order in self.orders
            ]
        LoggingService.log_user_action('orders', 'update_status', details={
            'order_id': order_id,
            'status': new_status,
        })
        return notification('Success', 'Order status updated successfully', 'success')

    def delete_order(self, order_id, confirmed=None):
        """Delete an order after confirmation.

        Returns None when the operator cancels (no request is sent),
        otherwise a success or error notification.
        """
        if confirmed is None:
            if self.confirm is None:
                raise RuntimeError("delete_order needs a confirm callback or an explicit decision")
            confirmed = bool(self.confirm(dict(DELETE_PROMPT)))
        if not confirmed:
            return None

        try:
            self._get_store().delete(order_id)
        except Exception as e:
            LoggingService.log_error_with_traceback('orders', e, {
                'action': 'delete_order',
                'order_id': order_id,
            })
            return notification('Error!', 'Something went wrong while deleting.', 'error')

        with self._lock:
            self.orders = [order for order in self.orders if order.id != order_id]
            if self.selected_order_id == order_id:
                self.selected_order_id = None
        LoggingService.log_user_action('orders', 'delete_order', details={'order_id': order_id})
        return notification('Deleted!', 'Your order has been deleted.', 'success')


class ScreenRegistry:
    """One OrderScreen per operator session.

    Screens idle for longer than `idle_timeout` seconds are dropped, and the
    least recently used ones go first once `max_screens` is reached.
    """

    def __init__(self, store_factory, idle_timeout=3600, max_screens=100, clock=time.monotonic):
        self.store_factory = store_factory
        self.idle_timeout = idle_timeout
        self.max_screens = max_screens
        self.clock = clock
        self._screens = {}
        self._last_used = {}
        self._lock = threading.Lock()

    def _drop(self, screen_id):
        self._screens.pop(screen_id, None)
        self._last_used.pop(screen_id, None)

    def _expire_idle(self, now):
        if self.idle_timeout:
            for screen_id, used in list(self._last_used.items()):
                if now - used > self.idle_timeout:
                    self._drop(screen_id)

    def _make_room(self):
        if self.max_screens:
            while self._screens and len(self._screens) >= self.max_screens:
                self._drop(min(self._last_used, key=self._last_used.get))

    def get_or_create(self, screen_id=None):
        """Returns (screen_id, screen, created)"""
        with self._lock:
            now = self.clock()
            self._expire_idle(now)
            if screen_id and screen_id in self._screens:
                self._last_used[screen_id] = now
                return screen_id, self._screens[screen_id], False

            self._make_room()
            screen_id = screen_id or uuid.uuid4().hex
            screen = OrderScreen(store_factory=self.store_factory)
            self._screens[screen_id] = screen
            self._last_used[screen_id] = now
            return screen_id, screen, True

    def discard(self, screen_id):
        with self._lock:
            self._drop(screen_id)

    def __contains__(self, screen_id):
        return screen_id in self._screens

    def __len__(self):
        return len(self._screens)
