"""
Orders Admin Routes
===================

HTML screen plus a small JSON API over the per-session OrderScreen.
"""

from flask import render_template, request, redirect, url_for, session, jsonify, flash, abort, current_app

from ..dashboard.utils import admin_required
from . import orders_bp
from .models import ORDER_STATUSES, FILTER_OPTIONS, status_label
from .screen import DELETE_PROMPT


def _flash(note):
    """Show a notification (title and text) on the next render"""
    if note:
        flash({'title': note['title'], 'text': note['text']}, note['icon'])


def _get_screen():
    """Current operator's screen, mounted (fetched) on first use"""
    registry = current_app.extensions['orderdesk'].screens
    screen_id, screen, created = registry.get_or_create(session.get('screen_id'))
    session['screen_id'] = screen_id
    if created:
        _flash(screen.mount())
    return screen


def _back_to_list():
    return redirect(url_for('orders_admin.orders_manager'))


@orders_bp.route('/')
@admin_required
def orders_manager():
    """Order management page"""
    screen = _get_screen()

    status = request.args.get('status')
    if status:
        try:
            screen.set_filter(status)
        except ValueError:
            flash(f'Unknown status filter: {status}', 'error')

    return render_template(
        'orders/orders_manager.html',
        screen=screen,
        orders=screen.filtered_orders(),
        filter_options=FILTER_OPTIONS,
        statuses=ORDER_STATUSES,
        status_label=status_label,
    )


@orders_bp.route('/<order_id>/toggle', methods=['POST'])
@admin_required
def toggle_order(order_id):
    """Expand or collapse an order's detail row"""
    _get_screen().toggle_order_details(order_id)
    return _back_to_list()


@orders_bp.route('/<order_id>/status', methods=['POST'])
@admin_required
def change_status(order_id):
    """Change an order's status from the row dropdown"""
    new_status = request.form.get('new_status', '')
    if new_status not in ORDER_STATUSES:
        abort(400, description=f'Unknown order status: {new_status}')

    _flash(_get_screen().change_status(order_id, new_status))
    return _back_to_list()


@orders_bp.route('/<order_id>/delete', methods=['GET'])
@admin_required
def confirm_delete(order_id):
    """Blocking confirmation prompt before a delete"""
    screen = _get_screen()
    return render_template(
        'orders/confirm_delete.html',
        order_id=order_id,
        order=screen.get_order(order_id),
        prompt=DELETE_PROMPT,
    )


@orders_bp.route('/<order_id>/delete', methods=['POST'])
@admin_required
def delete_order(order_id):
    """Delete an order once the prompt has been confirmed"""
    confirmed = request.form.get('confirm') == 'yes'
    _flash(_get_screen().delete_order(order_id, confirmed=confirmed))
    return _back_to_list()


@orders_bp.route('/refresh', methods=['POST'])
@admin_required
def refresh_orders():
    """Re-fetch all orders from the content store"""
    _flash(_get_screen().refresh())
    return _back_to_list()


# ---------------------------------------------------------------------------
# JSON API
# ---------------------------------------------------------------------------

@orders_bp.route('/api/orders')
@admin_required(api=True)
def api_orders():
    """List orders, optionally filtered by ?status="""
    screen = _get_screen()
    status = request.args.get('status') or screen.filter
    if status not in FILTER_OPTIONS:
        return jsonify({'success': False, 'error': f'Unknown status filter: {status}'}), 400

    return jsonify({
        'success': True,
        'loaded': screen.loaded,
        'filter': status,
        'orders': [order.to_dict() for order in screen.filtered_orders(status)],
    })


@orders_bp.route('/api/update-status', methods=['POST'])
@admin_required(api=True)
def api_update_status():
    """Update one order's status"""
    data = request.get_json(silent=True) or {}
    order_id = data.get('order_id')
    new_status = data.get('status')

    if not order_id:
        return jsonify({'success': False, 'error': 'Order ID required'}), 400
    if new_status not in ORDER_STATUSES:
        return jsonify({'success': False, 'error': f'Unknown order status: {new_status}'}), 400

    screen = _get_screen()
    note = screen.change_status(order_id, new_status)
    if note['icon'] != 'success':
        return jsonify({'success': False, 'error': note['text'], 'notification': note}), 502

    order = screen.get_order(order_id)
    return jsonify({
        'success': True,
        'message': note['text'],
        'notification': note,
        'order': order.to_dict() if order else None,
    })


@orders_bp.route('/api/delete-order', methods=['POST'])
@admin_required(api=True)
def api_delete_order():
    """Delete an order; the caller has already confirmed"""
    data = request.get_json(silent=True) or {}
    order_id = data.get('order_id')

    if not order_id:
        return jsonify({'success': False, 'error': 'Order ID required'}), 400

    note = _get_screen().delete_order(order_id, confirmed=True)
    if note['icon'] != 'success':
        return jsonify({'success': False, 'error': note['text'], 'notification': note}), 502

    return jsonify({'success': True, 'message': note['text'], 'notification': note})
