"""
Lightfoot API - Modular Blueprint Structure

Each module handles the endpoints of one screen family. Sub-blueprints are
registered without a url_prefix; every route spells out its full path.
"""

from flask import Blueprint

# Create main API blueprint
api_bp = Blueprint("api", __name__)

# Import and register sub-blueprints
from .completed_orders import completed_orders_bp  # noqa: E402
from .customers import customers_bp  # noqa: E402
from .employees import employees_bp  # noqa: E402
from .inventory import inventory_bp  # noqa: E402
from .item_usage import item_usage_bp  # noqa: E402
from .items import items_bp  # noqa: E402
from .kiosk import kiosk_bp  # noqa: E402
from .kitchen import kitchen_bp  # noqa: E402
from .orders import orders_bp  # noqa: E402
from .reviews import reviews_bp  # noqa: E402
from .sales_report import sales_report_bp  # noqa: E402
from .seasonal import seasonal_bp  # noqa: E402
from .users import users_bp  # noqa: E402

api_bp.register_blueprint(items_bp)
api_bp.register_blueprint(kiosk_bp)
api_bp.register_blueprint(kitchen_bp)
api_bp.register_blueprint(completed_orders_bp)
api_bp.register_blueprint(inventory_bp)
api_bp.register_blueprint(orders_bp)
api_bp.register_blueprint(employees_bp)
api_bp.register_blueprint(users_bp)
api_bp.register_blueprint(customers_bp)
api_bp.register_blueprint(seasonal_bp)
api_bp.register_blueprint(reviews_bp)
api_bp.register_blueprint(item_usage_bp)
api_bp.register_blueprint(sales_report_bp)
