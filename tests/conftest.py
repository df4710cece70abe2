from decimal import Decimal

import pytest
from sqlalchemy import event, func, select

from lightfoot_api.app import create_app
from lightfoot_shared.db import dispose_engine, get_session
from lightfoot_shared.models import Ingredient, MenuItem, MenuItemIngredient, MenuItemInfo
from lightfoot_shared.schemas import KioskOrderRequest
from lightfoot_shared.services.order_service import submit_kiosk_order


@pytest.fixture
def app(monkeypatch):
    """App bound to a fresh in-memory SQLite database."""
    monkeypatch.setenv("DATABASE_URL", "sqlite://")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    for name in ("LOAD_SEED_DATA", "NUM_PROXIES", "CORS_ALLOWED_ORIGINS", "BUSINESS_TIMEZONE"):
        monkeypatch.delenv(name, raising=False)

    dispose_engine()
    app = create_app()
    app.config["TESTING"] = True
    yield app
    dispose_engine()


@pytest.fixture
def client(app):
    return app.test_client()


def _ingredient(name, stock, unit, minimum, maximum):
    return Ingredient(
        name=name,
        quantity_stock=Decimal(stock),
        unit=unit,
        min_threshold=Decimal(minimum),
        max_threshold=Decimal(maximum),
        restock_quantity=Decimal("5"),
        current_price=Decimal("1.00"),
    )


@pytest.fixture
def menu(app):
    """
    A small menu and inventory. Returns ids by short name.

    white_rice: 10 lbs (min 2, max 20), 2 lbs per rice side
    lo_mein_noodles: 10 lbs (min 2, max 20), 1 lb per chow mein
    chicken_breast: 1 lb (min 5, max 30), 0.5 lb per orange chicken
    cups: 100 (min 10, max 200), 1 per drink
    """
    with get_session() as session:
        rice = _ingredient("white_rice", "10", "lbs", "2", "20")
        noodles = _ingredient("lo_mein_noodles", "10", "lbs", "2", "20")
        chicken = _ingredient("chicken_breast", "1", "lbs", "5", "30")
        cups = _ingredient("cups", "100", "each", "10", "200")
        session.add_all([rice, noodles, chicken, cups])

        bowl = MenuItem(name="Bowl", item_type="MEAL", price=Decimal("8.30"))
        rice_side = MenuItem(name="White Steamed Rice", item_type="SIDE", price=Decimal("0"))
        rice_side.info = MenuItemInfo(
            name="White Steamed Rice",
            calories=380,
            protein=Decimal("7"),
            carbohydrate=Decimal("87"),
            saturated_fat=Decimal("0"),
        )
        rice_side.ingredient_usages.append(
            MenuItemIngredient(ingredient=rice, quantity_used=Decimal("2"), unit="lbs")
        )
        chow_mein = MenuItem(name="Chow Mein", item_type="SIDE", price=Decimal("0"))
        chow_mein.ingredient_usages.append(
            MenuItemIngredient(ingredient=noodles, quantity_used=Decimal("1"), unit="lbs")
        )
        orange_chicken = MenuItem(name="Orange Chicken", item_type="ENTREE", price=Decimal("0"))
        orange_chicken.info = MenuItemInfo(
            name="Orange Chicken",
            calories=490,
            protein=Decimal("25"),
            carbohydrate=Decimal("51"),
            saturated_fat=Decimal("5"),
            spicy=True,
            allergens="Wheat, Soy",
        )
        orange_chicken.ingredient_usages.append(
            MenuItemIngredient(ingredient=chicken, quantity_used=Decimal("0.5"), unit="lbs")
        )
        small = MenuItem(name="Small", item_type="LACARTE", price=Decimal("5.20"))
        medium = MenuItem(name="Medium", item_type="LACARTE", price=Decimal("8.50"))
        large = MenuItem(name="Large", item_type="LACARTE", price=Decimal("11.20"))
        drink = MenuItem(name="Fountain Drink", item_type="DRINK", price=Decimal("2.10"))
        drink.ingredient_usages.append(
            MenuItemIngredient(ingredient=cups, quantity_used=Decimal("1"), unit="each")
        )
        items = [bowl, rice_side, chow_mein, orange_chicken, small, medium, large, drink]
        session.add_all(items)
        session.flush()

        return {
            "bowl": bowl.menu_item_id,
            "rice_side": rice_side.menu_item_id,
            "chow_mein": chow_mein.menu_item_id,
            "orange_chicken": orange_chicken.menu_item_id,
            "small": small.menu_item_id,
            "medium": medium.menu_item_id,
            "large": large.menu_item_id,
            "drink": drink.menu_item_id,
            "rice": rice.ingredient_id,
            "noodles": noodles.ingredient_id,
            "chicken": chicken.ingredient_id,
            "cups": cups.ingredient_id,
        }


@pytest.fixture
def stock():
    """Current stock of an ingredient as a float."""

    def read(ingredient_id):
        with get_session() as session:
            return float(session.get(Ingredient, ingredient_id).quantity_stock)

    return read


@pytest.fixture
def count_rows():
    def count(model, *criteria):
        with get_session() as session:
            return session.scalar(select(func.count()).select_from(model).where(*criteria))

    return count


@pytest.fixture
def bowl_order(menu):
    """Kiosk payload for one Bowl with a rice side and orange chicken."""
    return {
        "order": {"MEAL": [{"menu_item_id": menu["bowl"], "name": "Bowl"}]},
        "groupedOrder": [
            {
                "type": "MEAL",
                "groupNum": 1,
                "meal": {"menu_item_id": menu["bowl"]},
                "sides": [{"menu_item_id": menu["rice_side"]}],
                "entrees": [{"menu_item_id": menu["orange_chicken"]}],
            }
        ],
        "total": "8.30",
        "rating": 4,
    }


@pytest.fixture
def place_bowl_order(bowl_order):
    def place():
        return submit_kiosk_order(KioskOrderRequest.model_validate(bowl_order))

    return place


@pytest.fixture
def fail_on_write():
    """
    Make the Nth ORM write of a model raise while its session is flushing.

    Earlier statements in the same transaction have already reached the
    database when the error fires, so the caller's rollback is what keeps the
    data unchanged.
    """
    installed = []

    def install(model, identifier="after_insert", on_call=1):
        calls = {"count": 0}

        def fail(mapper, connection, target):
            calls["count"] += 1
            if calls["count"] >= on_call:
                raise RuntimeError(f"{model.__tablename__} write failed")

        event.listen(model, identifier, fail)
        installed.append((model, identifier, fail))

    yield install

    for model, identifier, listener in installed:
        event.remove(model, identifier, listener)
