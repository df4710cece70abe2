"""
SQLAlchemy ORM models shared by the lightfoot services.

Table and column names follow the restaurant's existing schema so the manager
screens and ad-hoc SQL keep working against the same database.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


class MenuItem(Base):
    __tablename__ = "menu_items"

    menu_item_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    item_type: Mapped[str] = mapped_column(String(32), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0"))

    info: Mapped[MenuItemInfo | None] = relationship(
        "MenuItemInfo", back_populates="menu_item", uselist=False, cascade="all, delete-orphan"
    )
    ingredient_usages: Mapped[list[MenuItemIngredient]] = relationship(
        "MenuItemIngredient", back_populates="menu_item", cascade="all, delete-orphan"
    )


class MenuItemInfo(Base):
    __tablename__ = "menu_items_info"

    menu_item_info_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    menu_item_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("menu_items.menu_item_id"), unique=True, nullable=False
    )
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    calories: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    protein: Mapped[Decimal] = mapped_column(Numeric(8, 2), nullable=False, default=Decimal("0"))
    carbohydrate: Mapped[Decimal] = mapped_column(
        Numeric(8, 2), nullable=False, default=Decimal("0")
    )
    saturated_fat: Mapped[Decimal] = mapped_column(
        Numeric(8, 2), nullable=False, default=Decimal("0")
    )
    spicy: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    premium: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    allergens: Mapped[str | None] = mapped_column(Text, nullable=True)

    menu_item: Mapped[MenuItem] = relationship("MenuItem", back_populates="info")


class Ingredient(Base):
    __tablename__ = "inventory"
    __table_args__ = (
        CheckConstraint("quantity_stock >= 0", name="chk_inventory_stock_non_negative"),
    )

    ingredient_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    quantity_stock: Mapped[Decimal] = mapped_column(
        Numeric(12, 3), nullable=False, default=Decimal("0")
    )
    unit: Mapped[str | None] = mapped_column(String(32), nullable=True)
    min_threshold: Mapped[Decimal] = mapped_column(
        Numeric(12, 3), nullable=False, default=Decimal("0")
    )
    max_threshold: Mapped[Decimal] = mapped_column(
        Numeric(12, 3), nullable=False, default=Decimal("0")
    )
    restock_quantity: Mapped[Decimal] = mapped_column(
        Numeric(12, 3), nullable=False, default=Decimal("0")
    )
    current_price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False, default=Decimal("0")
    )

    usages: Mapped[list[MenuItemIngredient]] = relationship(
        "MenuItemIngredient", back_populates="ingredient", cascade="all, delete-orphan"
    )


class MenuItemIngredient(Base):
    """How much of one ingredient a single unit of a menu item consumes."""

    __tablename__ = "menu_items_inventory"
    __table_args__ = (Index("ix_menu_items_inventory_item", "menu_item_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    menu_item_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("menu_items.menu_item_id"), nullable=False
    )
    ingredient_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("inventory.ingredient_id"), nullable=False
    )
    quantity_used: Mapped[Decimal] = mapped_column(Numeric(10, 3), nullable=False)
    unit: Mapped[str | None] = mapped_column(String(32), nullable=True)

    menu_item: Mapped[MenuItem] = relationship("MenuItem", back_populates="ingredient_usages")
    ingredient: Mapped[Ingredient] = relationship("Ingredient", back_populates="usages")


class Order(Base):
    __tablename__ = "orders"
    __table_args__ = (
        Index("ix_orders_timestamp", "timestamp"),
        Index("ix_orders_reportable", "reportable"),
    )

    order_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # 0 marks a kiosk order; kept as a plain column because 0 is not an employee row
    employee_id: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    timestamp: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    total: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    review: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    reportable: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    lines: Mapped[list[OrderLine]] = relationship(
        "OrderLine", back_populates="order", cascade="all, delete-orphan"
    )


class OrderLine(Base):
    __tablename__ = "menu_orders"
    __table_args__ = (Index("ix_menu_orders_order", "order_id"),)

    menu_order_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[int] = mapped_column(Integer, ForeignKey("orders.order_id"), nullable=False)
    # No foreign key: history outlives seasonal items removed from the menu
    menu_item_id: Mapped[int] = mapped_column(Integer, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    order: Mapped[Order] = relationship("Order", back_populates="lines")


class CurrentOrderLine(Base):
    """A component of an order that the kitchen has not finished yet."""

    __tablename__ = "currentorders"
    __table_args__ = (Index("ix_currentorders_order", "order_id"),)

    menu_order_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[int] = mapped_column(Integer, ForeignKey("orders.order_id"), nullable=False)
    menu_item_id: Mapped[int] = mapped_column(Integer, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    order_created: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    itemgroup: Mapped[int] = mapped_column(Integer, nullable=False)


class CompletedOrderLine(Base):
    __tablename__ = "completedorders"
    __table_args__ = (Index("ix_completedorders_completed_at", "completed_at"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[int] = mapped_column(Integer, nullable=False)
    order_created: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    menu_item_id: Mapped[int] = mapped_column(Integer, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    itemgroup: Mapped[int] = mapped_column(Integer, nullable=False)
    completed_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)


class Customer(Base):
    """Rewards account created on first kiosk login."""

    __tablename__ = "users"

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class Employee(Base):
    __tablename__ = "employee"

    employee_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(80), nullable=False)
    last_name: Mapped[str | None] = mapped_column(String(80), nullable=True)
    position: Mapped[str] = mapped_column(String(80), nullable=False, default="None")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    pin_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    role: Mapped[int] = mapped_column(Integer, nullable=False, default=-1)
    # Subject id issued by the external sign-in provider
    sub: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)


class UserRole(Base):
    __tablename__ = "user_roles"

    user_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    role: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    name: Mapped[str | None] = mapped_column(String(160), nullable=True)
