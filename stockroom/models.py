from datetime import datetime

from stockroom.extensions import db

# Largest value an SQLite INTEGER column can hold.
MAX_QUANTITY = 2**63 - 1


class TransactionType:
    INBOUND = "Inbound"
    OUTBOUND = "Outbound"
    ADJUSTMENT = "Adjustment"

    ALL_TYPES = [INBOUND, OUTBOUND, ADJUSTMENT]


class Location(db.Model):
    __tablename__ = "location"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)

    def __repr__(self) -> str:
        return f"<Location {self.id} {self.name!r}>"


class Item(db.Model):
    __tablename__ = "item"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)  # system key, never reused
    sku = db.Column(db.String(64), unique=True, nullable=False)  # scanner-facing code
    name = db.Column(db.String, nullable=False)
    category = db.Column(db.String, nullable=False)
    # Soft reference: locations can be removed while items still point at them.
    location_id = db.Column(db.Integer, nullable=True, index=True)
    quantity = db.Column(db.Integer, nullable=False, default=0)
    opening_quantity = db.Column(db.Integer, nullable=False, default=0)
    min_stock = db.Column(db.Integer, nullable=False, default=0)
    description = db.Column(db.Text, nullable=False, default="")
    image_url = db.Column(db.String, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.min_stock

    def __repr__(self) -> str:
        return f"<Item {self.sku}>"


class StockTransaction(db.Model):
    __tablename__ = "stock_transaction"
    __table_args__ = (
        db.CheckConstraint(
            "(type != 'Inbound') OR (quantity_change > 0)",
            name="ck_stock_transaction_inbound_positive",
        ),
        db.CheckConstraint(
            "(type != 'Outbound') OR (quantity_change < 0)",
            name="ck_stock_transaction_outbound_negative",
        ),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)
    item_id = db.Column(
        db.Integer, db.ForeignKey("item.id"), nullable=False, index=True
    )
    type = db.Column(db.String(16), nullable=False)
    quantity_change = db.Column(db.Integer, nullable=False)
    timestamp = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    notes = db.Column(db.Text, nullable=True)

    item = db.relationship("Item")

    def __repr__(self) -> str:
        return f"<StockTransaction {self.type} {self.quantity_change:+d} item={self.item_id}>"
