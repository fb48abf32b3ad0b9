"""Customer aggregate: an account holder and the ledger behind its balance.

The running balance is never edited directly. Every order lifecycle
transition posts signed ``LedgerEntry`` records tagged with the order that
caused them, and ``current_balance`` is kept equal to their sum. Cancelling
or amending an order therefore reverses exactly that order's entries,
regardless of what other orders were applied to the account since.

Sign convention: a positive balance is money the customer owes the
business; a negative balance is money the business owes the customer.
"""

from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, HasMany, Identifier, Integer, String

from ordering.domain import ordering
from ordering.ledger.money import ZERO, format_amount, to_amount


class EntryKind(Enum):
    CHARGE = "CHARGE"  # Bottles sold on an order
    PAYMENT = "PAYMENT"  # Money received on delivery or walk-in completion
    SETTLEMENT = "SETTLEMENT"  # Clear-bill payment in either direction
    REVERSAL = "REVERSAL"  # Undoes earlier entries of the same order


@ordering.entity(part_of="Customer")
class LedgerEntry:
    """A signed movement of the customer's balance caused by one order."""

    order_id = Identifier(required=True)
    kind = String(choices=EntryKind, required=True)
    amount = String(required=True, max_length=32)  # signed decimal
    sequence = Integer(required=True, min_value=1)
    recorded_at = DateTime(required=True)


@ordering.aggregate
class Customer:
    """A person or household buying bottles, with a running account balance."""

    name = String(required=True, max_length=255)
    phone = String(max_length=50)
    house_no = String(max_length=100)
    street_no = String(max_length=100)
    area = String(max_length=255)
    city = String(max_length=100)
    current_balance = String(max_length=32, default="0.00")
    is_active = Boolean(default=True)
    is_walkin = Boolean(default=False)
    entries = HasMany(LedgerEntry)
    registered_at = DateTime()

    @invariant.post
    def balance_matches_ledger(self):
        posted = sum((to_amount(e.amount) for e in self.entries), ZERO)
        if to_amount(self.current_balance) != posted:
            raise ValidationError(
                {"current_balance": [f"Balance {self.current_balance} does not match ledger total {posted}"]}
            )

    @classmethod
    def register(
        cls,
        name,
        phone=None,
        house_no=None,
        street_no=None,
        area=None,
        city=None,
        is_walkin=False,
    ):
        from ordering.customer.events import CustomerRegistered

        now = datetime.now(UTC)
        customer = cls(
            name=name,
            phone=phone,
            house_no=house_no,
            street_no=street_no,
            area=area,
            city=city,
            is_walkin=is_walkin,
            current_balance=format_amount(ZERO),
            registered_at=now,
        )
        customer.raise_(
            CustomerRegistered(
                customer_id=str(customer.id),
                name=name,
                is_walkin=is_walkin,
                registered_at=now,
            )
        )
        return customer

    # -------------------------------------------------------------------
    # Balance
    # -------------------------------------------------------------------
    @property
    def balance(self) -> Decimal:
        return to_amount(self.current_balance)

    def net_effect_of(self, order_id) -> Decimal:
        """Sum of every entry this order has posted to the account."""
        return sum(
            (to_amount(e.amount) for e in self.entries if str(e.order_id) == str(order_id)),
            ZERO,
        )

    def post(self, order_id, kind: EntryKind, amount) -> LedgerEntry:
        """Post a signed entry and move the balance by the same amount."""
        amount = to_amount(amount)
        entry = LedgerEntry(
            order_id=str(order_id),
            kind=kind.value,
            amount=format_amount(amount),
            sequence=len(self.entries) + 1,
            recorded_at=datetime.now(UTC),
        )
        with atomic_change(self):
            self.add_entries(entry)
            self.current_balance = format_amount(self.balance + amount)
        return entry

    def reverse(self, order_id) -> LedgerEntry | None:
        """Undo everything an order has posted. Returns None if it nets to zero."""
        net = self.net_effect_of(order_id)
        if net == ZERO:
            return None
        return self.post(order_id, EntryKind.REVERSAL, -net)

    def entries_for(self, order_id) -> list[LedgerEntry]:
        return sorted(
            (e for e in self.entries if str(e.order_id) == str(order_id)),
            key=lambda e: e.sequence,
        )

    # -------------------------------------------------------------------
    # Account status
    # -------------------------------------------------------------------
    def formatted_address(self) -> str:
        parts = [self.house_no, self.street_no, self.area, self.city]
        return " ".join(p for p in parts if p) or "Address not provided"

    def deactivate(self):
        from ordering.customer.events import CustomerDeactivated

        if not self.is_active:
            raise ValidationError({"is_active": ["Customer is already inactive"]})
        self.is_active = False
        self.raise_(CustomerDeactivated(customer_id=str(self.id), deactivated_at=datetime.now(UTC)))

    def reactivate(self):
        from ordering.customer.events import CustomerReactivated

        if self.is_active:
            raise ValidationError({"is_active": ["Customer is already active"]})
        self.is_active = True
        self.raise_(CustomerReactivated(customer_id=str(self.id), reactivated_at=datetime.now(UTC)))
