"""
Inventory Accounting
Keeps medicine stock and cumulative earnings in step with billed quantities
"""

from sqlalchemy.orm import Session
from decimal import Decimal
from typing import Tuple
import logging

from .. import config
from ..exceptions import NotFound, ValidationError
from ..models import Medicine
from ..utils.money import to_money

logger = logging.getLogger(__name__)


def apply_consumption(quantity: int, total_earnings, used: int, earned) -> Tuple[int, Decimal]:
    """New (quantity, total_earnings) after `used` units were billed for `earned`."""
    return quantity - used, to_money(to_money(total_earnings) + to_money(earned))


class InventoryService:
    """Service class for stock movements caused by billing"""

    @staticmethod
    def consume(db: Session, medicine_id: int, quantity: int, earnings_amount) -> Medicine:
        """
        Decrement stock and accrue earnings for one bill line.
        Runs inside the caller's transaction and does not commit.
        Not idempotent: call exactly once per medicine line.
        """
        medicine = db.query(Medicine).filter(Medicine.id == medicine_id).with_for_update().first()
        if not medicine:
            raise NotFound.for_entity("Medicine", medicine_id)

        new_quantity, new_earnings = apply_consumption(
            medicine.quantity or 0, medicine.total_earnings, quantity, earnings_amount
        )
        if new_quantity < 0:
            if not config.ALLOW_NEGATIVE_STOCK:
                raise ValidationError(
                    f"Insufficient stock for {medicine.name}: {medicine.quantity} on hand, {quantity} requested"
                )
            logger.warning("Medicine %s (%s) stock goes negative: %s", medicine.id, medicine.name, new_quantity)

        medicine.quantity = new_quantity
        medicine.total_earnings = new_earnings
        db.flush()

        logger.info("Consumed %s x medicine %s, earnings +%s", quantity, medicine_id, earnings_amount)
        return medicine
