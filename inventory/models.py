"""
Inventory — Models

Current stock of one medicine at one pharmacy. Rows are upserted by the
pharmacist; the stock status is always derived from the quantity.

@file inventory/models.py
"""

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from core.constants import LOW_STOCK_THRESHOLD, MAX_STOCK_QUANTITY
from core.models import BaseModel
from pharmacies.models import Pharmacy


class InventoryQuerySet(models.QuerySet):

    def available(self):
        """Not out of stock, at a pharmacy patients can see."""
        return (
            self.filter(pharmacy__in=Pharmacy.objects.visible_to_patients())
            .exclude(status=InventoryEntry.StockStatus.OUT_OF_STOCK)
        )


class InventoryEntry(BaseModel):
    """Unique per (pharmacy, medicine)."""

    class StockStatus(models.TextChoices):
        IN_STOCK = 'In Stock', _('In Stock')
        LOW_STOCK = 'Low Stock', _('Low Stock')
        OUT_OF_STOCK = 'Out of Stock', _('Out of Stock')

    pharmacy = models.ForeignKey(
        'pharmacies.Pharmacy',
        on_delete=models.CASCADE,
        related_name='inventory',
        verbose_name=_('pharmacy'),
    )
    medicine = models.ForeignKey(
        'medicines.Medicine',
        on_delete=models.CASCADE,
        related_name='inventory_entries',
        verbose_name=_('medicine'),
    )
    quantity = models.PositiveIntegerField(
        _('quantity'), default=0,
        validators=[MaxValueValidator(MAX_STOCK_QUANTITY)],
    )
    price = models.DecimalField(
        _('unit price'), max_digits=8, decimal_places=2,
        validators=[MinValueValidator(0)],
    )
    status = models.CharField(
        _('status'), max_length=12,
        choices=StockStatus.choices,
        default=StockStatus.OUT_OF_STOCK,
        db_index=True,
    )

    objects = InventoryQuerySet.as_manager()

    class Meta:
        verbose_name = _('inventory entry')
        verbose_name_plural = _('inventory entries')
        ordering = ['medicine__name']
        constraints = [
            models.UniqueConstraint(
                fields=['pharmacy', 'medicine'],
                name='unique_inventory_pharmacy_medicine',
            ),
            models.CheckConstraint(
                condition=models.Q(quantity__lte=MAX_STOCK_QUANTITY),
                name='inventory_quantity_within_bounds',
            ),
        ]

    def __str__(self):
        return f'{self.medicine_id} @ {self.pharmacy_id}: {self.quantity} ({self.status})'

    @classmethod
    def status_for_quantity(cls, quantity: int) -> str:
        """0 is Out of Stock, 1..4 Low Stock, 5 and above In Stock."""
        if quantity <= 0:
            return cls.StockStatus.OUT_OF_STOCK
        if quantity < LOW_STOCK_THRESHOLD:
            return cls.StockStatus.LOW_STOCK
        return cls.StockStatus.IN_STOCK
