"""
Marketplace Models
"""
from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models


class Product(models.Model):
    """A listing put up for sale by a student"""

    AVAILABLE = 'available'
    SOLD = 'sold'

    STATUS_CHOICES = [
        (AVAILABLE, 'Available'),
        (SOLD, 'Sold'),
    ]

    seller = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='products')

    name = models.CharField(max_length=200)
    description = models.TextField()
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal('0'))])

    image = models.ImageField(upload_to='product-images', null=True, blank=True, max_length=255)
    image_url = models.URLField(max_length=500)

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=AVAILABLE)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    sold_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'products'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status', '-created_at'], name='products_status_created_idx'),
        ]

    def __str__(self):
        return f"{self.name} - {self.seller}"

    @property
    def is_available(self):
        return self.status == self.AVAILABLE


class Negotiation(models.Model):
    """A buyer's offer on a product; only the seller may resolve it"""

    PENDING = 'pending'
    ACCEPTED = 'accepted'
    REJECTED = 'rejected'

    STATUS_CHOICES = [
        (PENDING, 'Pending'),
        (ACCEPTED, 'Accepted'),
        (REJECTED, 'Rejected'),
    ]

    product = models.ForeignKey(Product, on_delete=models.CASCADE, related_name='negotiations')
    buyer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='sent_negotiations')
    seller = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='received_negotiations')
    offered_price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal('0'))])
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=PENDING)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    responded_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'negotiations'
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.buyer} -> {self.product.name} ({self.offered_price}, {self.status})"

    @property
    def is_pending(self):
        return self.status == self.PENDING


class WantedRequest(models.Model):
    """Free-text "looking for ..." post on the request board"""

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='wanted_requests')
    text = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'requests'
        ordering = ['-created_at']
        verbose_name = 'request'
        verbose_name_plural = 'requests'

    def __str__(self):
        return f"{self.user}: {self.text[:40]}"
