"""
Negotiation workflow.

    pending --accept--> accepted   (product becomes sold in the same transaction)
    pending --reject--> rejected

accepted and rejected are terminal.
"""
import logging

from django.conf import settings
from django.db import transaction
from django.utils import timezone
from rest_framework import status

from .models import Product, Negotiation

logger = logging.getLogger(__name__)


class NegotiationError(Exception):
    """Refused workflow step; carries the HTTP status the API should answer with."""

    def __init__(self, message, status_code=status.HTTP_400_BAD_REQUEST):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def propose_offer(product, buyer, offered_price):
    """
    Create a pending offer. The asking price is not compared against the
    offer and repeated offers on the same product are allowed.
    """
    if product.seller_id == buyer.id:
        raise NegotiationError('You cannot make an offer on your own product.')

    if not product.is_available:
        raise NegotiationError('This product has already been sold.')

    negotiation = Negotiation.objects.create(
        product=product,
        buyer=buyer,
        seller_id=product.seller_id,
        offered_price=offered_price,
        status=Negotiation.PENDING,
    )

    logger.info(
        f"Offer {negotiation.id} proposed: buyer={buyer.id} product={product.id} "
        f"offered={offered_price} asking={product.price}"
    )
    return negotiation


def _lock_pending_for_seller(negotiation_id, seller):
    try:
        negotiation = (
            Negotiation.objects.select_for_update()
            .select_related('product')
            .get(pk=negotiation_id)
        )
    except Negotiation.DoesNotExist:
        # product (and its offers) deleted after the view looked the offer up
        raise NegotiationError('This offer no longer exists.', status_code=status.HTTP_404_NOT_FOUND)

    if negotiation.seller_id != seller.id:
        raise NegotiationError(
            'Only the seller can respond to this offer.',
            status_code=status.HTTP_403_FORBIDDEN
        )

    if not negotiation.is_pending:
        raise NegotiationError(f'This offer has already been {negotiation.status}.')

    return negotiation


def accept_offer(negotiation_id, seller):
    """
    Accept an offer and mark its product sold. Both rows change together or
    not at all.
    """
    with transaction.atomic():
        negotiation = _lock_pending_for_seller(negotiation_id, seller)
        product = Product.objects.select_for_update().get(pk=negotiation.product_id)

        if not product.is_available:
            raise NegotiationError('This product has already been sold.')

        now = timezone.now()

        negotiation.status = Negotiation.ACCEPTED
        negotiation.responded_at = now
        negotiation.save(update_fields=['status', 'responded_at', 'updated_at'])

        product.status = Product.SOLD
        product.sold_at = now
        product.save(update_fields=['status', 'sold_at', 'updated_at'])

    negotiation.product = product
    logger.info(f"Offer {negotiation.id} accepted; product {product.id} marked sold")
    return negotiation


def reject_offer(negotiation_id, seller):
    """Reject an offer. The product is left untouched."""
    with transaction.atomic():
        negotiation = _lock_pending_for_seller(negotiation_id, seller)

        negotiation.status = Negotiation.REJECTED
        negotiation.responded_at = timezone.now()
        negotiation.save(update_fields=['status', 'responded_at', 'updated_at'])

    logger.info(f"Offer {negotiation.id} rejected by seller {seller.id}")
    return negotiation


def contact_message(negotiation, viewer):
    """Off-platform contact line shown to both parties of an accepted offer."""
    if negotiation.status != Negotiation.ACCEPTED:
        return None

    number = settings.MARKETPLACE_CONTACT_NUMBER
    if viewer is not None and viewer.id == negotiation.seller_id:
        return f"Offer accepted! Contact {number} to complete the transaction and deliver the item."
    return f"Your offer was accepted! Contact {number} to complete the transaction and pick up the item."
