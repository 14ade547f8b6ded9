from decimal import Decimal
from unittest import mock

from django.db import DatabaseError
from django.test import TestCase, override_settings
from rest_framework import status
from rest_framework.test import APIClient

from marketplace.models import Product, Negotiation
from marketplace.services import NegotiationError, accept_offer
from marketplace.views import NegotiationViewSet
from .utils import make_user, make_product


class NegotiationBaseTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.seller = make_user('seller@nitj.ac.in', name='Arjun')
        self.buyer = make_user('buyer@nitj.ac.in', name='Riya')
        self.other_buyer = make_user('other@nitj.ac.in')
        self.product = make_product(self.seller, name='Electric kettle', price='500')

    def offer(self, user, price, product=None):
        self.client.force_authenticate(user=user)
        return self.client.post('/api/negotiations/', {
            'product': (product or self.product).id,
            'offered_price': price,
        }, format='json')

    def respond(self, user, negotiation_id, verb):
        self.client.force_authenticate(user=user)
        return self.client.post(f'/api/negotiations/{negotiation_id}/{verb}/')


class ProposeOfferTestCase(NegotiationBaseTestCase):
    def test_offer_appears_in_both_inboxes(self):
        response = self.offer(self.buyer, '450')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'pending')
        self.assertEqual(response.data['offered_price'], '450.00')
        self.assertEqual(response.data['seller'], self.seller.id)
        self.assertIsNone(response.data['contact_info'])

        self.client.force_authenticate(user=self.seller)
        received = self.client.get('/api/negotiations/received/').data
        self.assertEqual([n['id'] for n in received], [response.data['id']])
        self.assertEqual(received[0]['buyer_name'], 'Riya')
        self.assertEqual(received[0]['product']['name'], 'Electric kettle')

        self.client.force_authenticate(user=self.buyer)
        sent = self.client.get('/api/negotiations/sent/').data
        self.assertEqual([n['id'] for n in sent], [response.data['id']])
        self.assertEqual(sent[0]['seller_name'], 'Arjun')

    def test_offer_above_asking_price_is_allowed(self):
        response = self.offer(self.buyer, '650')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'pending')

    def test_repeat_offers_allowed(self):
        self.offer(self.buyer, '400')
        self.offer(self.buyer, '420')

        self.assertEqual(Negotiation.objects.filter(buyer=self.buyer, product=self.product).count(), 2)

    def test_cannot_offer_on_own_product(self):
        response = self.offer(self.seller, '450')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('error', response.data)
        self.assertFalse(Negotiation.objects.exists())

    def test_cannot_offer_on_sold_product(self):
        sold = make_product(self.seller, name='Mattress', status=Product.SOLD)

        response = self.offer(self.buyer, '450', product=sold)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'This product has already been sold.')

    def test_negative_offer_rejected(self):
        response = self.offer(self.buyer, '-5')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('offered_price', response.data)

    def test_unknown_product(self):
        response = self.offer(self.buyer, '450', product=Product(id=99999))

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('product', response.data)


class RespondToOfferTestCase(NegotiationBaseTestCase):
    def setUp(self):
        super().setUp()
        self.negotiation_id = self.offer(self.buyer, '450').data['id']

    def test_accept_marks_product_sold(self):
        response = self.respond(self.seller, self.negotiation_id, 'accept')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'accepted')
        self.assertEqual(response.data['product']['status'], 'sold')

        negotiation = Negotiation.objects.get(id=self.negotiation_id)
        self.product.refresh_from_db()
        self.assertEqual(negotiation.status, Negotiation.ACCEPTED)
        self.assertIsNotNone(negotiation.responded_at)
        self.assertEqual(self.product.status, Product.SOLD)
        self.assertIsNotNone(self.product.sold_at)

        self.client.force_authenticate(user=self.other_buyer)
        catalog = self.client.get('/api/products/').data
        self.assertNotIn(self.product.id, [item['id'] for item in catalog])

    def test_reject_leaves_product_available(self):
        response = self.respond(self.seller, self.negotiation_id, 'reject')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'rejected')

        self.product.refresh_from_db()
        self.assertEqual(self.product.status, Product.AVAILABLE)

        self.client.force_authenticate(user=self.other_buyer)
        catalog = self.client.get('/api/products/').data
        self.assertIn(self.product.id, [item['id'] for item in catalog])

    def test_buyer_cannot_accept(self):
        response = self.respond(self.buyer, self.negotiation_id, 'accept')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(Negotiation.objects.get(id=self.negotiation_id).status, Negotiation.PENDING)

    def test_stranger_cannot_see_offer(self):
        response = self.respond(self.other_buyer, self.negotiation_id, 'reject')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_resolved_offer_is_final(self):
        self.respond(self.seller, self.negotiation_id, 'reject')

        response = self.respond(self.seller, self.negotiation_id, 'accept')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'This offer has already been rejected.')
        self.product.refresh_from_db()
        self.assertEqual(self.product.status, Product.AVAILABLE)

    def test_second_accept_on_sold_product_refused(self):
        competing_id = self.offer(self.other_buyer, '480').data['id']
        self.respond(self.seller, competing_id, 'accept')

        response = self.respond(self.seller, self.negotiation_id, 'accept')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Negotiation.objects.get(id=self.negotiation_id).status, Negotiation.PENDING)

    def test_accept_rolls_back_when_product_update_fails(self):
        with mock.patch('marketplace.services.Product.save', side_effect=DatabaseError('write failed')):
            with self.assertRaises(DatabaseError):
                accept_offer(self.negotiation_id, self.seller)

        negotiation = Negotiation.objects.get(id=self.negotiation_id)
        self.product.refresh_from_db()
        self.assertEqual(negotiation.status, Negotiation.PENDING)
        self.assertIsNone(negotiation.responded_at)
        self.assertEqual(self.product.status, Product.AVAILABLE)

    def test_accept_after_product_deleted(self):
        self.product.delete()

        with self.assertRaises(NegotiationError) as cm:
            accept_offer(self.negotiation_id, self.seller)

        self.assertEqual(cm.exception.status_code, status.HTTP_404_NOT_FOUND)

    def test_product_deleted_while_responding(self):
        real_get_object = NegotiationViewSet.get_object

        def get_then_delete(view):
            negotiation = real_get_object(view)
            Product.objects.filter(id=negotiation.product_id).delete()
            return negotiation

        with mock.patch.object(NegotiationViewSet, 'get_object', get_then_delete):
            response = self.respond(self.seller, self.negotiation_id, 'reject')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertIn('error', response.data)

    @override_settings(MARKETPLACE_CONTACT_NUMBER='+91 90000 00000')
    def test_contact_info_after_accept(self):
        self.respond(self.seller, self.negotiation_id, 'accept')

        self.client.force_authenticate(user=self.seller)
        seller_view = self.client.get(f'/api/negotiations/{self.negotiation_id}/').data
        self.assertEqual(
            seller_view['contact_info'],
            'Offer accepted! Contact +91 90000 00000 to complete the transaction and deliver the item.'
        )

        self.client.force_authenticate(user=self.buyer)
        buyer_view = self.client.get(f'/api/negotiations/{self.negotiation_id}/').data
        self.assertEqual(
            buyer_view['contact_info'],
            'Your offer was accepted! Contact +91 90000 00000 to complete the transaction and pick up the item.'
        )


class InboxFilterTestCase(NegotiationBaseTestCase):
    def test_status_filter(self):
        pending_id = self.offer(self.buyer, '400').data['id']
        rejected_id = self.offer(self.other_buyer, '300').data['id']
        self.respond(self.seller, rejected_id, 'reject')

        self.client.force_authenticate(user=self.seller)
        pending = self.client.get('/api/negotiations/received/', {'status': 'pending'}).data
        rejected = self.client.get('/api/negotiations/received/', {'status': 'rejected'}).data

        self.assertEqual([n['id'] for n in pending], [pending_id])
        self.assertEqual([n['id'] for n in rejected], [rejected_id])

    def test_received_excludes_own_offers(self):
        their_product = make_product(self.buyer, name='Blanket', price='250')
        self.offer(self.seller, '200', product=their_product)

        self.client.force_authenticate(user=self.seller)

        self.assertEqual(self.client.get('/api/negotiations/received/').data, [])
        self.assertEqual(len(self.client.get('/api/negotiations/sent/').data), 1)

    def test_offered_price_kept_as_decimal(self):
        negotiation_id = self.offer(self.buyer, '449.99').data['id']

        self.assertEqual(Negotiation.objects.get(id=negotiation_id).offered_price, Decimal('449.99'))
