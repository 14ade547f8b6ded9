"""
Marketplace API Views
"""
import logging

from django.db import transaction, DatabaseError
from django.db.models import Q
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import viewsets, mixins, status, filters
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from accounts.permissions import HasCompletedProfile
from .models import Product, Negotiation, WantedRequest
from .permissions import IsOwnerOrReadOnly
from .serializers import (
    ProductSerializer, ProductWriteSerializer,
    NegotiationSerializer, NegotiationCreateSerializer,
    WantedRequestSerializer,
)
from .services import NegotiationError, propose_offer, accept_offer, reject_offer
from .utils.image_upload import upload_product_image, delete_product_image

logger = logging.getLogger(__name__)


class ProductViewSet(viewsets.ModelViewSet):
    """
    list    - catalog: available products from other sellers, newest first
    mine    - the viewer's own listings, any status
    create  - new listing (multipart, image required)
    update  - edit own listing, image optional
    destroy - delete own listing
    """
    permission_classes = [IsAuthenticated, HasCompletedProfile, IsOwnerOrReadOnly]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['status']
    search_fields = ['name', 'description']
    ordering_fields = ['price', 'created_at']
    ordering = ['-created_at']

    def get_queryset(self):
        user = self.request.user
        queryset = Product.objects.select_related('seller', 'seller__profile')

        if self.action == 'list':
            return queryset.filter(status=Product.AVAILABLE).exclude(seller=user)
        if self.action == 'mine':
            return queryset.filter(seller=user)

        # detail routes: anything still on sale, plus everything the viewer owns
        return queryset.filter(Q(status=Product.AVAILABLE) | Q(seller=user))

    def get_serializer_class(self):
        if self.action in ('create', 'update', 'partial_update'):
            return ProductWriteSerializer
        return ProductSerializer

    def list(self, request, *args, **kwargs):
        try:
            queryset = list(self.filter_queryset(self.get_queryset()))
        except DatabaseError as e:
            logger.error(f"Error fetching products: {e}")
            return Response([])

        serializer = ProductSerializer(queryset, many=True, context=self.get_serializer_context())
        return Response(serializer.data)

    @action(detail=False, methods=['get'], url_path='mine')
    def mine(self, request):
        """Own listings for the sell page"""
        queryset = self.filter_queryset(self.get_queryset())
        serializer = ProductSerializer(queryset, many=True, context=self.get_serializer_context())
        return Response(serializer.data)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        image = serializer.validated_data.pop('image')
        stored_name, image_url = upload_product_image(image, request.user)
        if not stored_name:
            return Response(
                {'error': 'Failed to upload image. Please try again.'},
                status=status.HTTP_400_BAD_REQUEST
            )

        try:
            with transaction.atomic():
                product = Product.objects.create(
                    seller=request.user,
                    image=stored_name,
                    image_url=request.build_absolute_uri(image_url),
                    status=Product.AVAILABLE,
                    **serializer.validated_data
                )
        except Exception:
            logger.exception(f"Product insert failed for user {request.user.id}; removing uploaded image")
            delete_product_image(stored_name)
            raise

        logger.info(f"Product {product.id} listed by user {request.user.id} at {product.price}")
        data = ProductSerializer(product, context=self.get_serializer_context()).data
        return Response(data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()

        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        image = serializer.validated_data.pop('image', None)
        previous_image = instance.image.name if instance.image else None
        stored_name = None

        if image:
            stored_name, image_url = upload_product_image(image, request.user)
            if not stored_name:
                return Response(
                    {'error': 'Failed to upload image. Please try again.'},
                    status=status.HTTP_400_BAD_REQUEST
                )
            instance.image = stored_name
            instance.image_url = request.build_absolute_uri(image_url)

        for field, value in serializer.validated_data.items():
            setattr(instance, field, value)

        try:
            with transaction.atomic():
                instance.save()
        except Exception:
            if stored_name:
                logger.exception(f"Product {instance.id} update failed; removing uploaded image")
                delete_product_image(stored_name)
            raise

        if image and previous_image:
            delete_product_image(previous_image)

        logger.info(f"Product {instance.id} updated by user {request.user.id}")
        return Response(ProductSerializer(instance, context=self.get_serializer_context()).data)

    def perform_destroy(self, instance):
        stored_name = instance.image.name if instance.image else None
        product_id = instance.id

        instance.delete()
        delete_product_image(stored_name)

        logger.info(f"Product {product_id} deleted by user {self.request.user.id}")


class NegotiationViewSet(mixins.CreateModelMixin,
                         mixins.RetrieveModelMixin,
                         viewsets.GenericViewSet):
    """
    create   - buyer proposes a price
    received - offers on the viewer's products
    sent     - offers the viewer has made
    accept / reject - seller resolves a pending offer
    """
    serializer_class = NegotiationSerializer
    permission_classes = [IsAuthenticated, HasCompletedProfile]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['status']

    def get_queryset(self):
        user = self.request.user
        return Negotiation.objects.filter(
            Q(buyer=user) | Q(seller=user)
        ).select_related('product', 'buyer__profile', 'seller__profile').order_by('-created_at')

    def create(self, request, *args, **kwargs):
        serializer = NegotiationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            negotiation = propose_offer(
                product=serializer.validated_data['product'],
                buyer=request.user,
                offered_price=serializer.validated_data['offered_price'],
            )
        except NegotiationError as e:
            return Response({'error': e.message}, status=e.status_code)

        data = self.get_serializer(negotiation).data
        return Response(data, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['get'], url_path='received')
    def received(self, request):
        """Seller inbox"""
        queryset = self.filter_queryset(self.get_queryset().filter(seller=request.user))
        return Response(self.get_serializer(queryset, many=True).data)

    @action(detail=False, methods=['get'], url_path='sent')
    def sent(self, request):
        """Buyer outbox"""
        queryset = self.filter_queryset(self.get_queryset().filter(buyer=request.user))
        return Response(self.get_serializer(queryset, many=True).data)

    @action(detail=True, methods=['post'], url_path='accept')
    def accept(self, request, pk=None):
        return self._respond(request, accept_offer)

    @action(detail=True, methods=['post'], url_path='reject')
    def reject(self, request, pk=None):
        return self._respond(request, reject_offer)

    def _respond(self, request, handler):
        negotiation = self.get_object()

        try:
            negotiation = handler(negotiation.pk, request.user)
        except NegotiationError as e:
            return Response({'error': e.message}, status=e.status_code)

        return Response(self.get_serializer(negotiation).data)


class WantedRequestViewSet(mixins.ListModelMixin,
                           mixins.CreateModelMixin,
                           mixins.DestroyModelMixin,
                           viewsets.GenericViewSet):
    """Wanted-item board: everyone reads, only the author deletes"""
    queryset = WantedRequest.objects.select_related('user__profile').order_by('-created_at')
    serializer_class = WantedRequestSerializer
    permission_classes = [IsAuthenticated, HasCompletedProfile, IsOwnerOrReadOnly]

    def perform_create(self, serializer):
        wanted = serializer.save(user=self.request.user)
        logger.info(f"Request {wanted.id} posted by user {self.request.user.id}")

    def perform_destroy(self, instance):
        wanted_id = instance.id
        instance.delete()
        logger.info(f"Request {wanted_id} deleted by user {self.request.user.id}")
