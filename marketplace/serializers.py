"""
Marketplace Serializers
"""
from decimal import Decimal

from rest_framework import serializers

from .models import Product, Negotiation, WantedRequest
from .services import contact_message
from .utils.drive_url import convert_google_drive_url
from .utils.time_ago import format_time_ago


def _display_name(user):
    profile = getattr(user, 'profile', None)
    return profile.name if profile else user.email


def _viewer(serializer):
    request = serializer.context.get('request')
    if request and request.user.is_authenticated:
        return request.user
    return None


class ProductSerializer(serializers.ModelSerializer):
    """Listing as shown in the catalog and on the seller's own page"""
    seller_name = serializers.SerializerMethodField()
    display_image_url = serializers.SerializerMethodField()
    is_mine = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            'id', 'seller', 'seller_name', 'name', 'description', 'price',
            'image_url', 'display_image_url', 'status', 'is_mine',
            'created_at', 'updated_at', 'sold_at',
        ]
        read_only_fields = fields

    def get_seller_name(self, obj):
        return _display_name(obj.seller)

    def get_display_image_url(self, obj):
        return convert_google_drive_url(obj.image_url)

    def get_is_mine(self, obj):
        viewer = _viewer(self)
        return viewer is not None and obj.seller_id == viewer.id


class ProductWriteSerializer(serializers.ModelSerializer):
    """Create / edit form. The image is required on create and optional on edit."""
    image = serializers.ImageField(required=False, write_only=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0'))

    class Meta:
        model = Product
        fields = ['name', 'description', 'price', 'image']

    def validate(self, attrs):
        if self.instance is None and not attrs.get('image'):
            raise serializers.ValidationError({'image': 'Please upload an image'})
        return attrs


class NegotiationProductSerializer(serializers.ModelSerializer):
    display_image_url = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = ['id', 'name', 'description', 'price', 'image_url', 'display_image_url', 'status']
        read_only_fields = fields

    def get_display_image_url(self, obj):
        return convert_google_drive_url(obj.image_url)


class NegotiationSerializer(serializers.ModelSerializer):
    """Offer with its product embedded, for the inbox"""
    product = NegotiationProductSerializer(read_only=True)
    product_id = serializers.IntegerField(read_only=True)
    buyer_name = serializers.SerializerMethodField()
    seller_name = serializers.SerializerMethodField()
    contact_info = serializers.SerializerMethodField()

    class Meta:
        model = Negotiation
        fields = [
            'id', 'product_id', 'product', 'buyer', 'buyer_name', 'seller', 'seller_name',
            'offered_price', 'status', 'contact_info', 'created_at', 'responded_at',
        ]
        read_only_fields = fields

    def get_buyer_name(self, obj):
        return _display_name(obj.buyer)

    def get_seller_name(self, obj):
        return _display_name(obj.seller)

    def get_contact_info(self, obj):
        return contact_message(obj, _viewer(self))


class NegotiationCreateSerializer(serializers.Serializer):
    product = serializers.PrimaryKeyRelatedField(queryset=Product.objects.select_related('seller'))
    offered_price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0'))


class WantedRequestSerializer(serializers.ModelSerializer):
    user_name = serializers.SerializerMethodField()
    time_ago = serializers.SerializerMethodField()
    is_mine = serializers.SerializerMethodField()

    class Meta:
        model = WantedRequest
        fields = ['id', 'user', 'user_name', 'text', 'created_at', 'time_ago', 'is_mine']
        read_only_fields = ['id', 'user', 'user_name', 'created_at', 'time_ago', 'is_mine']

    def validate_text(self, value):
        if not value or not value.strip():
            raise serializers.ValidationError('Tell us what you are looking for.')
        return value.strip()

    def get_user_name(self, obj):
        return _display_name(obj.user)

    def get_time_ago(self, obj):
        return format_time_ago(obj.created_at)

    def get_is_mine(self, obj):
        viewer = _viewer(self)
        return viewer is not None and obj.user_id == viewer.id
