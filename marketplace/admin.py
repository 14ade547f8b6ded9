from django.contrib import admin

from .models import Product, Negotiation, WantedRequest


class NegotiationInline(admin.TabularInline):
    model = Negotiation
    fk_name = 'product'
    extra = 0
    fields = ['buyer', 'offered_price', 'status', 'created_at', 'responded_at']
    readonly_fields = ['created_at', 'responded_at']


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'price', 'seller', 'status', 'get_buyer_info', 'created_at']
    list_filter = ['status']
    search_fields = ['name', 'description', 'seller__email']
    readonly_fields = ['created_at', 'updated_at', 'sold_at']
    inlines = [NegotiationInline]

    def get_buyer_info(self, obj):
        """Buyer of the accepted offer, once sold"""
        if obj.status == Product.SOLD:
            accepted_offer = obj.negotiations.filter(status=Negotiation.ACCEPTED).select_related('buyer').first()
            if accepted_offer:
                return f"{accepted_offer.buyer.email} (₹{accepted_offer.offered_price})"
        return '-'
    get_buyer_info.short_description = 'Buyer'


@admin.register(Negotiation)
class NegotiationAdmin(admin.ModelAdmin):
    list_display = ['id', 'product', 'buyer', 'seller', 'offered_price', 'status', 'created_at']
    list_filter = ['status']
    search_fields = ['product__name', 'buyer__email', 'seller__email']
    readonly_fields = ['created_at', 'updated_at', 'responded_at']
    raw_id_fields = ['product', 'buyer', 'seller']


@admin.register(WantedRequest)
class WantedRequestAdmin(admin.ModelAdmin):
    list_display = ['id', 'user', 'short_text', 'created_at']
    search_fields = ['text', 'user__email']
    readonly_fields = ['created_at']

    def short_text(self, obj):
        return obj.text[:60]
    short_text.short_description = 'Text'
