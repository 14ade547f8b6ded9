from decimal import Decimal
from io import BytesIO

from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image

from accounts.models import Profile
from marketplace.models import Product

User = get_user_model()


def make_user(email, with_profile=True, name=None):
    user = User.objects.create_user(email=email, password='campus-pass-123')
    if with_profile:
        Profile.objects.create(
            user=user,
            name=name or email.split('@')[0].title(),
            hostel='BH-3',
            room='214',
            gender='Male',
            branch='CSE',
        )
    return user


def make_product(seller, name='Study lamp', price='500', status=Product.AVAILABLE, **extra):
    return Product.objects.create(
        seller=seller,
        name=name,
        description=extra.pop('description', 'Barely used, works fine.'),
        price=Decimal(price),
        image_url=extra.pop('image_url', 'https://cdn.example.com/product-images/lamp.png'),
        status=status,
        **extra
    )


def make_image(name='item.png', color='blue'):
    buffer = BytesIO()
    Image.new('RGB', (16, 16), color).save(buffer, format='PNG')
    return SimpleUploadedFile(name, buffer.getvalue(), content_type='image/png')
