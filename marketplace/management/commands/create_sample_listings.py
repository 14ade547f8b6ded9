"""
Sample listings and wanted requests for local development
"""
import random
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand

from marketplace.models import Product, WantedRequest

User = get_user_model()

SAMPLE_PRODUCTS = [
    ('Study table lamp', 'LED lamp with 3 brightness levels, used one semester.', '350'),
    ('Engineering Drawing kit', 'Mini drafter, set squares and compass. Complete set.', '500'),
    ('Cycle', 'Hero Sprint, 21 gears, new tyres last month.', '3200'),
    ('Mattress', 'Single bed foam mattress, hostel size.', '900'),
    ('Electric kettle', '1.5L, auto cut-off works fine.', '450'),
    ('Scientific calculator', 'Casio fx-991ES Plus, allowed in exams.', '700'),
    ('Blanket', 'Thick winter blanket, washed and clean.', '250'),
    ('Data Structures textbook', 'Cormen 3rd edition, some highlighting.', '600'),
]

SAMPLE_REQUESTS = [
    'Looking for a blanket under ₹200',
    'Need a second-hand cycle for the semester',
    'Anyone selling a Casio fx-991 calculator?',
    'Want a study lamp, budget ₹300',
]

PLACEHOLDER_IMAGE_URL = 'https://drive.google.com/file/d/1sampleCampusMarketImage/view?usp=sharing'


class Command(BaseCommand):
    help = 'Create sample listings and wanted requests for the first users'

    def add_arguments(self, parser):
        parser.add_argument('--count', type=int, default=len(SAMPLE_PRODUCTS))

    def handle(self, *args, **options):
        users = list(User.objects.filter(profile__isnull=False)[:5])
        if not users:
            self.stdout.write(self.style.ERROR('No users with a completed profile. Create one first.'))
            return

        created_count = 0

        for name, description, price in SAMPLE_PRODUCTS[:options['count']]:
            seller = random.choice(users)
            try:
                product = Product.objects.create(
                    seller=seller,
                    name=name,
                    description=description,
                    price=Decimal(price),
                    image_url=PLACEHOLDER_IMAGE_URL,
                    status=Product.AVAILABLE,
                )
            except Exception as e:
                self.stdout.write(self.style.ERROR(f'Failed to create {name}: {e}'))
                continue

            created_count += 1
            self.stdout.write(
                self.style.SUCCESS(f'{created_count}. {product.name} - ₹{product.price} - {seller.email}')
            )

        for text in SAMPLE_REQUESTS:
            WantedRequest.objects.create(user=random.choice(users), text=text)

        self.stdout.write(
            self.style.SUCCESS(
                f'\nCreated {created_count} listings and {len(SAMPLE_REQUESTS)} requests.'
            )
        )
