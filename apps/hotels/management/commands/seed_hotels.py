"""Populate the database with demo users, hotels, rooms and bookings."""

import random
from datetime import timedelta
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from apps.bookings.models import Booking
from apps.hotels.models import Hotel
from apps.rooms.models import Room

User = get_user_model()

CITIES = [
    "Mumbai", "Delhi", "Bangalore", "Chennai", "Kolkata", "Hyderabad",
    "Pune", "Ahmedabad", "Jaipur", "Surat", "Lucknow", "Nagpur",
    "Indore", "Bhopal", "Patna", "Vadodara", "Agra", "Varanasi", "Srinagar",
]

HOTEL_NAMES = [
    "Grand Palace", "Royal Inn", "Luxury Suites", "Crown Plaza", "Golden Heights",
    "Silver Star", "Diamond Resort", "Emerald Hotel", "Sapphire Lodge", "Ruby Residency",
    "Pearl Continental", "Jade Palace", "Amber Hotel", "Crystal Resort", "Ivory Resort",
]

STREETS = ["MG Road", "Main Street", "Park Avenue", "Mall Road", "Station Road"]

PRICE_RANGES = {
    Room.RoomType.SINGLE: (1500, 3000),
    Room.RoomType.DOUBLE: (2500, 5000),
    Room.RoomType.SUITE: (5000, 8000),
    Room.RoomType.DELUXE: (4000, 7000),
    Room.RoomType.PRESIDENTIAL: (10000, 20000),
}

AMENITIES = [
    "Free WiFi", "Air Conditioning", "Room Service", "Mini Bar", "Television",
    "Balcony", "Sea View", "City View", "Jacuzzi", "Kitchenette",
    "Safe", "Workspace", "Complimentary Breakfast", "Spa Access", "Gym Access",
]

HOTEL_DESCRIPTIONS = [
    "A premier destination for luxury accommodation with world-class amenities.",
    "Experience unparalleled comfort and service in the heart of the city.",
    "Modern elegance meets traditional hospitality at our renowned establishment.",
]

ROOM_DESCRIPTIONS = [
    "Experience luxury and comfort in our beautifully appointed rooms.",
    "Spacious accommodations with stunning views and premium facilities.",
    "Elegant rooms designed for both business and leisure travelers.",
]

HOTEL_IMAGE = "https://images.unsplash.com/photo-1566073771259-6a8506099945?w=500&h=300&fit=crop"
ROOM_IMAGES = [
    "https://images.unsplash.com/photo-1631049307264-da0ec9d70304?w=500&h=300&fit=crop",
    "https://images.unsplash.com/photo-1582719478250-c89cae4dc85b?w=500&h=300&fit=crop",
]

ADMIN_EMAIL = "admin@hotelbooking.com"
ADMIN_PASSWORD = "admin123"


class Command(BaseCommand):
    help = "Seed demo users, hotels, rooms and bookings"

    def add_arguments(self, parser):
        parser.add_argument("--users", type=int, default=20)
        parser.add_argument("--hotels", type=int, default=50)
        parser.add_argument("--bookings", type=int, default=100)
        parser.add_argument("--seed", type=int, default=None, help="Random seed for repeatable data")
        parser.add_argument(
            "--flush",
            action="store_true",
            help="Delete existing bookings, rooms, hotels and non-superuser accounts first",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        rng = random.Random(options["seed"])

        if options["flush"]:
            self.stdout.write("Clearing existing data...")
            Booking.objects.all().delete()
            Room.objects.all().delete()
            Hotel.objects.all().delete()
            User.objects.filter(is_superuser=False).delete()

        if not User.objects.filter(email=ADMIN_EMAIL).exists():
            User.objects.create_user(
                email=ADMIN_EMAIL,
                name="Admin User",
                phone="+919876543210",
                password=ADMIN_PASSWORD,
                role=User.RoleChoices.ADMIN,
            )

        users = []
        for i in range(1, options["users"] + 1):
            user, created = User.objects.get_or_create(
                email=f"user{i}@example.com",
                defaults={"name": f"User {i}", "phone": f"+91{9000000000 + i}"},
            )
            if created:
                user.set_password(f"user{i}123")
                user.save(update_fields=["password"])
            users.append(user)

        rooms = []
        for _ in range(options["hotels"]):
            city = rng.choice(CITIES)
            hotel = Hotel.objects.create(
                name=f"{rng.choice(HOTEL_NAMES)} {city}",
                city=city,
                address=f"{rng.randint(1, 999)}, {rng.choice(STREETS)}, {city}",
                rating=Decimal(rng.randint(30, 50)) / 10,
                description=rng.choice(HOTEL_DESCRIPTIONS),
                image=HOTEL_IMAGE,
            )
            for _ in range(rng.randint(3, 7)):
                room_type = rng.choice(list(PRICE_RANGES))
                total = rng.randint(5, 14)
                rooms.append(Room.objects.create(
                    hotel=hotel,
                    type=room_type,
                    price=Decimal(rng.randint(*PRICE_RANGES[room_type])),
                    total_rooms=total,
                    available_rooms=rng.randint(1, total),
                    description=rng.choice(ROOM_DESCRIPTIONS),
                    amenities=rng.sample(AMENITIES, rng.randint(3, 10)),
                    images=ROOM_IMAGES,
                ))

        created_bookings = 0
        if users and rooms:
            today = timezone.localdate()
            for _ in range(options["bookings"]):
                room = rng.choice(rooms)
                check_in = today - timedelta(days=rng.randint(0, 59))
                check_out = check_in + timedelta(days=rng.randint(1, 7))
                status = rng.choice(Booking.Status.values)
                if status in Booking.ACTIVE_STATUSES:
                    booked = Booking.objects.active().filter(room=room).overlapping(check_in, check_out).count()
                    if booked >= room.total_rooms:
                        continue
                Booking.objects.create(
                    user=rng.choice(users),
                    room=room,
                    check_in=check_in,
                    check_out=check_out,
                    guests=rng.randint(1, 4),
                    total_price=room.price * (check_out - check_in).days,
                    status=status,
                )
                created_bookings += 1

        self.stdout.write(self.style.SUCCESS(
            f"Seeded {len(users)} users, {options['hotels']} hotels, "
            f"{len(rooms)} rooms and {created_bookings} bookings"
        ))
        self.stdout.write(f"Admin login: {ADMIN_EMAIL} / {ADMIN_PASSWORD}")
