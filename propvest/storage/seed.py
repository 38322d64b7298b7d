# propvest/storage/seed.py
import logging

from propvest.core.security import get_password_hash

logger = logging.getLogger(__name__)

SAMPLE_PROPERTIES = [
    {
        "title": "2 Bed in Princess Tower, Dubai Marina",
        "location": "Princess Tower",
        "city": "Dubai",
        "bedrooms": 2,
        "price": "AED 1,823,000",
        "image_url": "https://images.unsplash.com/photo-1582407947304-fd6169a9d7e0?ixlib=rb-1.2.1&auto=format&fit=crop&w=800&h=400&q=80",
        "type": "Balanced",
        "funding_percentage": 80,
        "yearly_return": 10.08,
        "total_return": 50.42,
        "projected_yield": 5.40,
        "property_id": "908",
        "status": "Ready",
        "filter": "Available",
    },
    {
        "title": "1 Bed in Sky Gardens, DIFC",
        "location": "Sky Gardens",
        "city": "Dubai",
        "bedrooms": 1,
        "price": "AED 1,867,000",
        "image_url": "https://images.unsplash.com/photo-1560448204-603b3fc33ddc?ixlib=rb-1.2.1&auto=format&fit=crop&w=800&h=400&q=80",
        "type": "Balanced",
        "funding_percentage": 79,
        "yearly_return": 9.71,
        "total_return": 48.54,
        "projected_yield": 5.16,
        "property_id": "2711",
        "status": "Rented",
        "filter": "Available",
    },
    {
        "title": "Studio in Hartland Greens, MBR City",
        "location": "Hartland Greens",
        "city": "Dubai",
        "bedrooms": 0,
        "price": "AED 1,010,000",
        "image_url": "https://images.unsplash.com/photo-1512917774080-9991f1c4c750?ixlib=rb-1.2.1&auto=format&fit=crop&w=800&h=400&q=80",
        "type": "Capital Growth",
        "funding_percentage": 46,
        "yearly_return": 9.70,
        "total_return": 48.51,
        "projected_yield": 5.32,
        "property_id": "4112",
        "status": "Rented",
        "filter": "Available",
    },
    {
        "title": "3 Bed Townhouse, The Villa",
        "location": "The Villa",
        "city": "Dubai",
        "bedrooms": 3,
        "price": "AED 2,650,000",
        "image_url": "https://images.unsplash.com/photo-1512917774080-9991f1c4c750?ixlib=rb-1.2.1&auto=format&fit=crop&w=800&h=400&q=80",
        "type": "Capital Growth",
        "funding_percentage": 100,
        "yearly_return": 8.50,
        "total_return": 42.50,
        "projected_yield": 4.20,
        "property_id": "5243",
        "status": "Rented",
        "filter": "Funded",
    },
    {
        "title": "2 Bed in JBR, Dubai Marina",
        "location": "JBR",
        "city": "Dubai",
        "bedrooms": 2,
        "price": "AED 2,100,000",
        "image_url": "https://images.unsplash.com/photo-1493809842364-78817add7ffb?ixlib=rb-1.2.1&auto=format&fit=crop&w=800&h=400&q=80",
        "type": "Balanced",
        "funding_percentage": 100,
        "yearly_return": 10.20,
        "total_return": 51.00,
        "projected_yield": 5.50,
        "property_id": "3651",
        "status": "Rented",
        "filter": "Funded",
    },
    {
        "title": "1 Bed in Downtown, Burj Khalifa",
        "location": "Downtown",
        "city": "Dubai",
        "bedrooms": 1,
        "price": "AED 1,950,000",
        "image_url": "https://images.unsplash.com/photo-1577495508326-19a1b3cf65b9?ixlib=rb-1.2.1&auto=format&fit=crop&w=800&h=400&q=80",
        "type": "Balanced",
        "funding_percentage": 0,
        "yearly_return": 9.80,
        "total_return": 49.00,
        "projected_yield": 5.10,
        "property_id": "7823",
        "status": "Exited",
        "filter": "Exited",
    },
]

DEMO_USERS = [
    {
        "username": "admin",
        "password": "admin123",
        "role": "admin",
        "full_name": "System Admin",
        "email": "admin@example.com",
        "phone_number": "123456789",
    },
    {
        "username": "client",
        "password": "client123",
        "role": "user",
        "full_name": "Demo Client",
        "email": "client@example.com",
        "phone_number": "987654321",
    },
]


def seed_demo_users(storage):
    """Create the demo admin and client accounts that do not exist yet."""
    created = []
    for demo in DEMO_USERS:
        if storage.get_user_by_username(demo["username"]):
            continue
        data = dict(demo, password=get_password_hash(demo["password"]))
        user = storage.create_user(data)
        logger.info("Created demo %s account %r", user.role, user.username)
        created.append(user)
    return created
