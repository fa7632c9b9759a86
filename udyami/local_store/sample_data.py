"""Deterministic seed data for an empty local store."""

BUYER_USER = {
    "phone_number": "919876543210",
    "name": "Amit Sharma",
    "role": "buyer",
    "language": "en",
    "location": "Bangalore",
}

PAINTER_USER = {
    "phone_number": "919876543211",
    "name": "Ravi Kumar",
    "role": "seller",
    "language": "en",
    "location": "Mumbai",
}

PLUMBER_USER = {
    "phone_number": "919876543212",
    "name": "Priya Sharma",
    "role": "seller",
    "language": "en",
    "location": "Delhi",
}

PAINTER_SELLER = {
    "name": "Ravi Kumar",
    "skills": ["painting", "wall_design"],
    "rating": 4.8,
    "location": "Bangalore",
    "followers": 156,
    "bio": "Professional painter with 5 years of experience",
    "verified": True,
}

PLUMBER_SELLER = {
    "name": "Priya Sharma",
    "skills": ["plumbing", "electrical"],
    "rating": 4.6,
    "location": "Delhi",
    "followers": 89,
    "bio": "Expert plumber and electrician with 3 years experience",
    "verified": True,
}

# buyer_id is filled in at seed time
BUYER_JOBS = [
    {
        "title": "Living Room Paint Job",
        "description": (
            "Need to paint living room and bedroom walls with quality paint. "
            "Includes wall preparation and primer."
        ),
        "skill": "painting",
        "budget_min": 15000,
        "budget_max": 20000,
        "timeline": "3 days",
        "location": "Koramangala, Bangalore",
        "posted_by": "Amit Sharma",
    },
    {
        "title": "Kitchen Plumbing Repair",
        "description": "Fix leaking pipes and install new faucet in kitchen. Emergency repair needed.",
        "skill": "plumbing",
        "budget_min": 8000,
        "budget_max": 12000,
        "timeline": "1 day",
        "location": "Whitefield, Bangalore",
        "posted_by": "Amit Sharma",
    },
    {
        "title": "Custom Wooden Furniture",
        "description": "Design and build custom dining table and chairs for 6 people.",
        "skill": "carpentry",
        "budget_min": 35000,
        "budget_max": 45000,
        "timeline": "2 weeks",
        "location": "Indiranagar, Bangalore",
        "posted_by": "Amit Sharma",
    },
]

# seller_id is filled in at seed time
PAINTER_SERVICES = [
    {
        "title": "Interior Wall Painting",
        "description": "Professional interior painting with premium quality paints and finish.",
        "price": "Starting ₹50/sq ft",
        "category": "Painting",
    },
    {
        "title": "Custom Wall Designs",
        "description": "Creative wall designs including texture painting and artistic patterns.",
        "price": "Starting ₹200/sq ft",
        "category": "Painting",
    },
    {
        "title": "Color Consultation",
        "description": "Professional color consultation for your home interior design.",
        "price": "₹2,000 per consultation",
        "category": "Design",
    },
]

PLUMBER_SERVICES = [
    {
        "title": "Plumbing Repair",
        "description": "Complete plumbing repair and maintenance services.",
        "price": "Starting ₹300/hour",
        "category": "Plumbing",
    },
    {
        "title": "Electrical Installation",
        "description": "Professional electrical installation and wiring services.",
        "price": "Starting ₹500/hour",
        "category": "Electrical",
    },
]

# Demonstration users seeded on the backend API when it is reachable
REMOTE_DEMO_USERS = [
    {
        "phone_number": "919876543210",
        "name": "Test Buyer",
        "role": "buyer",
        "language": "en",
        "location": "Bangalore",
    },
    {
        "phone_number": "919876543211",
        "name": "Test Seller",
        "role": "seller",
        "language": "en",
        "location": "Mumbai",
    },
]
