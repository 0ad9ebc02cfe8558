# Test Utility Constants

# Callers (identity comes from the X-User-Id / X-User-Role headers)
ADMIN_ID = 'admin-1'
STAFF_ID = 'staff-1'
ORGANIZER_USER_ID = 'organizer-user-1'
BUYER_ID = 'buyer-1'
ANOTHER_BUYER_ID = 'buyer-2'

# Organizer application
ORGANIZATION_NAME = 'Sunset Productions'
ORGANIZATION_EMAIL = 'hello@sunset.example'

# Event
EVENT_TITLE = 'Summer Festival'
EVENT_LOCATION = 'Riverside Park'
EVENT_CATEGORY = 'music'
EVENT_PRICE = '150.00'
EVENT_TOTAL_TICKETS = 250

# Ticket type
PISTA = 'Pista'
PISTA_TOTAL = 250
PISTA_AVAILABLE = 200

BUYER_PAYLOAD = {
    'name': 'Ana Souza',
    'email': 'ana@example.com',
    'age': 28,
    'gender': 'female',
    'city': 'Recife',
    'purchase_channel': 'mobile',
}
