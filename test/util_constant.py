# Routes
USER_BASE = '/api/users'
USER_LOGIN = '/api/users/login'
USER_ME = '/api/users/me'
FLIGHT_BASE = '/api/flights'
FLIGHT_SEARCH = '/api/flights/search'
FLIGHT_ROUTES = '/api/flights/routes'
SEAT_BASE = '/api/seats'
BOOKING_BASE = '/api/bookings'
BOOKING_MINE = '/api/bookings/mine'
BOOKING_CONFIRM_PAYMENT = '/api/bookings/confirm-payment'

# Users
DEFAULT_PASSWORD = 'P@ssw0rd'
ADMIN_EMAIL = 'admin@example.com'
ADMIN_NAME = 'Admin User'
CUSTOMER_EMAIL = 'customer@example.com'
CUSTOMER_NAME = 'Ana Lopez'
ANOTHER_CUSTOMER_EMAIL = 'another@example.com'
ANOTHER_CUSTOMER_NAME = 'Luis Perez'

# Flights
DEFAULT_FLIGHT_NUMBER = 'AM-1234'
DEFAULT_PRICE = 1000
DEFAULT_CAPACITY = 12
MEX = {'city': 'Mexico City', 'code': 'MEX', 'name': 'Benito Juarez International'}
CUN = {'city': 'Cancun', 'code': 'CUN', 'name': 'Cancun International'}
GDL = {'city': 'Guadalajara', 'code': 'GDL', 'name': 'Miguel Hidalgo y Costilla'}
