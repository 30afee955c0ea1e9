"""
Konfiguration och konstanter för gångruttplaneraren
"""

# Standardvärden
DEFAULT_PACE = 6.0  # min/km
DEFAULT_CENTER = [51.5074, -0.1278]  # London
DEFAULT_ROUTE_NAME = "Min rutt"

# API URLs
ROUTES_API_URL = "https://routes.googleapis.com/directions/v2:computeRoutes"
ELEVATION_API_URL = "https://maps.googleapis.com/maps/api/elevation/json"
NOMINATIM_BASE_URL = "https://nominatim.openstreetmap.org"
USER_AGENT = "RunRoutePlanner/1.0"

# Routing-inställningar
TRAVEL_MODE = "WALK"
REQUEST_TIMEOUT = 30  # sekunder, gäller directions och elevation
ELEVATION_MAX_SAMPLES = 100
ELEVATION_UNKNOWN = "Elevation Unknown"

# Geokodning
GEOCODE_CACHE_SIZE = 100
GEOCODE_TIMEOUT = 5  # sekunder

# Polyline
POLYLINE_PRECISION = 1e5

# Sparade rutter
MAX_SAVED_ROUTES = 5
ROUTES_STORAGE_KEY = "saved_walking_routes"
ROUTES_STORAGE_PATH = "saved_routes.json"
