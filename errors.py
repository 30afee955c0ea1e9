"""
Feltyper för ruttplaneraren

Hårda fel (MissingLocations, RouteApiError, RouteNotFound, NetworkError)
avbryter en ruttförfrågan och visas för användaren. Mjuka fel
(ElevationUnavailable, GeocodeUnavailable) fångas internt och ersätts
med platshållare.
"""


class RoutePlannerError(Exception):
    """Basklass för alla fel i ruttplaneraren"""

    title = "Error"
    default_message = "Something went wrong"

    def __init__(self, message: str = ""):
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingLocations(RoutePlannerError):
    title = "Missing Information"
    default_message = "Please set both origin and destination locations."


class RouteApiError(RoutePlannerError):
    """Directions-tjänsten svarade med ett strukturerat fel"""

    title = "Route Error"
    default_message = "Failed to calculate route"


class RouteNotFound(RoutePlannerError):
    title = "Route Not Found"
    default_message = (
        "No walking route could be found between these locations. "
        "Please try different locations."
    )


class NetworkError(RoutePlannerError):
    title = "Network Error"
    default_message = (
        "Failed to fetch walking route. "
        "Please check your internet connection and try again."
    )


class ElevationUnavailable(RoutePlannerError):
    default_message = "Elevation data unavailable"


class GeocodeUnavailable(RoutePlannerError):
    default_message = "Reverse geocoding failed"


class PolylineDecodeError(RoutePlannerError, ValueError):
    default_message = "Malformed encoded polyline"
