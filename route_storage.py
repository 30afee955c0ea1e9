"""
Lokal lagring av sparade rutter i en JSON-fil
"""

import json
import logging
import os
import time
import uuid
from typing import Any, Dict, List

from config import MAX_SAVED_ROUTES, ROUTES_STORAGE_KEY, ROUTES_STORAGE_PATH
from models import SavedRoute

logger = logging.getLogger(__name__)


class RouteStorage:
    """
    Enkel nyckel-värde-lagring med alla rutter som en JSON-blob

    Lagringen har ingen kapacitetsgräns; den sätts av SavedRoutes.
    """

    def __init__(self, path: str = ROUTES_STORAGE_PATH, key: str = ROUTES_STORAGE_KEY):
        self.path = path
        self.key = key

    def _read(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _write_routes(self, routes: List[SavedRoute]):
        try:
            blob = self._read()
        except ValueError as e:
            logger.warning("Overwriting unreadable route store %s: %s", self.path, e)
            blob = {}
        if not isinstance(blob, dict):
            blob = {}
        blob[self.key] = [route.to_dict() for route in routes]
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(blob, f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, self.path)

    def list(self) -> List[SavedRoute]:
        """
        Hämta sparade rutter

        Returns:
            Rutter, senast sparade först. Tom lista om filen saknas eller är trasig.
        """
        try:
            raw = self._read().get(self.key) or []
            return [SavedRoute.from_dict(item) for item in raw]
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.error("Error reading saved routes from %s: %s", self.path, e)
            return []

    def save(self, route_data: Dict[str, Any]) -> SavedRoute:
        """
        Spara en ny rutt först i listan

        Args:
            route_data: SavedRoute-fält utan id och created_at

        Returns:
            Den sparade rutten med genererat id och tidsstämpel
        """
        route = SavedRoute(
            id=uuid.uuid4().hex,
            created_at=int(time.time() * 1000),
            **route_data
        )
        self._write_routes([route] + self.list())
        logger.info("Saved route %s (%s)", route.id, route.name)
        return route

    def delete(self, route_id: str):
        routes = [route for route in self.list() if route.id != route_id]
        self._write_routes(routes)
        logger.info("Deleted route %s", route_id)


class SavedRoutes:
    """Håller listan över sparade rutter och begränsar den till max_routes"""

    def __init__(self, storage: RouteStorage, max_routes: int = MAX_SAVED_ROUTES):
        self.storage = storage
        self.max_routes = max_routes
        self.routes: List[SavedRoute] = []

    @property
    def count(self) -> int:
        return len(self.routes)

    def load(self) -> List[SavedRoute]:
        self.routes = self.storage.list()
        return self.routes

    def get(self, route_id: str) -> SavedRoute:
        for route in self.routes:
            if route.id == route_id:
                return route
        raise KeyError(route_id)

    def save(self, route_data: Dict[str, Any]) -> SavedRoute:
        """Spara och ta bort de äldsta rutterna utöver max_routes"""
        new_route = self.storage.save(route_data)
        routes = self.storage.list()
        for evicted in routes[self.max_routes:]:
            self.storage.delete(evicted.id)
        self.routes = routes[:self.max_routes]
        return new_route

    def delete(self, route_id: str):
        self.storage.delete(route_id)
        self.routes = [route for route in self.routes if route.id != route_id]
