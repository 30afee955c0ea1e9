"""
Huvudapplikation för Streamlit gångruttplanerare
"""

import logging
import streamlit as st
from streamlit_folium import st_folium
from datetime import datetime

# Importera moduler
from config import DEFAULT_CENTER, DEFAULT_PACE, DEFAULT_ROUTE_NAME, ROUTES_STORAGE_PATH
from errors import RoutePlannerError
from geocoding import GeocodeCache, geocode_address
from map_utils import create_map
from models import Location
from route_storage import RouteStorage, SavedRoutes
from routing import RouteSession
from routing_providers import GoogleElevationProvider, GoogleRoutesProvider
from stats import RouteStatsCalculator
from utils import create_gpx, format_pace, parse_pace

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

ADDRESS_KEYS = ("origin", "destination", "waypoint")


@st.cache_resource
def get_geocode_cache() -> GeocodeCache:
    """En geokodningscache per process"""
    return GeocodeCache()


def create_session() -> RouteSession:
    api_key = st.secrets["GOOGLE_MAPS_API_KEY"]
    return RouteSession(
        GoogleRoutesProvider(api_key),
        RouteStatsCalculator(GoogleElevationProvider(api_key)),
        pace=DEFAULT_PACE
    )


def init_session_state():
    """Initiera session state"""
    if "route_session" not in st.session_state:
        st.session_state.route_session = create_session()
    if "saved_routes" not in st.session_state:
        saved = SavedRoutes(RouteStorage(ROUTES_STORAGE_PATH))
        saved.load()
        st.session_state.saved_routes = saved
    if "map_click_mode" not in st.session_state:
        st.session_state.map_click_mode = "origin"
    if "last_click" not in st.session_state:
        st.session_state.last_click = None
    if "last_addresses" not in st.session_state:
        st.session_state.last_addresses = {}


def show_error(error: RoutePlannerError):
    st.error(f"**{error.title}**: {error.message}")


def run_route_request(session: RouteSession):
    """Hämta rutt och visa eventuella fel"""
    token = session.begin_request()
    with st.spinner("Beräknar rutt..."):
        try:
            session.request_route(token)
        except RoutePlannerError as e:
            show_error(e)


def address_input(label: str, key: str, session: RouteSession):
    """Textfält som geokodar en adress och sätter start eller mål"""
    address = st.text_input(label, key=f"{key}_address")
    if address and address != st.session_state.last_addresses.get(key):
        with st.spinner("Söker adress..."):
            location = geocode_address(address)
        st.session_state.last_addresses[key] = address
        if location:
            if key == "waypoint":
                session.add_waypoint(location)
            else:
                setattr(session, key, location)
            st.success("Plats hittad")
        else:
            st.error("Kunde inte hitta adressen")


def reset_route():
    """Callback för Återställ: körs före omritning så att adressfälten kan tömmas"""
    st.session_state.route_session.reset()
    st.session_state.last_addresses = {}
    for key in ADDRESS_KEYS:
        st.session_state[f"{key}_address"] = ""


def handle_map_click(map_data: dict, session: RouteSession):
    """Sätt plats från ett tryck på kartan"""
    clicked = (map_data or {}).get("last_clicked")
    if not clicked or clicked == st.session_state.last_click:
        return
    st.session_state.last_click = clicked

    lat, lng = clicked["lat"], clicked["lng"]
    name = get_geocode_cache().reverse_geocode(lat, lng)
    location = Location.from_tap(lat, lng, name)

    mode = st.session_state.map_click_mode
    if mode == "waypoint":
        session.add_waypoint(location)
    else:
        setattr(session, mode, location)
    st.rerun()


def sidebar(session: RouteSession):
    with st.sidebar:
        st.header("Inställningar")

        address_input("Startadress", "origin", session)
        address_input("Måladress", "destination", session)
        address_input("Lägg till via-punkt", "waypoint", session)

        st.radio(
            "Kartklick sätter",
            ["origin", "destination", "waypoint"],
            format_func=lambda x: {"origin": "Start", "destination": "Mål", "waypoint": "Via-punkt"}[x],
            key="map_click_mode"
        )

        for i, waypoint in enumerate(session.waypoints):
            col_name, col_remove = st.columns([4, 1])
            col_name.write(f"Via {i + 1}: {waypoint.name or ''}")
            if col_remove.button("✕", key=f"remove_wp_{i}"):
                session.remove_waypoint(i)
                st.rerun()

        st.divider()

        pace_str = st.text_input("Tempo (min/km)", value=format_pace(session.pace))
        pace = parse_pace(pace_str)
        if pace != session.pace:
            session.set_pace(pace)

        col_gen, col_reset = st.columns(2)
        with col_gen:
            generate_button = st.button("Generera rutt", type="primary", use_container_width=True)
        with col_reset:
            st.button("Återställ", type="secondary", use_container_width=True, on_click=reset_route)

        if generate_button:
            run_route_request(session)


def summary(session: RouteSession):
    st.subheader("Sammanfattning")

    stats = session.stats
    if not stats:
        st.info("Generera en rutt för att se sammanfattning")
        return

    st.metric("Distans", stats.distance_label)
    st.metric("Höjdökning", stats.elevation_gain_label or "-")
    st.metric("Uppskattad tid", stats.estimated_time or "-")
    st.caption(f"Tempo {format_pace(stats.pace)} min/km")

    if stats.elevation_profile:
        st.line_chart(
            {
                "distans (m)": [p.distance for p in stats.elevation_profile],
                "höjd (m)": [p.elevation for p in stats.elevation_profile],
            },
            x="distans (m)",
            y="höjd (m)"
        )

    st.divider()

    route_name = st.text_input(
        "Ruttnamn",
        value=f"{DEFAULT_ROUTE_NAME} {datetime.now().strftime('%Y-%m-%d')}",
        key="route_name"
    )

    col_save, col_gpx = st.columns(2)
    with col_save:
        if st.button("Spara rutt", use_container_width=True):
            try:
                st.session_state.saved_routes.save(session.to_saved_route_data(route_name))
                st.success("Rutt sparad")
            except RoutePlannerError as e:
                show_error(e)
            except (OSError, ValueError):
                st.error("Kunde inte spara rutten. Försök igen.")
    with col_gpx:
        st.download_button(
            label="Ladda ner GPX",
            data=create_gpx(session.path, route_name, stats),
            file_name=f"{route_name.replace(' ', '_')}.gpx",
            mime="application/gpx+xml",
            use_container_width=True
        )


def saved_routes_panel(session: RouteSession):
    saved = st.session_state.saved_routes
    st.subheader(f"Sparade rutter ({saved.count}/{saved.max_routes})")

    if not saved.routes:
        st.info("Inga sparade rutter")
        return

    for route in saved.routes:
        created = datetime.fromtimestamp(route.created_at / 1000).strftime("%Y-%m-%d %H:%M")
        with st.container(border=True):
            st.markdown(f"**{route.name}**")
            st.caption(f"{route.origin.name or ''} → {route.destination.name or ''}")
            st.caption(f"{route.distance_label} · {route.elevation_gain_label or '-'} · {created}")
            col_load, col_delete = st.columns(2)
            if col_load.button("Visa", key=f"load_{route.id}", use_container_width=True):
                try:
                    session.load_saved_route(route)
                except RoutePlannerError as e:
                    show_error(e)
                else:
                    st.rerun()
            if col_delete.button("Ta bort", key=f"delete_{route.id}", use_container_width=True):
                saved.delete(route.id)
                st.rerun()


def main():
    """Huvudfunktion för Streamlit-appen"""
    st.set_page_config(
        page_title="Gångruttplanerare",
        page_icon="🚶",
        layout="wide"
    )

    init_session_state()
    session = st.session_state.route_session

    st.title("Gångruttplanerare")
    st.markdown("Planera din promenad med via-punkter, höjdprofil och uppskattad tid")

    sidebar(session)

    col1, col2 = st.columns([2, 1])

    with col1:
        st.subheader("Karta")

        if session.origin:
            center = [session.origin.latitude, session.origin.longitude]
        else:
            center = DEFAULT_CENTER

        m = create_map(
            center,
            session.path,
            session.origin,
            session.destination,
            session.waypoints,
            session.distance_label
        )

        map_data = st_folium(
            m,
            key="map",
            width=None,
            height=500
        )
        handle_map_click(map_data, session)

    with col2:
        summary(session)

    st.divider()
    saved_routes_panel(session)


if __name__ == "__main__":
    main()
