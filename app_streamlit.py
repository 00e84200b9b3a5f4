import streamlit as st

from domain.vehicle import VehicleDescriptor
from matching.engine import rank_catalog, build_vehicle_query
from matching.query_parser import parse_search_query
from matching.suggestions import search_suggestions
from services.catalog import HostedCatalog, load_catalog
from services.http import ProviderError
from services.settings import Settings, configure_logging

settings = Settings.from_env()
configure_logging(settings.log_level)

st.set_page_config(page_title="PartMatch — Parts Search", layout="wide")

st.title("PartMatch — Vehicle Parts Search")

with st.sidebar:
    st.header("Catalog")
    sources = ["Local file", "Hosted"] if settings.has_hosted_catalog else ["Local file"]
    source = st.radio("Source", sources, index=0)
    catalog_path = st.text_input("Catalog path", value=settings.catalog_path)

    st.header("My vehicle (optional)")
    year = st.text_input("Year", value="")
    make = st.text_input("Make", value="")
    model = st.text_input("Model", value="")

    top_n = st.slider("Top N", min_value=5, max_value=50, value=15, step=1)


@st.cache_data(ttl=settings.cache_ttl_minutes * 60, show_spinner=False)
def _products(source: str, path: str):
    if source == "Hosted":
        return HostedCatalog(settings).fetch_products()
    return load_catalog(path)


typed = st.text_input("Search parts", value="", placeholder="e.g. 2017 toyota corolla battery")
vehicle = VehicleDescriptor(year=year.strip(), make=make.strip().lower(), model=model.strip().lower())
query = build_vehicle_query(vehicle, typed.strip()) if vehicle.has_info else typed.strip()

if typed:
    hints = search_suggestions(typed)
    if hints:
        st.caption("Try: " + " · ".join(hints))

if query:
    try:
        products = _products(source, catalog_path)
    except (FileNotFoundError, ValueError, ProviderError) as e:
        st.error(f"Failed to load catalog: {e}")
        st.stop()

    parsed = parse_search_query(query)
    with st.expander("How we read your search"):
        st.json(parsed.to_dict())

    df = rank_catalog(query, products, top_n=int(top_n))
    if df.empty:
        st.warning("The catalog is empty.")
    else:
        st.success(f"Ranked {len(df)} of {len(products)} products")
        st.dataframe(df, use_container_width=True)
