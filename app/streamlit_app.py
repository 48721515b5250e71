from pathlib import Path
from typing import List

import matplotlib

matplotlib.use("Agg")

import pandas as pd
import streamlit as st

from dsblog.charts.buttons import dataset_switch_figure, flavour_figure, sales_by_year
from dsblog.config import METADATA_FILE, MODEL_FILE, configure_logging
from dsblog.data.toy import airbnb_listings, ice_cream_sales
from dsblog.exceptions import ModelNotTrainedError
from dsblog.features.build_features import nullity_summary, prune_columns
from dsblog.features.plots import PLOTTERS, plot_nullity
from dsblog.models.predict import predict_price
from dsblog.posts import build_index, load_posts

configure_logging()
st.set_page_config(page_title="dsblog", layout="wide")
st.title("dsblog")


@st.cache_data
def load_listings() -> pd.DataFrame:
    return prune_columns(airbnb_listings())


@st.cache_data
def load_sales() -> pd.DataFrame:
    return ice_cream_sales()


@st.cache_data
def load_index() -> pd.DataFrame:
    return build_index(load_posts())


def get_category_options(df: pd.DataFrame, column: str) -> List[str]:
    if column not in df.columns:
        return []
    return sorted(df[column].dropna().astype(str).unique().tolist())


listings = load_listings()
posts_tab, nullity_tab, charts_tab, predict_tab = st.tabs(["Posts", "Missing data", "Charts", "Price"])

with posts_tab:
    index = load_index()
    st.dataframe(index, use_container_width=True, hide_index=True)

with nullity_tab:
    kind = st.selectbox("Plot", list(PLOTTERS), index=0)
    st.pyplot(plot_nullity(listings, kind))
    st.dataframe(nullity_summary(listings), use_container_width=True)

with charts_tab:
    sales = load_sales()
    flavour = st.selectbox("Flavour", ["all"] + get_category_options(sales, "flavour"))
    datasets = sales_by_year(sales, flavour=None if flavour == "all" else flavour)
    st.plotly_chart(dataset_switch_figure(datasets, "month_name", "sales", title="Ice-cream sales"))
    st.plotly_chart(flavour_figure(sales))

with predict_tab:
    if not Path(MODEL_FILE).exists():
        st.info("No trained model yet. Run `python -m dsblog.models.train` first.")

    col1, col2 = st.columns([2, 1])
    with col1:
        input_dict = {
            "neighbourhood": st.selectbox("Neighbourhood", get_category_options(listings, "neighbourhood")),
            "room_type": st.selectbox("Room Type", get_category_options(listings, "room_type")),
            "property_type": st.selectbox("Property Type", get_category_options(listings, "property_type")),
            "accommodates": st.number_input("Accommodates", 1, 16, 2, step=1),
            "bedrooms": st.number_input("Bedrooms", 0, 10, 1, step=1),
            "beds": st.number_input("Beds", 0, 16, 1, step=1),
            "bathrooms": st.number_input("Bathrooms", 0.0, 10.0, 1.0, step=0.5),
            "minimum_nights": st.number_input("Minimum nights", 1, 27, 2, step=1),
        }
    with col2:
        if st.button("Predict Price"):
            try:
                price = predict_price(input_dict, model_file=MODEL_FILE, metadata_file=METADATA_FILE)
                st.markdown(f"<h1 style='margin:0'>€{price:,.2f}</h1>", unsafe_allow_html=True)
                st.caption("Predicted price per night")
            except ModelNotTrainedError as e:
                st.error(f"Prediction failed: {e}")
