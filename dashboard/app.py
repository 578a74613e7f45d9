import pandas as pd
import streamlit as st

# Configuration
from dashboard.config import get_config
from dashboard.logging import get_logger

from dashboard.analytics import percent_change
from dashboard.data.models import Granularity
from dashboard.errors import DataSourceError
from dashboard.services import DashboardService

st.set_page_config(page_title="Store Orders Dashboard", layout="wide")

config = get_config()
logger = get_logger(__name__)
service = DashboardService(config=config)

# -----------------------------------------------------------------------------
# Sidebar: time range + navigation
# -----------------------------------------------------------------------------
st.sidebar.header("Time Range")
granularities = list(Granularity)
granularity = st.sidebar.selectbox(
    "Granularity",
    granularities,
    index=granularities.index(Granularity.parse(config.default_granularity)),
    format_func=lambda g: g.label,
)
page_sel = st.sidebar.radio("Page", ["Dashboard", "Products"])


def render_dashboard() -> None:
    st.title("Dashboard")

    stats = service.period_stats(granularity)
    series = service.revenue_series(granularity)

    if stats.is_sample or series.is_sample:
        st.warning("Order data could not be loaded. The figures below are **sample data**, not your store.")
    if series.excluded_count:
        st.info(f"{series.excluded_count} order(s) had an unreadable creation time and were left out.")

    # -------------------------------------------------------------------------
    # KPI cards (current vs previous period)
    # -------------------------------------------------------------------------
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total Revenue", f"${stats.current_revenue:,.0f}",
              f"{percent_change(stats.current_revenue, stats.previous_revenue):+.1f}%")
    c2.metric("Order Count", f"{stats.current_order_count:,}",
              f"{percent_change(stats.current_order_count, stats.previous_order_count):+.1f}%")
    c3.metric("Average Order Value", f"${stats.current_avg_value:,.0f}",
              f"{percent_change(stats.current_avg_value, stats.previous_avg_value):+.1f}%")
    c4.metric("Payment Rate", f"{stats.current_paid_rate:.1f}%",
              f"{percent_change(stats.current_paid_rate, stats.previous_paid_rate):+.1f}%")

    frame = series.to_frame()
    if frame.empty:
        st.info("No orders yet.")
        return

    # -------------------------------------------------------------------------
    # Charts
    # -------------------------------------------------------------------------
    st.markdown(f"### Revenue Trends ({granularity.value})")
    revenue = frame.set_index("bucket_key")[["revenue_sum", "received_revenue_sum", "average_order_value"]]
    st.line_chart(
        revenue.rename(columns={
            "revenue_sum": "Total Revenue",
            "received_revenue_sum": "Received Revenue",
            "average_order_value": "Avg Order Value",
        }),
        use_container_width=True,
    )

    st.markdown(f"### Order Count ({granularity.value})")
    counts = frame.set_index("bucket_key")[["paid_order_count", "unpaid_order_count"]]
    st.bar_chart(
        counts.rename(columns={"paid_order_count": "Paid", "unpaid_order_count": "Unpaid"}),
        use_container_width=True,
    )

    with st.expander("Bucket details"):
        st.dataframe(frame.set_index("label"), use_container_width=True)


def render_products() -> None:
    st.title("Products")

    page = int(st.sidebar.number_input("Products page", min_value=1, value=1, step=1))
    try:
        result = service.list_products(page=page)
    except DataSourceError as e:
        logger.error(f"Failed to load products: {e}")
        st.error(f"Error: {e}")
        return

    if not result.items:
        st.info("No products found")
        return

    st.caption(f"Page {result.page} of {result.total_pages} · {result.total_count} products")
    table = pd.DataFrame([
        {
            "Product": p.product_name,
            "Vendor": p.vendor,
            "Type": p.product_type,
            "Price": p.price_label(),
            "Stock": "In Stock" if p.in_stock else "Out of Stock",
            "Status": p.status,
        }
        for p in result.items
    ])
    st.dataframe(table, use_container_width=True, hide_index=True)

    selected = st.selectbox("Product details", [p.shopify_id for p in result.items],
                            format_func=lambda pid: next(p.product_name for p in result.items if p.shopify_id == pid))
    product = service.get_product(selected)
    if product is not None:
        with st.expander(product.product_name, expanded=True):
            if product.image_url:
                st.image(product.image_url, caption=product.image_alt_text or product.product_name, width=320)
            st.write(product.description or "")
            st.write({
                "Price": product.price_label(),
                "Inventory": product.total_inventory,
                "Variants": product.variant_count,
                "Handle": product.handle,
                "Preview": product.preview_url,
            })


if page_sel == "Dashboard":
    render_dashboard()
else:
    render_products()
