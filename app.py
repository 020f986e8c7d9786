"""
Image Compressor - Streamlit Application

Resize images to bounding dimensions, re-encode them as JPEG or PNG,
or search for the highest JPEG quality that fits a file size budget.
"""

import io
import logging
import time
from typing import Dict, Any, Optional

import numpy as np
import streamlit as st

from config import load_config, options_from_config, compressor_from_config, setup_logging
from compression import (
    CompressionOptions,
    CompressionError,
    Quality,
    compress_jpeg,
    compress_png,
    fit_image,
    calculate_metrics
)
from compression.metrics import get_quality_assessment
from utils.image_utils import load_image, bgr_to_pil, get_image_info
from utils.visualization import plot_quality_size_curve, create_metrics_dashboard


logger = logging.getLogger("app")

MODES = ["JPEG (quality)", "PNG (lossless)", "JPEG (target size)"]

st.set_page_config(
    page_title="Image Compressor",
    page_icon="🗜️",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown("""
<style>
    .main-header {
        font-size: 2.3rem;
        font-weight: 700;
        text-align: center;
        margin-bottom: 0.5rem;
    }

    .sub-header {
        color: #7f8c8d;
        text-align: center;
        font-size: 1.05rem;
        margin-bottom: 2rem;
    }

    #MainMenu {visibility: hidden;}
    footer {visibility: hidden;}
</style>
""", unsafe_allow_html=True)


def init_session_state():
    """Initialize session state variables."""
    if 'result' not in st.session_state:
        st.session_state.result = None
    if 'source_name' not in st.session_state:
        st.session_state.source_name = None


def run_compression(image: np.ndarray, mode: str,
                    options: CompressionOptions,
                    target_kb: float,
                    config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Compress an image in the selected mode.

    Args:
        image: Decoded input image
        mode: One of MODES
        options: Quality and bounding dimensions
        target_kb: Size budget for target-size mode
        config: Effective configuration

    Returns:
        Dictionary describing the output
    """
    start_time = time.time()
    fitted = fit_image(image, options.max_width, options.max_height)
    result: Dict[str, Any] = {'mode': mode, 'width': fitted.shape[1], 'height': fitted.shape[0]}

    if mode == "PNG (lossless)":
        buffer = io.BytesIO()
        compress_png(fitted, buffer)
        result.update(image_bytes=buffer.getvalue(), quality=None,
                      mime="image/png", extension="png")
    elif mode == "JPEG (target size)":
        compressor = compressor_from_config(config)
        target_bytes = int(target_kb * 1024)
        search = compressor.compress_to_target_size(fitted, target_bytes)
        result.update(image_bytes=search.image_bytes, quality=search.quality,
                      mime="image/jpeg", extension="jpg",
                      target_kb=target_kb, within_target=search.within_target,
                      iterations=search.iterations,
                      curve=compressor.get_quality_vs_size_curve(fitted))
    else:
        buffer = io.BytesIO()
        compress_jpeg(fitted, buffer, options)
        result.update(image_bytes=buffer.getvalue(), quality=options.quality,
                      mime="image/jpeg", extension="jpg")

    result['metrics'] = calculate_metrics(fitted, result['image_bytes'])
    result['time'] = time.time() - start_time
    logger.info("%s: %d bytes in %.1fms", mode, len(result['image_bytes']), result['time'] * 1000)
    return result


def display_result(result: Dict[str, Any], original_size: int):
    """Display a compression result with metrics and download."""
    metrics = result['metrics']
    size_kb = len(result['image_bytes']) / 1024.0

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Output size", f"{size_kb:.1f} KB")
    col2.metric("Dimensions", f"{result['width']}×{result['height']}")
    col3.metric("Quality", f"{result['quality']}" if result['quality'] is not None else "Lossless")
    if original_size:
        col4.metric("Vs. upload", f"{size_kb * 1024 / original_size * 100:.0f}%")

    if 'within_target' in result:
        if result['within_target']:
            st.success(f"Fits {result['target_kb']:.0f} KB at quality {result['quality']} "
                       f"after {result['iterations']} attempt(s).")
        else:
            st.warning(f"Could not reach {result['target_kb']:.0f} KB; "
                       f"returning the quality {result['quality']} encoding.")

    tab1, tab2 = st.tabs(["📊 Metrics", "📈 Quality vs. Size"])

    with tab1:
        st.plotly_chart(create_metrics_dashboard(metrics), width='stretch')
        assessment = get_quality_assessment(metrics)
        st.caption(f"PSNR: {assessment['psnr_rating']} · SSIM: {assessment['ssim_rating']}")
        st.json(assessment['details'])

    with tab2:
        if 'curve' in result:
            fig = plot_quality_size_curve(result['curve'], result['target_kb'], result['quality'])
            st.plotly_chart(fig, width='stretch')
        else:
            st.info("Run a target-size compression to see the quality curve.")

    st.download_button(
        label="📥 Download",
        data=result['image_bytes'],
        file_name=f"compressed.{result['extension']}",
        mime=result['mime']
    )


def main():
    """Main application entry point."""
    config = load_config()
    setup_logging(config)
    init_session_state()

    st.markdown('<h1 class="main-header">Image Compressor</h1>', unsafe_allow_html=True)
    st.markdown('<p class="sub-header">Resize, re-encode, or fit images into a size budget</p>',
                unsafe_allow_html=True)

    defaults = options_from_config(config)

    with st.sidebar:
        st.markdown("## ⚙️ Settings")

        mode = st.radio("Mode", MODES)

        preset = st.selectbox("Quality preset", [q.name.title() for q in Quality] + ["Custom"],
                              index=len(Quality))
        if preset == "Custom":
            quality = st.slider("JPEG quality", 1, 100, defaults.quality)
        else:
            quality = int(Quality[preset.upper()])

        st.markdown("---")
        st.markdown("### Bounding Box")
        max_width = st.number_input("Max width (0 = none)", min_value=0, value=defaults.max_width, step=1)
        max_height = st.number_input("Max height (0 = none)", min_value=0, value=defaults.max_height, step=1)

        target_kb: Optional[float] = None
        if mode == "JPEG (target size)":
            st.markdown("---")
            target_kb = st.selectbox("Target size (KB)", config["compression_targets_kb"], index=1)

    uploaded = st.file_uploader("Upload an image", type=["jpg", "jpeg", "png", "bmp", "tif", "tiff", "webp"])
    if uploaded is None:
        st.info("Upload an image to get started.")
        return

    data = uploaded.getvalue()
    try:
        image = load_image(data)
    except CompressionError as e:
        st.error(f"Could not read image: {e}")
        return

    info = get_image_info(image)
    col1, col2 = st.columns(2)
    with col1:
        st.markdown("#### Original")
        st.image(bgr_to_pil(image), width='stretch')
        st.caption(f"{info['width']}×{info['height']}, {info['channels']} channel(s), "
                   f"{len(data) / 1024:.1f} KB")

    options = CompressionOptions(quality=quality, max_width=int(max_width), max_height=int(max_height))

    if st.button("🗜️ Compress", type="primary"):
        with st.spinner("Compressing..."):
            try:
                st.session_state.result = run_compression(image, mode, options, target_kb or 0, config)
                st.session_state.source_name = uploaded.name
            except CompressionError as e:
                st.session_state.result = None
                st.error(f"Compression failed: {e}")

    result = st.session_state.result
    if result is not None and st.session_state.source_name == uploaded.name:
        with col2:
            st.markdown("#### Compressed")
            st.image(bgr_to_pil(load_image(result['image_bytes'])), width='stretch')
        st.markdown("---")
        display_result(result, len(data))


if __name__ == "__main__":
    main()
