"""Streamlit GUI for tolerance stack-up and hole-pattern fit analysis.

Launch with:
    streamlit run tolstack/gui.py
    # or
    python -m streamlit run tolstack/gui.py
"""

from __future__ import annotations

import streamlit as st

from tolstack.export import default_filename, generate_spreadsheet_xml
from tolstack.holefit import AssemblyMode, FitStatus, HoleFitSetup
from tolstack.models import Dimension, DimensionType, Misalignment, PartDimension, Unit
from tolstack.narrative import narrate_stackup
from tolstack.scenarios import (
    HOLE_SCENARIOS, STACK_EXAMPLES, create_hole_setup, create_stack,
    default_hole_setup, default_stack,
)
from tolstack.stackup import StackStatus, compute_stackup, stackup_status, status_message
from tolstack.statistics import percent_contribution
from tolstack.visualization import (
    PLOTLY_AVAILABLE, gap_distribution_figure, misalignment_figure, stack_chain_figure,
)

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="TolStack",
    page_icon="\U0001F4D0",
    layout="wide",
)

st.title("TolStack - Tolerance Stack-up Analyzer")

tab_linear, tab_hole = st.tabs(["Linear Stack", "Hole Pattern"])


def _show_figure(fig) -> None:
    """Render a plotly figure (None when plotly is not installed)."""
    if fig is not None:
        st.plotly_chart(fig, use_container_width=True)
    elif not PLOTLY_AVAILABLE:
        st.info("Install plotly for interactive charts.")


# ===================================================================
# TAB 1: Linear stack
# ===================================================================

with tab_linear:
    st.header("Linear Tolerance Stack")
    st.markdown("Increasing dimensions open the gap, decreasing dimensions close it. "
                "Results recompute on every change.")

    if "ls_dimensions" not in st.session_state:
        st.session_state["ls_dimensions"] = default_stack().dimensions
        st.session_state["ls_review"] = ""

    col_def, col_results = st.columns([1, 1])

    with col_def:
        c_ex, c_reset = st.columns([3, 1])
        with c_ex:
            example_key = st.selectbox("Load example", ["-"] + list(STACK_EXAMPLES), key="ls_example")
            if example_key != "-" and st.button("Load", key="ls_load"):
                st.session_state["ls_dimensions"] = create_stack(example_key).dimensions
                st.session_state["ls_review"] = ""
                st.rerun()
        with c_reset:
            if st.button("Reset", key="ls_reset"):
                st.session_state["ls_dimensions"] = default_stack().dimensions
                st.session_state["ls_review"] = ""
                st.rerun()

        st.subheader("Dimensions")
        dims: list[Dimension] = st.session_state["ls_dimensions"]

        for d in list(dims):
            with st.expander(f"{'+' if d.direction is DimensionType.INCREASING else '-'} "
                             f"{d.name}: {d.nominal:.3f} +{d.tolerance_plus:.3f}/-{d.tolerance_minus:.3f}"):
                d.name = st.text_input("Name", d.name, key=f"ls_name_{d.id}")
                d.description = st.text_input("Description", d.description, key=f"ls_desc_{d.id}")
                c1, c2 = st.columns(2)
                with c1:
                    d.nominal = st.number_input("Nominal", value=float(d.nominal),
                                                format="%.3f", key=f"ls_nom_{d.id}")
                    d.direction = DimensionType(st.selectbox(
                        "Direction", [t.value for t in DimensionType],
                        index=[t for t in DimensionType].index(d.direction),
                        key=f"ls_dir_{d.id}"))
                with c2:
                    d.tolerance_plus = st.number_input("Tol (+)", value=float(d.tolerance_plus),
                                                       format="%.3f", key=f"ls_plus_{d.id}")
                    d.tolerance_minus = st.number_input("Tol (-)", value=float(d.tolerance_minus),
                                                        format="%.3f", key=f"ls_minus_{d.id}")
                if st.button("Remove", key=f"ls_del_{d.id}"):
                    st.session_state["ls_dimensions"] = [x for x in dims if x.id != d.id]
                    st.rerun()

        if st.button("Add dimension", key="ls_add"):
            dims.append(Dimension(f"New Component {len(dims) + 1}", 10.0, 0.1, 0.1))
            st.rerun()

        st.download_button(
            "Export to Excel (XML)",
            data=generate_spreadsheet_xml(dims),
            file_name=default_filename(),
            mime="application/xml",
            key="ls_export",
        )

    with col_results:
        result = compute_stackup(dims)
        status = stackup_status(result)
        message = status_message(result)
        if status is StackStatus.FAIL:
            st.error(message)
        elif status is StackStatus.RISK:
            st.warning(message)
        else:
            st.success(message)

        m1, m2, m3 = st.columns(3)
        m1.metric("Nominal gap", f"{result.nominal_gap:.3f}")
        m2.metric("Worst case", f"{result.worst_case_min:.3f} / {result.worst_case_max:.3f}")
        m3.metric("RSS (3 sigma)", f"{result.rss_min:.3f} / {result.rss_max:.3f}")
        st.caption(f"Estimated interference probability: "
                   f"{result.interference_probability_percent:.2f}%")

        _show_figure(stack_chain_figure(dims))
        _show_figure(gap_distribution_figure(result))

        pct = percent_contribution(dims)
        if pct:
            st.markdown("**Percent Contribution (RSS)**")
            st.table({"Dimension": [p[0] for p in pct],
                      "Contribution (%)": [round(p[1], 2) for p in pct]})

        st.subheader("Engineering Review")
        if st.button("Generate review", key="ls_review_btn", disabled=len(dims) == 0):
            with st.spinner("Asking the model..."):
                st.session_state["ls_review"] = narrate_stackup(dims, result)
        if st.session_state["ls_review"]:
            st.markdown(st.session_state["ls_review"])


# ===================================================================
# TAB 2: Hole pattern
# ===================================================================

def _part_inputs(label: str, part: PartDimension, prefix: str, rev: int,
                 with_spec: bool = True) -> PartDimension:
    st.markdown(f"**{label}**")
    c1, c2, c3, c4 = st.columns(4)
    nominal = c1.number_input("Nominal", value=float(part.nominal), format="%.4f",
                              key=f"{prefix}_nom_{rev}")
    tol_plus = c2.number_input("Tol (+)", value=float(part.tol_plus), format="%.4f",
                               key=f"{prefix}_plus_{rev}")
    tol_minus = c3.number_input("Tol (-)", value=float(part.tol_minus), format="%.4f",
                                key=f"{prefix}_minus_{rev}")
    spec = part.position_tolerance_spec
    if with_spec:
        spec = c4.number_input("Position tol", value=float(spec), format="%.4f",
                               key=f"{prefix}_tp_{rev}")
    return PartDimension(nominal, tol_plus, tol_minus, spec)


with tab_hole:
    st.header("Hole Pattern Fit")
    st.markdown("Floating or fixed fastener check at maximum material condition, "
                "with a misalignment simulation.")

    if "hf_setup" not in st.session_state:
        st.session_state["hf_setup"] = default_hole_setup()
        st.session_state["hf_rev"] = 0

    setup: HoleFitSetup = st.session_state["hf_setup"]
    rev = st.session_state["hf_rev"]

    col_in, col_out = st.columns([5, 7])

    with col_in:
        c_sc, c_unit, c_reset = st.columns([3, 1, 1])
        with c_sc:
            scenario = st.selectbox("Load scenario", ["-"] + list(HOLE_SCENARIOS), key="hf_scenario")
            if scenario != "-" and st.button("Load", key="hf_load"):
                st.session_state["hf_setup"] = create_hole_setup(scenario)
                st.session_state["hf_rev"] = rev + 1
                st.rerun()
        with c_unit:
            if st.button(setup.unit.value, key="hf_unit", help="Toggle mm / inch"):
                target = Unit.INCH if setup.unit is Unit.MM else Unit.MM
                st.session_state["hf_setup"] = setup.convert(target)
                st.session_state["hf_rev"] = rev + 1
                st.rerun()
        with c_reset:
            if st.button("Reset", key="hf_reset"):
                st.session_state["hf_setup"] = default_hole_setup()
                st.session_state["hf_rev"] = rev + 1
                st.rerun()

        mode = AssemblyMode(st.radio(
            "Assembly mode", [m.value for m in AssemblyMode],
            index=[m for m in AssemblyMode].index(setup.mode),
            horizontal=True, key=f"hf_mode_{rev}"))

        pin = _part_inputs("Fastener (pin)", setup.pin, "hf_pin", rev, with_spec=False)
        hole1 = _part_inputs("Hole - plate 1", setup.hole1, "hf_h1", rev)
        hole2 = _part_inputs("Hole - plate 2" + (" (threaded)" if mode is AssemblyMode.FIXED else ""),
                             setup.hole2, "hf_h2", rev)

        st.markdown("**Misalignment simulation**")
        span = max(abs(setup.hole1.nominal) / 4, abs(setup.deviation.x), abs(setup.deviation.y), 0.01)
        dx = st.slider("X offset", -span, span, float(setup.deviation.x),
                       step=span / 100, key=f"hf_dx_{rev}")
        dy = st.slider("Y offset", -span, span, float(setup.deviation.y),
                       step=span / 100, key=f"hf_dy_{rev}")

        setup = HoleFitSetup(pin=pin, hole1=hole1, hole2=hole2, mode=mode,
                             deviation=Misalignment(dx, dy), unit=setup.unit,
                             name=setup.name)
        st.session_state["hf_setup"] = setup

    with col_out:
        analysis = setup.analyze()
        unit = setup.unit.value

        if analysis.status is FitStatus.FAIL:
            st.error("Position tolerance exceeds the available clearance")
        else:
            st.success("Position tolerance fits the available clearance")
        st.info(analysis.recommendation)

        m1, m2, m3 = st.columns(3)
        m1.metric("Fastener MMC", f"{analysis.pin_mmc:.4f} {unit}")
        m2.metric("Hole 1 MMC", f"{analysis.hole1_mmc:.4f} {unit}")
        m3.metric("Max allowable TP", f"{analysis.max_allowable_position_tolerance:.4f} {unit}")

        s1, s2, s3 = st.columns(3)
        s1.metric("Actual TP", f"{analysis.actual_true_position_diameter:.3f}")
        s2.metric("Radial offset", f"{analysis.actual_radial_offset:.3f}")
        s3.metric("Radial clearance", f"{analysis.radial_clearance:.3f}")

        if analysis.is_simulated_interference:
            st.error("Simulated offset: fastener hits the hole wall")
        else:
            st.success("Simulated offset: fastener clears the hole")

        _show_figure(misalignment_figure(analysis, setup.deviation))
