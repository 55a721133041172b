from __future__ import annotations

from typing import Tuple

import streamlit as st


def _badge(text: str, kind: str = "info") -> None:
    """Small colored badge using HTML."""
    color = {
        "ok": "#0f9d58",
        "warn": "#f4b400",
        "bad": "#db4437",
        "info": "#4285f4",
    }.get(kind, "#4285f4")
    st.markdown(
        f"""
        <span style="display:inline-block;padding:2px 10px;border-radius:999px;font-size:12px;background:{color};color:white;">
          {text}
        </span>
        """,
        unsafe_allow_html=True,
    )


def _solver_badge(status: str) -> Tuple[str, str]:
    return {
        "solved": ("Solved", "ok"),
        "already_reached": ("Already on track", "info"),
        "bracket_exceeded": ("Beyond search range", "warn"),
    }.get(status, (status, "info"))
